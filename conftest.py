"""Pytest root configuration; puts the repository root on sys.path."""
