"""Command line interface."""

from .main import main, create_parser

__all__ = [
    'main',
    'create_parser'
]
