"""Utility modules for spherical k-means."""

from .io import read_json, write_json, ensure_directory
from .logging import get_logger, set_level
from .numpy_helpers import to_numpy_array, labels_to_groups
from .validation import validate_file_exists, validate_matrix

__all__ = [
    'read_json',
    'write_json',
    'ensure_directory',
    'get_logger',
    'set_level',
    'to_numpy_array',
    'labels_to_groups',
    'validate_file_exists',
    'validate_matrix'
]
