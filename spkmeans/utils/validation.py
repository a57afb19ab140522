"""Input validation utilities."""

from pathlib import Path
from typing import Union

import numpy as np


def validate_file_exists(path: Union[str, Path]) -> Path:
    """
    Validate that file exists.
    
    Args:
        path: File path
        
    Returns:
        Path object
        
    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return path


def validate_matrix(matrix: np.ndarray) -> None:
    """
    Validate a document-term matrix.
    
    Raises:
        ValueError: If the matrix is not 2-D or holds NaN/inf values
    """
    if matrix.ndim != 2:
        raise ValueError(f"Expected 2D array, got {matrix.ndim}D array with shape {matrix.shape}")
    
    if not np.all(np.isfinite(matrix)):
        raise ValueError("Input contains NaN or infinite values")
