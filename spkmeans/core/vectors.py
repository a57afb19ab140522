"""Vector algebra primitives over fixed-length float vectors.

All functions operate on 1-D numpy arrays (``*_rows_*`` variants on 2-D
matrices). The ``*_in_place`` variants write into their argument and return
it; the rest have no side effects. None of them share state, so disjoint
vectors may be processed from different threads.
"""

import numpy as np

from ..exceptions import DegenerateVectorError


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """
    Sum of elementwise products.
    
    Raises:
        ValueError: If the vectors differ in length
    """
    if a.shape != b.shape:
        raise ValueError(f"Vector lengths differ: {a.shape} vs {b.shape}")
    return np.dot(a, b)


def norm(a: np.ndarray) -> float:
    """Euclidean norm, sqrt(dot(a, a))."""
    return np.sqrt(np.dot(a, a))


def vec_sum(group: np.ndarray) -> np.ndarray:
    """
    Elementwise sum across a group of vectors.
    
    Args:
        group: Matrix whose rows are the member vectors
        
    Returns:
        New vector of the row length
        
    Raises:
        ValueError: If the group is empty
    """
    if group.ndim != 2:
        raise ValueError(f"Expected 2D group of vectors, got shape {group.shape}")
    if group.shape[0] == 0:
        raise ValueError("Cannot sum an empty group of vectors")
    return group.sum(axis=0)


def scale_in_place(a: np.ndarray, s: float) -> np.ndarray:
    """Multiply every element by s."""
    a *= s
    return a


def divide_in_place(a: np.ndarray, s: float) -> np.ndarray:
    """
    Divide every element by s.
    
    Raises:
        DegenerateVectorError: If s is zero
    """
    if s == 0:
        raise DegenerateVectorError("Division of a vector by zero")
    a /= s
    return a


def normalize_in_place(a: np.ndarray) -> np.ndarray:
    """
    Scale a to unit Euclidean norm.
    
    Raises:
        DegenerateVectorError: If a is the zero vector
    """
    n = norm(a)
    if n == 0:
        raise DegenerateVectorError("Cannot normalize the zero vector")
    return divide_in_place(a, n)


def normalize_rows_in_place(matrix: np.ndarray) -> np.ndarray:
    """
    Scale every row of matrix to unit Euclidean norm.
    
    Args:
        matrix: 2-D float array, modified in place
        
    Returns:
        The same matrix
        
    Raises:
        DegenerateVectorError: If any row is all zeros (reports the first)
    """
    norms = np.sqrt(np.einsum('ij,ij->i', matrix, matrix))
    zero_rows = np.flatnonzero(norms == 0)
    if zero_rows.size:
        raise DegenerateVectorError(
            f"Cannot normalize zero vector at row {int(zero_rows[0])} "
            f"({zero_rows.size} zero rows in total)"
        )
    matrix /= norms[:, np.newaxis]
    return matrix


def cosine_similarity(vector1: np.ndarray, 
                     vector2: np.ndarray) -> float:
    """
    Calculate cosine similarity between two vectors.
    
    Args:
        vector1: First vector
        vector2: Second vector
        
    Returns:
        Cosine similarity (-1 to 1), 0.0 if either vector is zero
    """
    v1 = vector1.flatten()
    v2 = vector2.flatten()
    
    dot_product = np.dot(v1, v2)
    norm1 = np.linalg.norm(v1)
    norm2 = np.linalg.norm(v2)
    
    if norm1 == 0 or norm2 == 0:
        return 0.0
    
    return float(dot_product / (norm1 * norm2))
