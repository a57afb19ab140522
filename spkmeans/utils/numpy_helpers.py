"""NumPy array utilities."""

import numpy as np
from typing import List, Union
from scipy.sparse import issparse


def to_numpy_array(data, dtype: Union[str, type] = np.float32) -> np.ndarray:
    """
    Convert data to a dense numpy array of the given dtype.
    
    Arrays that already have the requested dtype are returned as-is (no
    copy), so in-place operations on the result reach the caller's buffer.
    Sparse matrices are densified.
    
    Args:
        data: Input data (list, ndarray or scipy sparse matrix)
        dtype: Target data type
        
    Returns:
        NumPy array
    """
    if issparse(data):
        return data.toarray().astype(dtype, copy=False)
    if isinstance(data, np.ndarray):
        return data.astype(dtype, copy=False)
    return np.array(data, dtype=dtype)


def labels_to_groups(labels: np.ndarray, k: int) -> List[np.ndarray]:
    """
    Split a label array into k index groups, each in ascending order.
    
    Args:
        labels: Partition id per row
        k: Number of partitions
        
    Returns:
        List of k integer index arrays
    """
    labels = np.asarray(labels)
    return [np.flatnonzero(labels == i) for i in range(k)]
