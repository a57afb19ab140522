"""Numeric primitives."""

from .vectors import (
    dot,
    norm,
    vec_sum,
    scale_in_place,
    divide_in_place,
    normalize_in_place,
    normalize_rows_in_place,
    cosine_similarity
)

__all__ = [
    'dot',
    'norm',
    'vec_sum',
    'scale_in_place',
    'divide_in_place',
    'normalize_in_place',
    'normalize_rows_in_place',
    'cosine_similarity'
]
