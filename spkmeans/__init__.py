"""Spherical k-means clustering of document vectors."""

from .config import VERSION, SPKMeansConfig
from .clustering import (
    ClusterState,
    SphericalKMeans,
    SPKMeansResult,
    run_spkmeans
)
from .exceptions import (
    SPKMeansError,
    InvalidParameterError,
    DegenerateVectorError,
    EmptyPartitionError,
    PartitionError,
    ConvergenceError
)

__version__ = VERSION

__all__ = [
    'SPKMeansConfig',
    'ClusterState',
    'SphericalKMeans',
    'SPKMeansResult',
    'run_spkmeans',
    'SPKMeansError',
    'InvalidParameterError',
    'DegenerateVectorError',
    'EmptyPartitionError',
    'PartitionError',
    'ConvergenceError'
]
