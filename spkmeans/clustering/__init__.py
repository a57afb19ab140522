"""Clustering engine, state and metrics."""

from .base import Clusterer
from .state import ClusterState
from .spherical import (
    SphericalKMeans,
    SPKMeansResult,
    run_spkmeans,
    refine,
    validate_parameters,
    txn_scheme,
    initial_partitions,
    compute_concept,
    compute_concepts,
    compute_quality,
    assign_partitions,
    resolve_empty_partitions
)
from .metrics import (
    partition_qualities,
    evaluate_clustering,
    cluster_cohesion,
    summarize_partitions
)

__all__ = [
    'Clusterer',
    'ClusterState',
    'SphericalKMeans',
    'SPKMeansResult',
    'run_spkmeans',
    'refine',
    'validate_parameters',
    'txn_scheme',
    'initial_partitions',
    'compute_concept',
    'compute_concepts',
    'compute_quality',
    'assign_partitions',
    'resolve_empty_partitions',
    'partition_qualities',
    'evaluate_clustering',
    'cluster_cohesion',
    'summarize_partitions'
]
