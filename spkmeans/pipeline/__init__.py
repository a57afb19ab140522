"""Pipeline components for document clustering."""

from .base import ClusteringPipeline
from .results import ResultManager

__all__ = [
    'ClusteringPipeline',
    'ResultManager'
]
