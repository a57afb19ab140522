"""Clustering metrics for spherical k-means results."""

import numpy as np
from typing import Dict, List, Optional
from scipy.spatial.distance import cdist
from sklearn.metrics import silhouette_score, calinski_harabasz_score, davies_bouldin_score

from .spherical import partition_quality
from .state import ClusterState


def partition_qualities(doc_matrix: np.ndarray, state: ClusterState) -> List[float]:
    """
    Quality of each partition: dot(sum(members), concept).
    
    Args:
        doc_matrix: Normalized document matrix the state indexes into
        state: Clustering result
        
    Returns:
        One quality value per partition (0.0 for empty partitions)
    """
    return [
        partition_quality(doc_matrix, partition, state.concepts[i]) if len(partition) else 0.0
        for i, partition in enumerate(state.partitions)
    ]


def evaluate_clustering(
    vectors: np.ndarray,
    labels: np.ndarray,
    sample_size: Optional[int] = None,
    random_state: int = 0
) -> Dict[str, float]:
    """
    Evaluate clustering quality using multiple metrics.
    
    Silhouette uses cosine distance to match the similarity the
    partitions were built with. It needs all pairwise distances, so on
    large inputs it is computed on a random sample of sample_size rows.
    
    Args:
        vectors: Document matrix
        labels: Partition labels
        sample_size: Rows used for the silhouette (all rows when None)
        random_state: Seed for the silhouette sample
        
    Returns:
        Dictionary of metric scores
    """
    labels = np.asarray(labels)
    n_clusters = len(set(labels.tolist()))
    
    metrics = {'n_clusters': n_clusters}
    
    # Only defined for 2 <= n_clusters <= n_samples - 1
    if 1 < n_clusters < len(labels):
        if sample_size is not None and sample_size >= len(labels):
            sample_size = None
        
        # Silhouette score (higher is better, -1 to 1)
        metrics['silhouette'] = float(silhouette_score(
            vectors, labels, metric='cosine',
            sample_size=sample_size, random_state=random_state
        ))
        if sample_size is not None:
            metrics['silhouette_sample_size'] = sample_size
        
        # Calinski-Harabasz score (higher is better)
        metrics['calinski_harabasz'] = float(calinski_harabasz_score(vectors, labels))
        
        # Davies-Bouldin score (lower is better)
        metrics['davies_bouldin'] = float(davies_bouldin_score(vectors, labels))
    
    return metrics


def cluster_cohesion(
    vectors: np.ndarray,
    cluster_indices: List[int],
    metric: str = 'cosine'
) -> float:
    """
    Calculate cluster cohesion (average intra-cluster distance).
    
    Cosine cohesion comes from the sum of the unit rows, without forming
    the pairwise distance matrix: the mean similarity over distinct pairs
    is (|sum|^2 - n) / (n * (n - 1)).
    
    Args:
        vectors: Document matrix
        cluster_indices: Indices of documents in the partition
        metric: Distance metric
        
    Returns:
        Average cohesion score (lower is better)
    """
    n = len(cluster_indices)
    if n < 2:
        return 0.0
    
    cluster_vectors = np.asarray(vectors[cluster_indices], dtype=np.float64)
    
    if metric == 'cosine':
        unit = cluster_vectors / np.linalg.norm(cluster_vectors, axis=1, keepdims=True)
        total = unit.sum(axis=0)
        mean_similarity = (float(total @ total) - n) / (n * (n - 1))
        return 1.0 - mean_similarity
    
    distances = cdist(cluster_vectors, cluster_vectors, metric=metric)
    
    # Average of upper triangle
    upper_indices = np.triu_indices(n, k=1)
    return float(np.mean(distances[upper_indices]))


def summarize_partitions(doc_matrix: np.ndarray, state: ClusterState) -> List[Dict[str, float]]:
    """Size, quality and cohesion of each partition."""
    qualities = partition_qualities(doc_matrix, state)
    return [
        {
            'partition': i,
            'size': len(partition),
            'quality': qualities[i],
            'cohesion': cluster_cohesion(doc_matrix, partition)
        }
        for i, partition in enumerate(state.partitions)
    ]
