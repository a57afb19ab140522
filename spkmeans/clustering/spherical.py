"""Spherical k-means clustering engine.

Documents are normalized to unit length (TXN scheme), split into k contiguous
blocks, and then repeatedly reassigned to the partition whose concept vector
is most similar until the total quality gain drops to the threshold.
"""

import time
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from scipy.sparse import spmatrix
from sklearn.exceptions import ConvergenceWarning

from .base import Clusterer
from .state import ClusterState
from ..config import (
    SPKMeansConfig,
    DEFAULT_K,
    EMPTY_PARTITION_ERROR,
    EMPTY_PARTITION_RESEED
)
from ..core.vectors import (
    dot,
    vec_sum,
    scale_in_place,
    normalize_in_place,
    normalize_rows_in_place
)
from ..exceptions import (
    ConvergenceError,
    EmptyPartitionError,
    InvalidParameterError
)
from ..utils.logging import get_logger
from ..utils.numpy_helpers import labels_to_groups, to_numpy_array
from ..utils.validation import validate_matrix

logger = get_logger(__name__)


@dataclass
class SPKMeansResult:
    """Outcome of a spherical k-means run."""
    state: ClusterState
    iterations: int
    converged: bool
    quality: float
    quality_history: List[float] = field(default_factory=list)
    timings: Dict[str, float] = field(default_factory=dict)
    # The normalized matrix the state indexes into
    doc_matrix: Optional[np.ndarray] = None

    @property
    def labels(self) -> np.ndarray:
        return self.state.labels()


def _map(func: Callable, items: Sequence, n_jobs: int) -> list:
    """Apply func to every item, on a thread pool when n_jobs > 1."""
    if n_jobs > 1 and len(items) > 1:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            return list(executor.map(func, items))
    return [func(item) for item in items]


def validate_parameters(k: int, dc: int, wc: int) -> None:
    """
    Reject parameters the engine cannot run with.

    Raises:
        InvalidParameterError: If dc or wc is zero, or k is outside [1, dc]
    """
    if dc == 0:
        raise InvalidParameterError("Document matrix contains no documents")
    if wc == 0:
        raise InvalidParameterError("Document vectors have zero dimensions")
    if k <= 0:
        raise InvalidParameterError(f"k must be positive, got {k}")
    if k > dc:
        raise InvalidParameterError(f"k ({k}) cannot exceed the number of documents ({dc})")


def prepare_matrix(doc_matrix: Union[np.ndarray, spmatrix, list],
                   dtype: Union[str, type] = np.float32) -> np.ndarray:
    """
    Convert input to a writeable dense matrix of the engine dtype.

    A numpy array that already has the dtype is returned unchanged, so the
    TXN pass normalizes the caller's rows in place.
    """
    matrix = to_numpy_array(doc_matrix, dtype)
    validate_matrix(matrix)

    if not matrix.flags.writeable:
        matrix = matrix.copy()

    if matrix.size and matrix.min() < 0:
        logger.warning("Document matrix contains negative weights")

    return matrix


def txn_scheme(doc_matrix: np.ndarray) -> np.ndarray:
    """Normalize every document vector to unit length, in place."""
    return normalize_rows_in_place(doc_matrix)


def initial_partitions(dc: int, k: int) -> List[np.ndarray]:
    """
    Split documents into k contiguous blocks of dc // k.

    The last block also takes the remainder.
    """
    split = dc // k
    groups = []
    base = 0
    for i in range(k):
        top = dc if i == k - 1 else base + split
        groups.append(np.arange(base, top, dtype=np.intp))
        base += split
    return groups


def compute_concept(doc_matrix: np.ndarray, partition: np.ndarray) -> np.ndarray:
    """
    Concept vector of one partition: normalize(sum(members) * (1 / wc)).

    Raises:
        EmptyPartitionError: If the partition has no members
    """
    if len(partition) == 0:
        raise EmptyPartitionError("Cannot compute the concept vector of an empty partition")

    wc = doc_matrix.shape[1]
    cv = vec_sum(doc_matrix[partition])
    scale_in_place(cv, 1.0 / wc)
    return normalize_in_place(cv)


def compute_concepts(doc_matrix: np.ndarray,
                     partitions: Sequence[np.ndarray],
                     n_jobs: int = 1) -> np.ndarray:
    """Concept vectors of all partitions, one row each."""
    for i, partition in enumerate(partitions):
        if len(partition) == 0:
            raise EmptyPartitionError(
                f"Partition {i} is empty; cannot compute its concept vector",
                partition=i
            )

    concepts = _map(lambda p: compute_concept(doc_matrix, p), partitions, n_jobs)
    return np.vstack(concepts)


def partition_quality(doc_matrix: np.ndarray,
                      partition: np.ndarray,
                      concept: np.ndarray) -> float:
    """dot(sum(members), concept) for one partition."""
    return float(dot(vec_sum(doc_matrix[partition]), concept))


def compute_quality(doc_matrix: np.ndarray,
                    partitions: Sequence[np.ndarray],
                    concepts: np.ndarray,
                    n_jobs: int = 1) -> float:
    """Total quality: sum of the partition qualities."""
    qualities = _map(
        lambda i: partition_quality(doc_matrix, partitions[i], concepts[i]),
        range(len(partitions)),
        n_jobs
    )
    return float(sum(qualities))


def assign_partitions(doc_matrix: np.ndarray,
                      concepts: np.ndarray,
                      n_jobs: int = 1) -> Tuple[List[np.ndarray], np.ndarray]:
    """
    Assign every document to its most similar concept.

    Documents and concepts are unit length, so cosine similarity is the dot
    product. Ties go to the lowest partition index. With n_jobs > 1 the
    documents are split into contiguous chunks scored on a thread pool; the
    per-chunk groups are concatenated in chunk order.

    Args:
        doc_matrix: Normalized documents (dc, wc)
        concepts: Concept vectors (k, wc)
        n_jobs: Number of worker threads

    Returns:
        Tuple of (k index groups, similarity of each document to its
        assigned concept)
    """
    dc = doc_matrix.shape[0]
    k = concepts.shape[0]

    def assign_chunk(bounds: Tuple[int, int]):
        start, stop = bounds
        similarities = doc_matrix[start:stop] @ concepts.T
        # argmax keeps the first maximum
        labels = np.argmax(similarities, axis=1)
        scores = similarities[np.arange(stop - start), labels]
        groups = [start + g for g in labels_to_groups(labels, k)]
        return groups, scores

    edges = np.linspace(0, dc, num=max(1, min(n_jobs, dc)) + 1, dtype=int)
    chunks = list(zip(edges[:-1], edges[1:]))
    results = _map(assign_chunk, chunks, n_jobs)

    groups = [
        np.concatenate([chunk_groups[i] for chunk_groups, _ in results]).astype(np.intp)
        for i in range(k)
    ]
    scores = np.concatenate([chunk_scores for _, chunk_scores in results])
    return groups, scores


def resolve_empty_partitions(groups: List[np.ndarray],
                             scores: np.ndarray,
                             policy: str = EMPTY_PARTITION_RESEED) -> Tuple[List[np.ndarray], int]:
    """
    Apply the empty partition policy to freshly assigned groups.

    With 'reseed', every empty partition receives the farthest outlier: the
    document least similar to its assigned concept, taken from a partition
    that keeps at least one member. With 'error', any empty partition raises.

    Args:
        groups: Index groups from assign_partitions
        scores: Similarity of each document to its assigned concept
        policy: 'reseed' or 'error'

    Returns:
        Tuple of (groups, number of reseeded partitions)

    Raises:
        EmptyPartitionError: If a partition is empty under the 'error' policy
    """
    empty = [i for i, group in enumerate(groups) if len(group) == 0]
    if not empty:
        return groups, 0

    if policy == EMPTY_PARTITION_ERROR:
        raise EmptyPartitionError(
            f"Assignment left partition(s) {empty} empty",
            partition=empty[0]
        )
    if policy != EMPTY_PARTITION_RESEED:
        raise ValueError(f"Unknown empty partition policy: {policy}")

    groups = list(groups)
    scores = np.array(scores, dtype=np.float64)
    labels = np.empty(len(scores), dtype=np.intp)
    for i, group in enumerate(groups):
        labels[group] = i

    for i in empty:
        sizes = np.array([len(group) for group in groups])
        candidates = np.where(sizes[labels] > 1, scores, np.inf)
        doc = int(np.argmin(candidates))
        donor = int(labels[doc])

        groups[donor] = groups[donor][groups[donor] != doc]
        groups[i] = np.array([doc], dtype=np.intp)
        labels[doc] = i
        # Never move the same document twice
        scores[doc] = np.inf

        logger.warning(f"Partition {i} was empty; reseeded with document {doc} from partition {donor}")

    return groups, len(empty)


def refine(doc_matrix: np.ndarray,
           state: ClusterState,
           n_jobs: int = 1,
           empty_partition: str = EMPTY_PARTITION_RESEED,
           timings: Optional[Dict[str, float]] = None) -> float:
    """
    Run one iteration: assign, replace partitions, recompute concepts.

    Args:
        doc_matrix: Normalized documents
        state: State to update
        n_jobs: Number of worker threads
        empty_partition: Empty partition policy
        timings: Optional dict accumulating seconds per step

    Returns:
        Quality of the new partitioning
    """
    if timings is None:
        timings = {}

    tick = time.perf_counter()
    groups, scores = assign_partitions(doc_matrix, state.concepts, n_jobs)
    groups, _ = resolve_empty_partitions(groups, scores, empty_partition)
    state.replace_partitions(groups)
    tock = time.perf_counter()
    timings['partition'] = timings.get('partition', 0.0) + tock - tick

    tick = tock
    state.replace_concepts(compute_concepts(doc_matrix, state.partitions, n_jobs))
    tock = time.perf_counter()
    timings['concepts'] = timings.get('concepts', 0.0) + tock - tick

    tick = tock
    quality = compute_quality(doc_matrix, state.partitions, state.concepts, n_jobs)
    timings['quality'] = timings.get('quality', 0.0) + time.perf_counter() - tick

    return quality


def _log_timings(timings: Dict[str, float]) -> None:
    total = sum(timings.values())
    if total == 0:
        logger.debug("No time stats available: run finished too fast")
        return
    for step, seconds in timings.items():
        logger.debug(f"  {step} [{seconds * 1000:.2f} ms] ({seconds / total:.1%})")


def run_spkmeans(doc_matrix: Union[np.ndarray, spmatrix, list],
                 k: int,
                 config: Optional[SPKMeansConfig] = None) -> SPKMeansResult:
    """
    Cluster documents into k partitions with spherical k-means.

    Args:
        doc_matrix: Non-negative document-term matrix (dc, wc). A float
            array of the configured dtype is normalized in place.
        k: Number of partitions, 1 <= k <= dc
        config: Engine configuration (defaults if None)

    Returns:
        SPKMeansResult. When the iteration cap is reached before the
        quality gain drops to the threshold, converged is False and state
        is the best one seen.

    Raises:
        InvalidParameterError: For k, dc or wc out of range
        DegenerateVectorError: If a document is all zeros
        EmptyPartitionError: If a partition empties under the 'error' policy
        ConvergenceError: If the cap is reached and raise_on_max_iter is set
    """
    if config is None:
        config = SPKMeansConfig.default()

    threshold = config.convergence.q_threshold
    max_iter = config.convergence.max_iter
    n_jobs = config.engine.n_jobs
    policy = config.engine.empty_partition

    start = time.perf_counter()

    matrix = prepare_matrix(doc_matrix, config.engine.dtype)
    dc, wc = matrix.shape
    validate_parameters(k, dc, wc)

    logger.info(f"Running spherical k-means on {dc} documents, {wc} words with k={k}")

    txn_scheme(matrix)

    state = ClusterState(k, dc, wc, matrix.dtype)
    logger.debug(f"Split = {dc // k}")
    state.replace_partitions(initial_partitions(dc, k))
    for size in state.p_sizes:
        logger.debug(f"Created new partition of size {size}")

    state.replace_concepts(compute_concepts(matrix, state.partitions, n_jobs))
    quality = compute_quality(matrix, state.partitions, state.concepts, n_jobs)
    logger.info(f"Initial quality: {quality:.6f}")

    history = [quality]
    timings = {'partition': 0.0, 'concepts': 0.0, 'quality': 0.0}
    best_state, best_quality = state.copy(), quality

    dq = float('inf')
    iterations = 0
    while dq > threshold and iterations < max_iter:
        iterations += 1

        new_quality = refine(matrix, state, n_jobs, policy, timings)
        dq = new_quality - quality
        quality = new_quality
        history.append(quality)

        if quality > best_quality:
            best_state, best_quality = state.copy(), quality

        logger.info(f"Quality: {quality:.6f} ({dq:+.6f})")

    converged = dq <= threshold
    elapsed = time.perf_counter() - start
    logger.info(f"Done in {elapsed:.3f} seconds after {iterations} iterations.")
    _log_timings(timings)
    timings['total'] = elapsed

    if converged:
        return SPKMeansResult(state, iterations, True, quality, history, timings, matrix)

    result = SPKMeansResult(best_state, iterations, False, best_quality, history, timings, matrix)
    message = (
        f"Spherical k-means did not converge within {max_iter} iterations "
        f"(last quality gain {dq:.6f} > {threshold})"
    )
    if config.convergence.raise_on_max_iter:
        raise ConvergenceError(message, result=result)

    logger.warning(message)
    warnings.warn(message, ConvergenceWarning)
    return result


class SphericalKMeans(Clusterer):
    """Spherical k-means clustering of document vectors."""

    def __init__(self,
                 n_clusters: int = DEFAULT_K,
                 config: Optional[SPKMeansConfig] = None,
                 copy: bool = False):
        """
        Initialize spherical k-means clusterer.

        Args:
            n_clusters: Number of partitions (k)
            config: Engine configuration
            copy: Normalize a copy instead of the caller's matrix
        """
        self.n_clusters = n_clusters
        self.config = config or SPKMeansConfig.default()
        self.copy = copy

        self.result_: Optional[SPKMeansResult] = None
        self.labels_: Optional[np.ndarray] = None
        self.concepts_: Optional[np.ndarray] = None
        self.quality_: Optional[float] = None
        self.n_iter_: Optional[int] = None
        self.converged_: Optional[bool] = None

    def fit(self, vectors: Union[np.ndarray, spmatrix]) -> 'SphericalKMeans':
        """Run the clustering and store the fitted attributes."""
        if self.copy:
            vectors = np.array(to_numpy_array(vectors, self.config.engine.dtype), copy=True)

        result = run_spkmeans(vectors, self.n_clusters, self.config)

        self.result_ = result
        self.labels_ = result.labels
        self.concepts_ = result.state.concepts
        self.quality_ = result.quality
        self.n_iter_ = result.iterations
        self.converged_ = result.converged
        return self

    def predict(self, vectors: Union[np.ndarray, spmatrix]) -> np.ndarray:
        """
        Assign new documents to the fitted concepts.

        Raises:
            RuntimeError: If called before fit
        """
        if self.concepts_ is None:
            raise RuntimeError("SphericalKMeans must be fitted before predict")

        matrix = np.array(to_numpy_array(vectors, self.config.engine.dtype), copy=True)
        validate_matrix(matrix)
        txn_scheme(matrix)
        return np.argmax(matrix @ self.concepts_.T, axis=1)

    def get_params(self) -> Dict[str, Any]:
        """Get clustering parameters."""
        return {
            'algorithm': 'spkmeans',
            'n_clusters': self.n_clusters,
            'q_threshold': self.config.convergence.q_threshold,
            'max_iter': self.config.convergence.max_iter,
            'empty_partition': self.config.engine.empty_partition,
            'n_jobs': self.config.engine.n_jobs,
            'quality': self.quality_,
            'n_iter': self.n_iter_,
            'converged': self.converged_
        }
