"""Mutable clustering result: partitions, their sizes and concept vectors."""

from typing import Any, Dict, List, Sequence, Tuple
import numpy as np

from ..exceptions import PartitionError


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class ClusterState:
    """
    The k partitions of a document set plus one concept vector each.

    Partitions are read-only integer index arrays into the document matrix;
    the state never holds document data itself. Partitions and concepts are
    only ever swapped in as complete sets through ``replace_partitions`` and
    ``replace_concepts``.
    """

    def __init__(self, k: int, dc: int, wc: int, dtype=np.float32):
        """
        Initialize an empty state.

        Args:
            k: Number of partitions
            dc: Number of documents
            wc: Number of words (vector length)
            dtype: Float type of the concept vectors
        """
        self.k = k
        self.dc = dc
        self.wc = wc
        self.dtype = np.dtype(dtype)

        self._partitions: Tuple[np.ndarray, ...] = tuple(
            _frozen(np.empty(0, dtype=np.intp)) for _ in range(k)
        )
        self._concepts = _frozen(np.zeros((k, wc), dtype=self.dtype))

    @property
    def partitions(self) -> Tuple[np.ndarray, ...]:
        """Document indices of each partition."""
        return self._partitions

    @property
    def p_sizes(self) -> np.ndarray:
        """Member count of each partition."""
        return np.array([len(p) for p in self._partitions], dtype=np.intp)

    @property
    def concepts(self) -> np.ndarray:
        """Concept vectors, one row per partition."""
        return self._concepts

    def replace_partitions(self, new_groups: Sequence[np.ndarray]) -> None:
        """
        Swap in a complete new set of partitions.

        Args:
            new_groups: k index arrays that together contain every document
                index in range(dc) exactly once

        Raises:
            PartitionError: If the groups do not partition the documents
        """
        if len(new_groups) != self.k:
            raise PartitionError(f"Expected {self.k} partition groups, got {len(new_groups)}")

        groups = [np.array(g, dtype=np.intp).ravel() for g in new_groups]

        covered = np.concatenate(groups) if groups else np.empty(0, dtype=np.intp)
        if covered.size != self.dc or not np.array_equal(np.sort(covered), np.arange(self.dc)):
            raise PartitionError(
                f"Partition groups must cover all {self.dc} documents exactly once "
                f"(got {covered.size} references)"
            )

        self._partitions = tuple(_frozen(g) for g in groups)

    def replace_concepts(self, new_concepts: np.ndarray) -> None:
        """
        Swap in a complete new set of concept vectors.

        Raises:
            ValueError: If the shape is not (k, wc)
        """
        concepts = np.array(new_concepts, dtype=self.dtype)
        if concepts.shape != (self.k, self.wc):
            raise ValueError(f"Expected concepts of shape {(self.k, self.wc)}, got {concepts.shape}")
        self._concepts = _frozen(concepts)

    def labels(self) -> np.ndarray:
        """Partition id of every document."""
        labels = np.full(self.dc, -1, dtype=np.intp)
        for i, partition in enumerate(self._partitions):
            labels[partition] = i
        return labels

    def members(self, doc_matrix: np.ndarray, i: int) -> np.ndarray:
        """Rows of doc_matrix that belong to partition i."""
        return doc_matrix[self._partitions[i]]

    def empty_partitions(self) -> List[int]:
        return [i for i, p in enumerate(self._partitions) if len(p) == 0]

    def copy(self) -> 'ClusterState':
        """Snapshot of this state. The frozen arrays are shared, not copied."""
        other = ClusterState(self.k, self.dc, self.wc, self.dtype)
        other._partitions = self._partitions
        other._concepts = self._concepts
        return other

    def to_dict(self) -> Dict[str, Any]:
        return {
            'k': self.k,
            'dc': self.dc,
            'wc': self.wc,
            'p_sizes': self.p_sizes.tolist(),
            'partitions': {i: p.tolist() for i, p in enumerate(self._partitions)},
            'concepts': self._concepts.tolist()
        }

    def __repr__(self) -> str:
        return f"ClusterState(k={self.k}, dc={self.dc}, wc={self.wc}, p_sizes={self.p_sizes.tolist()})"
