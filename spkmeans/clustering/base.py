"""Base interface for document clusterers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import numpy as np

from ..utils.numpy_helpers import labels_to_groups


class Clusterer(ABC):
    """
    Abstract base class for document clusterers.

    Subclasses implement ``fit`` and set ``labels_`` (and ``n_clusters``);
    the dictionary and label views are derived from those.
    """

    n_clusters: int
    labels_: Optional[np.ndarray] = None

    @abstractmethod
    def fit(self, vectors: np.ndarray) -> 'Clusterer':
        """Cluster the rows of a document-term matrix."""

    @abstractmethod
    def get_params(self) -> Dict[str, Any]:
        """Get clustering parameters."""

    def fit_predict(self, vectors: np.ndarray) -> np.ndarray:
        """Fit and return the partition id of every document."""
        return self.fit(vectors).labels_

    def cluster(self, vectors: np.ndarray, **kwargs) -> Dict[int, List[int]]:
        """
        Fit and return the partitions as a dictionary.

        Args:
            vectors: Document-term matrix (n_documents, n_words)
            **kwargs: Unused

        Returns:
            Dict mapping every partition ID to its document indices
        """
        return self.prepare_clusters(self.fit_predict(vectors), self.n_clusters)

    @staticmethod
    def prepare_clusters(labels: np.ndarray,
                         n_clusters: Optional[int] = None) -> Dict[int, List[int]]:
        """
        Group document indices by partition label.

        Partition IDs run from 0 to n_clusters - 1 (or the largest label),
        so empty partitions appear with an empty list.
        """
        labels = np.asarray(labels)
        if n_clusters is None:
            n_clusters = int(labels.max()) + 1 if labels.size else 0
        groups = labels_to_groups(labels, n_clusters)
        return {i: group.tolist() for i, group in enumerate(groups)}
