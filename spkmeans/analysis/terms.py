"""Top-term summaries of partitions."""

from typing import Dict, List, Optional, Sequence, Union
import numpy as np

from ..clustering.state import ClusterState


def top_terms(doc_matrix: np.ndarray,
              state: ClusterState,
              words: Optional[Sequence[str]] = None,
              n: int = 10) -> Dict[int, List[Union[str, int]]]:
    """
    Highest-weighted words of each partition.
    
    Member weights are summed per word and the n largest sums are kept,
    heaviest first. Equal sums put the higher word index first.
    
    Args:
        doc_matrix: Document matrix the state indexes into
        state: Clustering result
        words: Vocabulary; word indices are returned when None
        n: Number of words per partition (capped at wc)
        
    Returns:
        Dict mapping partition IDs to lists of words (or indices)
    """
    n = min(n, state.wc)
    result = {}
    
    for i, partition in enumerate(state.partitions):
        if len(partition) == 0:
            result[i] = []
            continue
        
        sums = doc_matrix[partition].sum(axis=0)
        # Primary key is the last one: sum descending, then index descending
        order = np.lexsort((-np.arange(state.wc), -sums))[:n]
        
        if words is not None:
            result[i] = [words[idx] for idx in order]
        else:
            result[i] = [int(idx) for idx in order]
    
    return result


def format_partition_report(terms: Dict[int, List[Union[str, int]]]) -> str:
    """Render top terms as 'Partition #i:' blocks, numbered from 1."""
    lines = []
    for i in sorted(terms):
        lines.append(f"Partition #{i + 1}:")
        lines.extend(f"   {term}" for term in terms[i])
    return "\n".join(lines)
