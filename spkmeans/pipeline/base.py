"""Document clustering pipeline: load, cluster, summarize, save."""

from typing import Any, Dict, List, Optional
import numpy as np

from ..analysis import top_terms, format_partition_report
from ..clustering import SphericalKMeans, evaluate_clustering, summarize_partitions
from ..config import SPKMeansConfig, DEFAULT_K
from ..io import read_doc_file, read_words_file
from ..utils.logging import get_logger
from .results import ResultManager

logger = get_logger(__name__)


class ClusteringPipeline:
    """Runs spherical k-means over a document file or matrix."""
    
    def __init__(self, config: Optional[SPKMeansConfig] = None):
        """
        Initialize pipeline.
        
        Args:
            config: Clustering configuration (defaults if None)
        """
        self.config = config or SPKMeansConfig.default()
        self.result_manager = ResultManager()
        self.clusterer: Optional[SphericalKMeans] = None
        self.report: str = ''
    
    def run(self,
            k: int = DEFAULT_K,
            doc_matrix: Optional[np.ndarray] = None,
            doc_file: Optional[str] = None,
            vocab_file: Optional[str] = None,
            words: Optional[List[str]] = None,
            doc_names: Optional[List[str]] = None,
            doc_format: Optional[str] = None) -> Dict[str, Any]:
        """
        Run the complete pipeline.
        
        Args:
            k: Number of partitions
            doc_matrix: In-memory document-term matrix
            doc_file: Document file, read when doc_matrix is None
            vocab_file: Vocabulary file, read when words is None
            words: In-memory vocabulary
            doc_names: Optional document names for the cluster listing
            doc_format: Document file format (detected when None)
            
        Returns:
            Pipeline results dictionary
        """
        if doc_matrix is None:
            if not doc_file:
                raise ValueError("No documents provided. Expected a document matrix or a document file.")
            doc_matrix, file_names = read_doc_file(doc_file, doc_format, self.config.engine.dtype)
            doc_names = doc_names or file_names
        
        if words is None and vocab_file:
            words = read_words_file(vocab_file, doc_matrix.shape[1])
        
        logger.info(f"Starting spherical k-means pipeline with k={k}")
        
        self.clusterer = SphericalKMeans(n_clusters=k, config=self.config)
        clusters = self.clusterer.cluster(doc_matrix)
        result = self.clusterer.result_
        matrix = result.doc_matrix
        
        terms = top_terms(matrix, result.state, words, self.config.display.top_terms)
        partitions = summarize_partitions(matrix, result.state)
        for record in partitions:
            record['top_terms'] = terms[record['partition']]
        
        if doc_names is not None:
            clusters = {cid: [doc_names[idx] for idx in indices] for cid, indices in clusters.items()}
        
        self.report = format_partition_report(terms)
        
        if self.config.display.metrics:
            metrics = evaluate_clustering(
                matrix, result.labels,
                sample_size=self.config.display.silhouette_sample_size
            )
        else:
            logger.info("Skipping clustering metrics")
            metrics = {}
        
        results = {
            'algorithm': 'spkmeans',
            'document_count': result.state.dc,
            'word_count': result.state.wc,
            'k': k,
            'iterations': result.iterations,
            'converged': result.converged,
            'quality': result.quality,
            'quality_history': result.quality_history,
            'timings': result.timings,
            'clusters': clusters,
            'clustering_params': self.clusterer.get_params(),
            'partitions': partitions,
            'metrics': metrics,
            'config': self.config.to_dict()
        }
        
        self.result_manager.set_results(results)
        return results
    
    def save_results(self, output_dir: str, **kwargs):
        """Save pipeline results."""
        self.result_manager.save(output_dir, **kwargs)
    
    def get_summary(self) -> Dict[str, Any]:
        """Get results summary."""
        return self.result_manager.get_summary()
