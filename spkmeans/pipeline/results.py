"""Result management for the clustering pipeline."""

from typing import Dict, Any, Union
from pathlib import Path

from ..io import save_clusters, save_json_file, write_partition_summary_csv, write_metrics_csv
from ..utils.io import ensure_directory
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ResultManager:
    """Manages pipeline results and output."""
    
    def __init__(self):
        self.results: Dict[str, Any] = {}
    
    def set_results(self, results: Dict[str, Any]) -> None:
        """Set pipeline results."""
        self.results = results
    
    def save(self, 
             output_dir: Union[str, Path],
             save_csv: bool = True) -> None:
        """
        Save pipeline results to files.
        
        Args:
            output_dir: Directory to save results
            save_csv: Whether to save CSV reports
        """
        if not self.results:
            raise ValueError("No results to save; run the pipeline first")
        
        output_dir = ensure_directory(output_dir)
        logger.info(f"Saving results to {output_dir}")
        
        save_clusters(
            self.results['clusters'],
            output_dir / 'clusters.json',
            metadata=self.results.get('clustering_params')
        )
        
        if save_csv:
            write_partition_summary_csv(
                self.results.get('partitions', []),
                output_dir / 'partitions.csv'
            )
            write_metrics_csv(
                self.results.get('metrics', {}),
                output_dir / 'metrics.csv'
            )
        
        save_json_file(self.results, output_dir / 'results.json')
    
    def get_summary(self) -> Dict[str, Any]:
        """Get results summary."""
        return {
            'document_count': self.results.get('document_count', 0),
            'word_count': self.results.get('word_count', 0),
            'partition_count': len(self.results.get('clusters', {})),
            'iterations': self.results.get('iterations', 0),
            'converged': self.results.get('converged', False),
            'quality': self.results.get('quality')
        }
