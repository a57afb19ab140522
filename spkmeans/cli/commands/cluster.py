"""Cluster command implementation."""

from ...config import SPKMeansConfig
from ...pipeline import ClusteringPipeline
from ...utils.validation import validate_file_exists
from ..base import BaseCommand


class ClusterCommand(BaseCommand):
    """Command to cluster a document file."""
    
    def build_config(self) -> SPKMeansConfig:
        """Preset, then config file, then individual flags."""
        config = SPKMeansConfig.from_preset(self.args.config)
        
        if self.args.config_file:
            config.update_from_dict(self.load_input(self.args.config_file))
        
        if self.args.threshold is not None:
            config.convergence.q_threshold = self.args.threshold
        if self.args.max_iter is not None:
            config.convergence.max_iter = self.args.max_iter
        if self.args.strict_convergence:
            config.convergence.raise_on_max_iter = True
        if self.args.empty_partition is not None:
            config.engine.empty_partition = self.args.empty_partition
        if self.args.threads is not None:
            config.engine.n_jobs = self.args.threads
        if self.args.top is not None:
            config.display.top_terms = self.args.top
        if self.args.no_metrics:
            config.display.metrics = False
        if self.args.silhouette_sample is not None:
            config.display.silhouette_sample_size = self.args.silhouette_sample
        
        config.validate()
        return config
    
    def execute(self) -> None:
        """Execute clustering."""
        validate_file_exists(self.args.docs)
        config = self.build_config()
        
        self.logger.info(
            f"Running SPK Means on \"{self.args.docs}\" with k={self.args.k} "
            f"({config.engine.n_jobs} threads)."
        )
        
        pipeline = ClusteringPipeline(config)
        results = pipeline.run(
            k=self.args.k,
            doc_file=self.args.docs,
            vocab_file=self.args.vocab,
            doc_format=self.args.format
        )
        
        for line in pipeline.report.splitlines():
            self.logger.info(line)
        
        summary = pipeline.get_summary()
        self.logger.info(f"Iterations: {summary['iterations']} (converged: {summary['converged']})")
        self.logger.info(f"Quality: {summary['quality']:.6f}")
        
        metrics = results['metrics']
        if 'silhouette' in metrics:
            self.logger.info(f"Silhouette (cosine): {metrics['silhouette']:.3f}")
        
        if self.args.output:
            output_dir = self.ensure_output_dir(self.args.output)
            pipeline.save_results(output_dir, save_csv=True)
            self.logger.info(f"Results saved to: {output_dir}")
