"""Threshold and engine configuration for spherical k-means."""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .constants import (
    Q_THRESHOLD,
    MAX_ITERATIONS,
    DEFAULT_N_JOBS,
    DEFAULT_DTYPE,
    DEFAULT_TOP_TERMS,
    DEFAULT_SILHOUETTE_SAMPLE_SIZE,
    EMPTY_PARTITION_RESEED,
    EMPTY_PARTITION_ERROR,
    SUPPORTED_EMPTY_PARTITION_POLICIES,
    PRESET_DEFAULT,
    PRESET_STRICT,
    PRESET_FAST,
    SUPPORTED_PRESETS
)


@dataclass
class ConvergenceThresholds:
    """When the iteration loop stops."""
    # Minimum quality gain that keeps the loop going
    q_threshold: float = Q_THRESHOLD
    
    # Iteration cap
    max_iter: int = MAX_ITERATIONS
    raise_on_max_iter: bool = False


@dataclass
class EngineSettings:
    """How each iteration is executed."""
    empty_partition: str = EMPTY_PARTITION_RESEED
    n_jobs: int = DEFAULT_N_JOBS
    dtype: str = DEFAULT_DTYPE


@dataclass
class DisplaySettings:
    """Result presentation."""
    top_terms: int = DEFAULT_TOP_TERMS
    
    # Silhouette, Calinski-Harabasz and Davies-Bouldin scores
    metrics: bool = True
    
    # Rows sampled for the silhouette; None uses every document
    silhouette_sample_size: Optional[int] = DEFAULT_SILHOUETTE_SAMPLE_SIZE


@dataclass
class SPKMeansConfig:
    """Complete clustering configuration."""
    convergence: ConvergenceThresholds = field(default_factory=ConvergenceThresholds)
    engine: EngineSettings = field(default_factory=EngineSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    
    def __post_init__(self):
        self.validate()
    
    def validate(self) -> None:
        """Check settings are usable."""
        if self.convergence.q_threshold < 0:
            raise ValueError(f"q_threshold must be >= 0, got {self.convergence.q_threshold}")
        if self.convergence.max_iter < 1:
            raise ValueError(f"max_iter must be >= 1, got {self.convergence.max_iter}")
        if self.engine.empty_partition not in SUPPORTED_EMPTY_PARTITION_POLICIES:
            raise ValueError(
                f"Unknown empty partition policy: {self.engine.empty_partition}. "
                f"Available: {SUPPORTED_EMPTY_PARTITION_POLICIES}"
            )
        if self.engine.n_jobs < 1:
            raise ValueError(f"n_jobs must be >= 1, got {self.engine.n_jobs}")
        if self.display.top_terms < 0:
            raise ValueError(f"top_terms must be >= 0, got {self.display.top_terms}")
        sample_size = self.display.silhouette_sample_size
        if sample_size is not None and sample_size < 2:
            raise ValueError(f"silhouette_sample_size must be >= 2 or None, got {sample_size}")
    
    @classmethod
    def default(cls) -> 'SPKMeansConfig':
        """Create default configuration."""
        return cls()
    
    @classmethod
    def strict(cls) -> 'SPKMeansConfig':
        """Create strict configuration: tight tolerance, no silent recovery."""
        config = cls.default()
        
        config.convergence.q_threshold = 1e-5
        config.convergence.raise_on_max_iter = True
        config.engine.empty_partition = EMPTY_PARTITION_ERROR
        config.engine.dtype = 'float64'
        
        return config
    
    @classmethod
    def fast(cls) -> 'SPKMeansConfig':
        """Create fast configuration: loose tolerance, few iterations."""
        config = cls.default()
        
        config.convergence.q_threshold = 0.01
        config.convergence.max_iter = 100
        
        return config
    
    @classmethod
    def from_preset(cls, name: str) -> 'SPKMeansConfig':
        """Create configuration from a preset name."""
        presets = {
            PRESET_DEFAULT: cls.default,
            PRESET_STRICT: cls.strict,
            PRESET_FAST: cls.fast
        }
        if name not in presets:
            raise ValueError(f"Unknown preset: {name}. Available: {SUPPORTED_PRESETS}")
        return presets[name]()
    
    def update_from_dict(self, data: Dict[str, Any]) -> 'SPKMeansConfig':
        """
        Override settings from a nested dictionary.
        
        Args:
            data: Mapping of section name ('convergence', 'engine',
                'display') to field overrides
            
        Returns:
            self, for chaining
            
        Raises:
            ValueError: On unknown sections or fields
        """
        for section_name, values in data.items():
            if section_name not in {f.name for f in fields(self)}:
                raise ValueError(f"Unknown configuration section: {section_name}")
            section = getattr(self, section_name)

            known = {f.name for f in fields(section)}
            for key, value in values.items():
                if key not in known:
                    raise ValueError(f"Unknown setting {section_name}.{key}")
                setattr(section, key, value)
        
        self.validate()
        return self
    
    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return {
            'convergence': {
                'q_threshold': self.convergence.q_threshold,
                'max_iter': self.convergence.max_iter,
                'raise_on_max_iter': self.convergence.raise_on_max_iter
            },
            'engine': {
                'empty_partition': self.engine.empty_partition,
                'n_jobs': self.engine.n_jobs,
                'dtype': self.engine.dtype
            },
            'display': {
                'top_terms': self.display.top_terms,
                'metrics': self.display.metrics,
                'silhouette_sample_size': self.display.silhouette_sample_size
            }
        }
