"""Configuration module for spherical k-means."""

from .thresholds import (
    ConvergenceThresholds,
    EngineSettings,
    DisplaySettings,
    SPKMeansConfig
)

from .constants import (
    VERSION,
    # Defaults
    DEFAULT_K,
    DEFAULT_THREADS,
    DEFAULT_N_JOBS,
    DEFAULT_DTYPE,
    DEFAULT_DOC_FILE,
    DEFAULT_TOP_TERMS,
    DEFAULT_SILHOUETTE_SAMPLE_SIZE,
    # Convergence
    Q_THRESHOLD,
    MAX_ITERATIONS,
    # Empty partitions
    EMPTY_PARTITION_RESEED,
    EMPTY_PARTITION_ERROR,
    SUPPORTED_EMPTY_PARTITION_POLICIES,
    # Formats
    FORMAT_DENSE,
    FORMAT_UCI,
    FORMAT_JSON,
    SUPPORTED_DOC_FORMATS,
    # Presets
    PRESET_DEFAULT,
    PRESET_STRICT,
    PRESET_FAST,
    SUPPORTED_PRESETS
)

__all__ = [
    # Configuration
    'ConvergenceThresholds',
    'EngineSettings',
    'DisplaySettings',
    'SPKMeansConfig',
    # Constants
    'VERSION',
    'DEFAULT_K',
    'DEFAULT_THREADS',
    'DEFAULT_N_JOBS',
    'DEFAULT_DTYPE',
    'DEFAULT_DOC_FILE',
    'DEFAULT_TOP_TERMS',
    'DEFAULT_SILHOUETTE_SAMPLE_SIZE',
    'Q_THRESHOLD',
    'MAX_ITERATIONS',
    'EMPTY_PARTITION_RESEED',
    'EMPTY_PARTITION_ERROR',
    'SUPPORTED_EMPTY_PARTITION_POLICIES',
    'FORMAT_DENSE',
    'FORMAT_UCI',
    'FORMAT_JSON',
    'SUPPORTED_DOC_FORMATS',
    'PRESET_DEFAULT',
    'PRESET_STRICT',
    'PRESET_FAST',
    'SUPPORTED_PRESETS'
]
