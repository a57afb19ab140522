"""Shared constants for spherical k-means."""

VERSION = '0.1.0'

# Default parameters
DEFAULT_K = 2
DEFAULT_THREADS = 2
DEFAULT_N_JOBS = 1  # Sequential unless threads are requested
DEFAULT_DTYPE = 'float32'
DEFAULT_DOC_FILE = 'docs'
DEFAULT_TOP_TERMS = 10
DEFAULT_SILHOUETTE_SAMPLE_SIZE = 1000

# Convergence
Q_THRESHOLD = 0.001
MAX_ITERATIONS = 1000

# Empty partition policies
EMPTY_PARTITION_RESEED = 'reseed'
EMPTY_PARTITION_ERROR = 'error'

SUPPORTED_EMPTY_PARTITION_POLICIES = [
    EMPTY_PARTITION_RESEED,
    EMPTY_PARTITION_ERROR
]

# Document file formats
FORMAT_DENSE = 'dense'
FORMAT_UCI = 'uci'
FORMAT_JSON = 'json'

SUPPORTED_DOC_FORMATS = [
    FORMAT_DENSE,
    FORMAT_UCI,
    FORMAT_JSON
]

# Configuration presets
PRESET_DEFAULT = 'default'
PRESET_STRICT = 'strict'
PRESET_FAST = 'fast'

SUPPORTED_PRESETS = [
    PRESET_DEFAULT,
    PRESET_STRICT,
    PRESET_FAST
]
