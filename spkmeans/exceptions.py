"""Error types raised by the clustering engine."""


class SPKMeansError(Exception):
    """Base class for spherical k-means errors."""

    pass


class InvalidParameterError(SPKMeansError, ValueError):
    """Raised when k, dc or wc are outside the valid range."""

    pass


class DegenerateVectorError(SPKMeansError, ValueError):
    """Raised when a zero vector would be normalized or divided by its norm."""

    pass


class EmptyPartitionError(SPKMeansError):
    """Raised when a partition has no members and no recovery is configured."""

    def __init__(self, message: str, partition: int = None):
        super().__init__(message)
        self.partition = partition


class PartitionError(SPKMeansError):
    """Raised when new partition groups do not cover every document exactly once."""

    pass


class ConvergenceError(SPKMeansError):
    """Raised when the iteration cap is hit and strict convergence is requested."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result
