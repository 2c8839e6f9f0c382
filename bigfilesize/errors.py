class BigFileSizeError(Exception):
    """Base class for every error raised by bigfilesize."""


class FileNotFound(BigFileSizeError, FileNotFoundError):
    """Raised when a path does not point to an existing regular file."""


class NoArithmeticBackend(BigFileSizeError, RuntimeError):
    """Raised when no arbitrary-precision arithmetic backend is usable."""


class SizeIndeterminate(BigFileSizeError, OSError):
    """Raised when every size probe failed to measure a file."""
