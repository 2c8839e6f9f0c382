from dataclasses import dataclass
import sys

from .arithmetic import detect_math_backend, MathBackend

# selected once per process; SizeConfig instances may override it
DEFAULT_MATH_BACKEND: MathBackend = detect_math_backend()

DEFAULT_CHUNK_SIZE = 1024 * 1024


@dataclass(frozen=True, slots=True)
class SizeConfig:
    """Settings shared by every size query made through one chain.

    :param math_backend: The arithmetic backend used by the chunked scan
    :param fast_mode: If True, never fall back to reading the whole file
    :param chunk_size: The number of bytes read at a time by the chunked scan
    :param native_int_ceiling: The largest native signed integer; the chunked scan starts one byte below it
    :param allow_subprocess: If False, never launch external commands
    """

    math_backend: MathBackend = DEFAULT_MATH_BACKEND
    fast_mode: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE
    native_int_ceiling: int = sys.maxsize
    allow_subprocess: bool = True

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, not {self.chunk_size}")

        if self.native_int_ceiling < 1:
            raise ValueError(f"native_int_ceiling must be at least 1, not {self.native_int_ceiling}")

    @property
    def scan_start_offset(self) -> int:
        """The offset the chunked scan seeks to before it starts counting."""
        return self.native_int_ceiling - 1
