from .arithmetic import detect_math_backend, MathBackend
from .bigfile import BigFile
from .chain import SizeProbeChain
from .config import DEFAULT_MATH_BACKEND, SizeConfig
from .errors import BigFileSizeError, FileNotFound, NoArithmeticBackend, SizeIndeterminate
from .probes import (
    ChunkedScanProbe,
    default_probes,
    ExternalProcessProbe,
    Measured,
    NativeSeekProbe,
    PlatformShellObjectProbe,
    ProbeResult,
    ProtocolHeaderProbe,
    SizeProbe,
    Unavailable,
)

__all__ = [
    "BigFile",
    "BigFileSizeError",
    "ChunkedScanProbe",
    "DEFAULT_MATH_BACKEND",
    "default_probes",
    "detect_math_backend",
    "ExternalProcessProbe",
    "FileNotFound",
    "MathBackend",
    "Measured",
    "NativeSeekProbe",
    "NoArithmeticBackend",
    "PlatformShellObjectProbe",
    "ProbeResult",
    "ProtocolHeaderProbe",
    "SizeConfig",
    "SizeIndeterminate",
    "SizeProbe",
    "SizeProbeChain",
    "Unavailable",
]
