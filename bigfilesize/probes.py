"""The individual strategies used to measure a file's size.

Each probe either measures the file (`Measured`) or explains why it could not (`Unavailable`). A probe never raises
for an expected failure: the chain simply moves on to the next one.
"""

import logging
import os
import pathlib
import re
import shlex
import subprocess
import sys
from typing import BinaryIO, NamedTuple, Protocol, runtime_checkable, TYPE_CHECKING
import urllib.request

from .config import SizeConfig

if TYPE_CHECKING:
    from .bigfile import BigFile

logger = logging.getLogger(__name__)


class Measured(NamedTuple):
    """A successful measurement, in bytes."""

    size: int


class Unavailable(NamedTuple):
    """A probe that could not measure the file, and why."""

    reason: str


ProbeResult = Measured | Unavailable


@runtime_checkable
class SizeProbe(Protocol):
    """A protocol class for size probes.

    `needs_absolute_path` asks the chain to absolutize the file's path before the probe runs; `slow` marks probes
    that are skipped in fast mode.
    """

    name: str
    needs_absolute_path: bool
    slow: bool

    def probe(self, file: "BigFile", config: SizeConfig) -> ProbeResult: ...


class NativeSeekProbe:
    """Measure the file by seeking to its end and reading back the offset."""

    name = "native-seek"
    needs_absolute_path = False
    slow = False

    def probe(self, file: "BigFile", config: SizeConfig) -> ProbeResult:
        try:
            handle = open(file.path, "rb")
        except OSError as e:
            return Unavailable(f"cannot open file: {e}")

        with handle:
            try:
                return Measured(handle.seek(0, os.SEEK_END))
            except (OSError, OverflowError) as e:
                return Unavailable(f"seek to end failed: {e}")


class ProtocolHeaderProbe:
    """Measure the file by requesting only the headers of its file:// URL and reading Content-Length.

    The length arrives as text, so it is never squeezed through a native integer on the way.
    """

    name = "protocol-header"
    needs_absolute_path = True
    slow = False

    _CONTENT_LENGTH = re.compile(r"Content-Length: (\d+)", re.IGNORECASE)

    def __init__(self, opener: urllib.request.OpenerDirector | None = None, *, enabled: bool = True) -> None:
        """Create the probe.

        :param opener: The URL opener to send the request with (a default opener if None)
        :param enabled: If False, behave as if no URL client were available
        """
        self.opener = (opener or urllib.request.build_opener()) if enabled else None

    def probe(self, file: "BigFile", config: SizeConfig) -> ProbeResult:
        if self.opener is None:
            return Unavailable("no URL client available")

        try:
            request = urllib.request.Request(pathlib.Path(file.path).as_uri(), method="HEAD")
            # the body is never read; closing the response releases the underlying file
            with self.opener.open(request) as response:
                headers = str(response.headers)
        except (OSError, ValueError) as e:
            return Unavailable(f"header request failed: {e}")

        if not (match := self._CONTENT_LENGTH.search(headers)):
            return Unavailable("response has no Content-Length header")

        return Measured(int(match.group(1)))


class ExternalProcessProbe:
    """Measure the file by asking an operating system command for it.

    On Windows, the `for` command's `%~z` substitution is tried first and only accepted if it prints nothing but
    digits. Everywhere (including Windows, when that fails), `stat` is then asked for the size.
    """

    name = "external-process"
    needs_absolute_path = True
    slow = False

    _DIGITS = re.compile(r"[0-9]+")
    _CMD_UNSAFE = re.compile(r'["%!]')

    def __init__(self, platform: str | None = None) -> None:
        """Create the probe.

        :param platform: The platform to issue commands for, in `sys.platform` format (the current one if None)
        """
        self.platform = platform or sys.platform

    def probe(self, file: "BigFile", config: SizeConfig) -> ProbeResult:
        if not config.allow_subprocess:
            return Unavailable("process execution is disabled")

        if self.platform == "win32":
            output = self._run(f"for %F in ({self._quote(file.path)}) do @echo %~zF")
            if output and self._DIGITS.fullmatch(output):
                return Measured(int(output))

        output = self._run(f"stat {self._stat_format()} {self._quote(file.path)}")

        # stat output is taken as-is; only what int() cannot read is rejected
        try:
            size = int(output)
        except ValueError:
            return Unavailable(f"could not parse command output: {output!r}")

        if size < 0:
            return Unavailable(f"command reported a negative size: {size}")

        return Measured(size)

    def _quote(self, path: str) -> str:
        """Quote the path as a single argument for the platform's shell.

        cmd.exe only honours double quotes and expands `%` and `!` even inside them, so on Windows those characters
        (and `"` itself) are replaced with spaces before the path is wrapped in double quotes.
        """
        if self.platform == "win32":
            return '"' + self._CMD_UNSAFE.sub(" ", path) + '"'

        return shlex.quote(path)

    def _stat_format(self) -> str:
        if self.platform == "darwin" or "bsd" in self.platform:
            return "-f%z"

        return "-c%s"

    def _run(self, command: str) -> str:
        """Run the command through the shell and return the last line it printed, stripped."""
        try:
            completed = subprocess.run(command, shell=True, capture_output=True, text=True, check=False)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("could not run %r: %s", command, e)
            return ""

        lines = completed.stdout.strip().splitlines()
        return lines[-1].strip() if lines else ""


class PlatformShellObjectProbe:
    """Measure the file through the Windows Scripting.FileSystemObject COM object."""

    name = "platform-shell-object"
    needs_absolute_path = True
    slow = False

    def __init__(self, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    def probe(self, file: "BigFile", config: SizeConfig) -> ProbeResult:
        if self.platform != "win32":
            return Unavailable("COM automation is only available on Windows")

        try:
            from pywintypes import com_error
            from win32com.client import Dispatch
        except ImportError:
            return Unavailable("pywin32 is not installed")

        if not os.path.dirname(file.path):
            # os.path.join does not double a separator the working directory already ends with
            file.relocate(os.path.join(os.getcwd(), os.path.basename(file.path)))

        try:
            filesystem_object = Dispatch("Scripting.FileSystemObject")
            return Measured(int(filesystem_object.GetFile(file.path).Size))
        except (com_error, TypeError, ValueError) as e:
            return Unavailable(f"FileSystemObject query failed: {e}")


class ChunkedScanProbe:
    """Measure the file by reading it, starting just below the native integer ceiling.

    This is slow (it reads every byte past the start offset) and only works for files at least as long as that
    offset; shorter files are reported as unavailable.
    """

    name = "chunked-scan"
    needs_absolute_path = False
    slow = True

    def probe(self, file: "BigFile", config: SizeConfig) -> ProbeResult:
        offset = config.scan_start_offset
        backend = config.math_backend

        try:
            handle = open(file.path, "rb")
        except OSError as e:
            return Unavailable(f"cannot open file: {e}")

        with handle:
            try:
                if not _seek_exactly(handle, offset):
                    return Unavailable(f"file is shorter than the scan start offset {offset}")

                total = backend.from_int(offset)
                while chunk := handle.read(config.chunk_size):
                    total = backend.add(total, len(chunk))
            except (OSError, OverflowError) as e:
                return Unavailable(f"scan failed: {e}")
            except ArithmeticError as e:
                return Unavailable(f"{backend.value} backend could not add exactly: {e}")

        return Measured(backend.to_int(total))


def _seek_exactly(handle: BinaryIO, offset: int) -> bool:
    """Seek to `offset`, returning False if the file ends before it.

    Seeking past the end of a regular file succeeds silently, so the byte just before the offset is read back
    to prove it exists.
    """
    if offset == 0:
        handle.seek(0)
        return True

    handle.seek(offset - 1)
    return handle.read(1) != b""


def default_probes() -> tuple[SizeProbe, ...]:
    """Return the standard probes, in the order they should be tried."""
    return (
        NativeSeekProbe(),
        ProtocolHeaderProbe(),
        ExternalProcessProbe(),
        PlatformShellObjectProbe(),
        ChunkedScanProbe(),
    )
