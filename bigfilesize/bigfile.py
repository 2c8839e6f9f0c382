import logging
import os
import shutil
import sys
from typing import Literal, overload

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from . import filesystem
from .chain import SizeProbeChain
from .config import SizeConfig
from .errors import FileNotFound
from .units import BinarySizeUnit, convert_size, DecimalSizeUnit

logger = logging.getLogger(__name__)


class BigFile:
    """A regular file whose exact size is wanted, however large it is.

    >>> BigFile.from_path("/data/disk.img").size()
    6442450944

    `path` may change over the object's lifetime: it is made absolute before some probes run, and follows the file
    when it is moved or relocated. `resolved` records whether it has been made absolute.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        config: SizeConfig | None = None,
        chain: SizeProbeChain | None = None,
    ) -> None:
        """Wrap the file at the given path.

        :param path: The path of an existing regular file
        :param config: The settings used to measure the file (ignored if `chain` is given)
        :param chain: The probe chain used to measure the file

        :raises FileNotFound: If the path does not point to an existing regular file
        """
        path = os.fspath(path)
        if not filesystem.exists(path) or not filesystem.is_regular_file(path):
            raise FileNotFound(f"File not found at {path}")

        self.path: str = path
        self.resolved: bool = False
        self.chain = chain if chain is not None else SizeProbeChain(config)

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], *, config: SizeConfig | None = None) -> Self:
        """Return a new object for the file at the given path.

        :raises FileNotFound: If the path does not point to an existing regular file
        """
        return cls(path, config=config)

    def __fspath__(self) -> str:
        return self.path

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.path!r})"

    def get_path(self, *, absolutize: bool = False) -> str:
        """Return the current path of the file.

        :param absolutize: If True, make the path absolute (in place) first
        :returns: The path
        """
        if absolutize:
            self.absolutize()

        return self.path

    def absolutize(self) -> str:
        """Convert the path to its canonical absolute form, in place.

        >>> f = BigFile("data/../disk.img")  # in /home/user
        >>> f.absolutize()
        '/home/user/disk.img'

        :returns: The new path
        """
        self.path = filesystem.absolute_path(self.path)
        self.resolved = True
        return self.path

    def relocate(self, to: str | os.PathLike[str]) -> None:
        """Point this object at another path, without touching the filesystem.

        :param to: The new path
        """
        self.path = os.fspath(to)
        self.resolved = os.path.isabs(self.path)

    def move(self, to: str | os.PathLike[str]) -> bool:
        """Move the file to the given destination and follow it there.

        A plain rename is tried first (overwriting an existing destination); across filesystems the file is copied
        and the original removed. `to` is the new path of the file itself: an existing directory is refused.

        >>> BigFile("/data/disk.img").move("/backup/disk.img")
        True

        :param to: The destination path
        :returns: True if the file was moved, False otherwise
        """
        if os.path.isdir(to):
            logger.warning("Refusing to move %s onto the directory %s", self.path, os.fspath(to))
            return False

        try:
            dest = shutil.move(self.path, os.fspath(to), copy_function=shutil.copy2)
        except (OSError, shutil.Error) as e:
            logger.warning("Failed to move %s to %s: %s", self.path, os.fspath(to), e)
            return False

        self.relocate(os.fspath(dest))
        return True

    @overload
    def size(self, as_float: Literal[False] = False) -> int: ...

    @overload
    def size(self, as_float: Literal[True]) -> float: ...

    def size(self, as_float: bool = False) -> int | float:
        """Return the exact size of the file in bytes.

        >>> BigFile("/path/to/file/with/5/bytes").size()
        5
        >>> BigFile("/path/to/file/with/5/bytes").size(as_float=True)
        5.0

        :param as_float:
            If True, convert the result to a float. Sizes above 2**53 bytes lose precision in the conversion.

        :returns: The size of the file

        :raises SizeIndeterminate: If none of the chain's probes could measure the file
        """
        if as_float:
            return float(self.size(as_float=False))

        return self.chain.measure(self)

    def size_in(self, unit: DecimalSizeUnit | BinarySizeUnit) -> float:
        """Return the size of the file in the given unit.

        >>> BigFile("/path/to/file/with/size/41229/bytes").size_in("KB")
        41.229
        >>> BigFile("/path/to/file/with/size/41229/bytes").size_in("KiB")
        40.2626953125

        :param unit: One of "B", "KB", ..., "QB" or their binary equivalents "KiB", ..., "QiB"
        :returns: The size of the file in the given unit

        :raises ValueError: If the unit is unknown
        :raises SizeIndeterminate: If none of the chain's probes could measure the file
        """
        return convert_size(self.size(), unit)
