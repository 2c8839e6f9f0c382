from enum import auto, Enum
import os
import stat


class PathType(Enum):
    """What a path points to on disk, as far as size measurement is concerned."""
    REGULAR_FILE = auto()
    DIRECTORY = auto()
    OTHER = auto()
    DOES_NOT_EXIST = auto()


def identify_path_type(path: str | os.PathLike[str]) -> PathType:
    """Identify what the given path points to, following symlinks.

    :param path: The path to inspect
    :returns: The path type (PathType.DOES_NOT_EXIST if nothing is there or the path is not a valid path at all)
    :raises PermissionError: If the path cannot be inspected
    """
    try:
        mode = os.stat(path).st_mode
    except (FileNotFoundError, NotADirectoryError, ValueError):
        return PathType.DOES_NOT_EXIST

    if stat.S_ISREG(mode):
        return PathType.REGULAR_FILE

    if stat.S_ISDIR(mode):
        return PathType.DIRECTORY

    return PathType.OTHER


def exists(path: str | os.PathLike[str]) -> bool:
    """Return True if something exists at the given path. Paths that cannot be inspected count as missing."""
    try:
        return identify_path_type(path) != PathType.DOES_NOT_EXIST
    except OSError:
        return False


def is_regular_file(path: str | os.PathLike[str]) -> bool:
    """Return True if the path points to a regular file (directories, devices, pipes, etc. do not count)."""
    try:
        return identify_path_type(path) == PathType.REGULAR_FILE
    except OSError:
        return False


def absolute_path(path: str | os.PathLike[str]) -> str:
    """Return the canonical absolute form of the path, with symlinks and ".." resolved.

    >>> absolute_path("a/../b.txt")  # in /home/user
    '/home/user/b.txt'
    """
    return os.path.realpath(path)
