from collections.abc import Iterator
import pathlib

import pytest

from bigfilesize import SizeConfig, Unavailable


@pytest.fixture(scope="function")
def sample_dir(tmp_path: pathlib.Path) -> Iterator[pathlib.Path]:
    root = tmp_path / "samples"
    root.mkdir()

    (root / "empty.bin").touch()
    (root / "five.bin").write_bytes(b"hello")
    (root / "kilo.bin").write_bytes(b"x" * 41229)
    (root / "mebi-plus.bin").write_bytes(b"\0" * ((1 << 20) + 7))
    (root / "with space 'quoted'.bin").write_bytes(b"abc")
    (root / "subdir").mkdir()

    yield root


@pytest.fixture(scope="function")
def scan_only_config() -> SizeConfig:
    """A config whose chunked scan starts at offset 4095, so that small files can exercise it."""
    return SizeConfig(native_int_ceiling=4096, chunk_size=1000)


class FailingProbe:
    """A probe that never measures anything, recording each call."""

    def __init__(self, name: str = "failing", *, needs_absolute_path: bool = False, slow: bool = False) -> None:
        self.name = name
        self.needs_absolute_path = needs_absolute_path
        self.slow = slow
        self.calls: list[tuple[str, bool]] = []

    def probe(self, file, config):  # type: ignore[no-untyped-def]
        self.calls.append((file.path, file.resolved))
        return Unavailable(f"{self.name} always fails")
