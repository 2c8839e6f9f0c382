import logging
import os
import pathlib

import pytest

from conftest import FailingProbe

from bigfilesize import (
    BigFile,
    ChunkedScanProbe,
    ExternalProcessProbe,
    Measured,
    NativeSeekProbe,
    PlatformShellObjectProbe,
    ProtocolHeaderProbe,
    SizeConfig,
    SizeIndeterminate,
    SizeProbeChain,
    Unavailable,
)


class FixedProbe(FailingProbe):
    """A probe that always measures the same size."""

    def __init__(self, size: int, name: str = "fixed", **kwargs: bool) -> None:
        super().__init__(name, **kwargs)
        self.size = size

    def probe(self, file, config):  # type: ignore[no-untyped-def]
        super().probe(file, config)
        return Measured(self.size)


def test_default_probe_order() -> None:
    assert [probe.name for probe in SizeProbeChain().probes] == [
        "native-seek",
        "protocol-header",
        "external-process",
        "platform-shell-object",
        "chunked-scan",
    ]


def test_first_measurement_wins(sample_dir: pathlib.Path) -> None:
    first, second, third = FailingProbe("first"), FixedProbe(7, "second"), FixedProbe(9, "third")
    chain = SizeProbeChain(probes=[first, second, third])

    assert chain.measure(BigFile(sample_dir / "five.bin")) == 7
    assert len(first.calls) == 1
    assert len(second.calls) == 1
    assert third.calls == []


def test_path_absolutized_once_before_first_probe_that_needs_it(
    sample_dir: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(sample_dir)
    local = FailingProbe("local")
    remote = FailingProbe("remote", needs_absolute_path=True)
    later = FailingProbe("later", needs_absolute_path=True)
    f = BigFile("five.bin", chain=SizeProbeChain(probes=[local, remote, later]))

    absolutize_calls = []
    original = f.absolutize

    def counting_absolutize() -> str:
        absolutize_calls.append(f.path)
        return original()

    monkeypatch.setattr(f, "absolutize", counting_absolutize)

    with pytest.raises(SizeIndeterminate):
        f.size()

    absolute = os.path.realpath(sample_dir / "five.bin")
    assert local.calls == [("five.bin", False)]
    assert remote.calls == [(absolute, True)]
    assert later.calls == [(absolute, True)]
    assert absolutize_calls == ["five.bin"]


def test_exhaustion_raises(sample_dir: pathlib.Path) -> None:
    chain = SizeProbeChain(probes=[FailingProbe("a"), FailingProbe("b")])

    with pytest.raises(SizeIndeterminate, match="a: a always fails; b: b always fails"):
        chain.measure(BigFile(sample_dir / "five.bin"))


def test_size_indeterminate_is_os_error(sample_dir: pathlib.Path) -> None:
    with pytest.raises(OSError):
        SizeProbeChain(probes=[]).measure(BigFile(sample_dir / "five.bin"))


def test_exhaustion_is_logged(sample_dir: pathlib.Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="bigfilesize"):
        with pytest.raises(SizeIndeterminate):
            SizeProbeChain(probes=[FailingProbe("a")]).measure(BigFile(sample_dir / "five.bin"))

    assert "a: unavailable" in caplog.text
    assert "Could not determine the size" in caplog.text


def test_fast_mode_skips_slow_probe(sample_dir: pathlib.Path) -> None:
    slow = FixedProbe(5, "slow", slow=True)
    chain = SizeProbeChain(SizeConfig(fast_mode=True), probes=[FailingProbe("fast"), slow])

    with pytest.raises(SizeIndeterminate, match="slow: skipped in fast mode"):
        chain.measure(BigFile(sample_dir / "five.bin"))

    assert slow.calls == []


def test_slow_probe_runs_without_fast_mode(sample_dir: pathlib.Path) -> None:
    slow = FixedProbe(5, "slow", slow=True)
    chain = SizeProbeChain(SizeConfig(fast_mode=False), probes=[FailingProbe("fast"), slow])

    assert chain.measure(BigFile(sample_dir / "five.bin")) == 5
    assert len(slow.calls) == 1


def stub_fast_probes(monkeypatch: pytest.MonkeyPatch) -> None:
    for probe_class in (NativeSeekProbe, ProtocolHeaderProbe, ExternalProcessProbe, PlatformShellObjectProbe):
        monkeypatch.setattr(probe_class, "probe", lambda self, file, config: Unavailable("stubbed"))


@pytest.mark.parametrize("size", [4095, 4097])
def test_default_chain_falls_back_to_scan(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch, scan_only_config: SizeConfig, size: int
) -> None:
    stub_fast_probes(monkeypatch)
    p = tmp_path / "f.bin"
    p.write_bytes(b"a" * size)

    assert BigFile(p, config=scan_only_config).size() == size


def test_default_chain_fast_mode_never_scans(
    sample_dir: pathlib.Path, monkeypatch: pytest.MonkeyPatch, scan_only_config: SizeConfig
) -> None:
    stub_fast_probes(monkeypatch)

    def forbidden(self, file, config):  # type: ignore[no-untyped-def]
        raise AssertionError("the chunked scan must not run in fast mode")

    monkeypatch.setattr(ChunkedScanProbe, "probe", forbidden)
    config = SizeConfig(fast_mode=True, native_int_ceiling=scan_only_config.native_int_ceiling)

    with pytest.raises(SizeIndeterminate):
        BigFile(sample_dir / "five.bin", config=config).size()


def test_default_chain_without_processes(sample_dir: pathlib.Path) -> None:
    assert BigFile(sample_dir / "five.bin", config=SizeConfig(allow_subprocess=False)).size() == 5


def test_size_as_float_of_huge_value(sample_dir: pathlib.Path) -> None:
    huge = (1 << 80) + 1
    f = BigFile(sample_dir / "five.bin", chain=SizeProbeChain(probes=[FixedProbe(huge)]))

    assert f.size() == huge
    assert f.size(as_float=True) == float(huge)
    assert int(f.size(as_float=True)) != huge


def test_repr() -> None:
    chain = SizeProbeChain(SizeConfig(fast_mode=True), probes=[FailingProbe("a"), FailingProbe("b")])
    assert repr(chain) == "SizeProbeChain([a, b], fast_mode=True)"
