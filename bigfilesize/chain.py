from collections.abc import Iterable
import logging
from typing import TYPE_CHECKING

from .config import SizeConfig
from .errors import SizeIndeterminate
from .probes import default_probes, Measured, SizeProbe

if TYPE_CHECKING:
    from .bigfile import BigFile

logger = logging.getLogger(__name__)


class SizeProbeChain:
    """Try a sequence of size probes in order and return the first measurement.

    Probes marked `slow` are skipped when the configuration enables fast mode. The file's path is made absolute,
    once and in place, before the first probe that asks for it.
    """

    def __init__(self, config: SizeConfig | None = None, probes: Iterable[SizeProbe] | None = None) -> None:
        """Create a chain.

        :param config: The settings every probe is run with (defaults if None)
        :param probes: The probes to try, in order (the standard probes if None)
        """
        self.config = config if config is not None else SizeConfig()
        self.probes: tuple[SizeProbe, ...] = tuple(probes) if probes is not None else default_probes()

    def __repr__(self) -> str:
        names = ", ".join(probe.name for probe in self.probes)
        return f"{self.__class__.__name__}([{names}], fast_mode={self.config.fast_mode})"

    def measure(self, file: "BigFile") -> int:
        """Return the size of the file in bytes.

        :param file: The file to measure
        :returns: The exact size of the file
        :raises SizeIndeterminate: If no probe could measure the file
        """
        failures: list[str] = []

        for probe in self.probes:
            if probe.slow and self.config.fast_mode:
                logger.debug("%s: skipped, fast mode is enabled", probe.name)
                failures.append(f"{probe.name}: skipped in fast mode")
                continue

            if probe.needs_absolute_path and not file.resolved:
                file.absolutize()

            result = probe.probe(file, self.config)
            if isinstance(result, Measured):
                logger.debug("%s: %s is %d bytes", probe.name, file.path, result.size)
                return result.size

            logger.debug("%s: unavailable for %s (%s)", probe.name, file.path, result.reason)
            failures.append(f"{probe.name}: {result.reason}")

        logger.warning("Could not determine the size of %s with any probe", file.path)
        raise SizeIndeterminate(f"Cannot determine the size of {file.path}. Tried: {'; '.join(failures) or 'nothing'}")
