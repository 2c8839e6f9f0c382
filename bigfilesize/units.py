from typing import Literal

DecimalSizeUnit = Literal["B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB", "RB", "QB"]
BinarySizeUnit = Literal["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB", "RiB", "QiB"]

_DECIMAL_PREFIXES = ("K", "M", "G", "T", "P", "E", "Z", "Y", "R", "Q")

SIZE_UNIT_FACTORS: dict[str, int] = {"B": 1}
for _power, _prefix in enumerate(_DECIMAL_PREFIXES, start=1):
    SIZE_UNIT_FACTORS[f"{_prefix}B"] = 1000**_power
    SIZE_UNIT_FACTORS[f"{_prefix}iB"] = 1 << (10 * _power)


def convert_size(size: int, unit: DecimalSizeUnit | BinarySizeUnit) -> float:
    """Express a byte count in the given unit.

    >>> convert_size(41229, "KB")
    41.229

    :param size: The size in bytes
    :param unit: One of "B", "KB", ..., "QB" or their binary equivalents "KiB", ..., "QiB"
    :returns: The size in the given unit
    :raises ValueError: If the unit is unknown
    """
    if unit not in SIZE_UNIT_FACTORS:
        raise ValueError(f"Invalid size unit: {unit}")

    whole, remainder = divmod(size, SIZE_UNIT_FACTORS[unit])
    return whole + remainder / SIZE_UNIT_FACTORS[unit]
