from collections.abc import Callable
import decimal
from enum import Enum
import logging
from typing import Any

from .errors import NoArithmeticBackend

logger = logging.getLogger(__name__)

# comfortably beyond any 64-bit machine word
_SELF_TEST_BASE = (1 << 64) + 1
_SELF_TEST_STEP = (1 << 20) - 1

_EXACT_CONTEXT = decimal.Context(prec=100, traps=[decimal.Inexact, decimal.Overflow, decimal.Rounded])


class MathBackend(Enum):
    """An enumeration of the arbitrary-precision arithmetic backends used to accumulate sizes."""

    INTEGER = "integer"
    DECIMAL = "decimal"

    def from_int(self, value: int) -> Any:
        """Convert a Python integer into this backend's number type.

        :param value: The value to convert
        :returns: The value in this backend's representation
        """
        if self is MathBackend.DECIMAL:
            return _EXACT_CONTEXT.create_decimal(value)

        return int(value)

    def add(self, total: Any, amount: int) -> Any:
        """Return `total + amount`, computed exactly in this backend.

        :param total: The running total, in this backend's representation
        :param amount: The amount to add
        :returns: The new total, in this backend's representation
        :raises decimal.Inexact: (DECIMAL) if the addition could not be carried out exactly
        """
        if self is MathBackend.DECIMAL:
            return _EXACT_CONTEXT.add(total, amount)

        return total + amount

    def to_int(self, value: Any) -> int:
        """Convert a value from this backend's number type back into a Python integer."""
        if self is MathBackend.DECIMAL:
            return int(value.to_integral_exact(context=_EXACT_CONTEXT))

        return int(value)


def _passes_self_test(backend: MathBackend) -> bool:
    try:
        total = backend.add(backend.from_int(_SELF_TEST_BASE), _SELF_TEST_STEP)
        return backend.to_int(total) == _SELF_TEST_BASE + _SELF_TEST_STEP
    except (ArithmeticError, TypeError, ValueError) as e:
        logger.debug("math backend %s failed its self test: %s", backend.value, e)
        return False


def detect_math_backend(
    candidates: tuple[MathBackend, ...] = (MathBackend.INTEGER, MathBackend.DECIMAL),
    *,
    check: Callable[[MathBackend], bool] = _passes_self_test,
) -> MathBackend:
    """Return the first backend that can add exactly beyond the 64-bit range.

    :param candidates: The backends to try, in order of preference
    :param check: The predicate used to decide whether a backend works
    :returns: The first working backend
    :raises NoArithmeticBackend: If none of the candidates works
    """
    for backend in candidates:
        if check(backend):
            logger.debug("selected math backend: %s", backend.value)
            return backend

    raise NoArithmeticBackend(
        "No arbitrary-precision arithmetic backend is available "
        f"(tried: {', '.join(b.value for b in candidates) or 'none'})."
    )
