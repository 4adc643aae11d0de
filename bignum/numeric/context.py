"""Process-wide numeric context.

The context mirrors the IEEE 754 decimal128 interchange format (34 significant
digits, exponent range [-6143, 6144], clamped exponents) with truncating
rounding. It is configured once at start-up and only read afterwards; each
operation works on its own ``decimal.Context`` built by ``new_context`` so the
status flags are invocation-local.
"""
import decimal
import threading
from dataclasses import dataclass
from typing import Optional

import structlog

from bignum.config import Settings
from bignum.errors import ContextNotInitialized

logger = structlog.get_logger(__name__)

ROUNDING_MODES = frozenset({
    decimal.ROUND_DOWN,
    decimal.ROUND_UP,
    decimal.ROUND_CEILING,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_05UP,
})

_TRAPS = [decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow]


@dataclass(frozen=True)
class NumericContext:
    """Immutable numeric configuration shared by every operation."""

    precision: int = 34
    rounding: str = decimal.ROUND_DOWN
    emax: int = 6144
    emin: int = -6143
    max_text_length: int = 4096

    def __post_init__(self) -> None:
        if self.rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding}")
        if self.precision < 1:
            raise ValueError("Precision must be positive")
        if self.max_text_length < 1:
            raise ValueError("Maximum text length must be positive")

    @classmethod
    def from_settings(cls, settings: Settings) -> "NumericContext":
        return cls(
            precision=settings.decimal_precision,
            rounding=settings.decimal_rounding.upper(),
            emax=settings.decimal_emax,
            emin=settings.decimal_emin,
            max_text_length=settings.max_value_length,
        )

    def new_context(self) -> decimal.Context:
        """Return a fresh ``decimal.Context`` with all status flags cleared."""
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            Emin=self.emin,
            Emax=self.emax,
            capitals=1,
            clamp=1,
            flags=[],
            traps=_TRAPS,
        )


_active: Optional[NumericContext] = None
_lock = threading.Lock()


def init(config: Optional[NumericContext] = None) -> NumericContext:
    """Install the process-wide context.

    Calling again with an equal configuration is a no-op; a different
    configuration is rejected because the context never changes once set.
    """
    global _active
    config = config or NumericContext()
    with _lock:
        if _active is None:
            _active = config
            logger.info(
                "numeric_context_initialized",
                precision=config.precision,
                rounding=config.rounding,
                emax=config.emax,
                emin=config.emin,
            )
        elif _active != config:
            raise ValueError("Numeric context is already initialized with a different configuration")
    return _active


def current() -> NumericContext:
    """Return the installed context or fail if ``init`` has not run."""
    if _active is None:
        raise ContextNotInitialized()
    return _active


def is_initialized() -> bool:
    return _active is not None


def reset() -> None:
    """Forget the installed context. Only meant for test isolation."""
    global _active
    with _lock:
        _active = None
