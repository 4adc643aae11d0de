"""Read-modify-write engine for decimal values held in a store.

Stored values are canonical decimal text. ``get`` reads and reformats them;
``increment`` reads the current value (absent counts as zero), applies a
signed delta and writes the result back through the store's atomic
``update`` so concurrent increments of the same key never interleave.
"""
from decimal import Decimal
from typing import Optional

import structlog

from bignum.numeric import codec, context, operators
from bignum.numeric.codec import Text
from bignum.numeric.operators import Operation
from bignum.services import KeyRef, StoreClient, get_redis_store

logger = structlog.get_logger(__name__)

ZERO = Decimal(0)
ONE = Decimal(1)


class DecimalEngine:
    """Decimal get/increment operations over a ``StoreClient``."""

    def __init__(self, store: StoreClient) -> None:
        self.store = store

    def get(self, ref: KeyRef, fractional_digits: int = 0) -> Optional[str]:
        """Return the value at ``ref`` in canonical form, or ``None`` if absent.

        Raises:
            ConversionError: The stored text is not a decimal.
            StoreError: The store failed.
        """
        context.current()
        text = self.store.fetch(ref)
        if text is None:
            return None
        return codec.format(codec.parse(text, fractional_digits))

    def increment(self, ref: KeyRef, delta: Decimal = ONE, sign: int = 1) -> str:
        """Add (``sign=1``) or subtract (``sign=-1``) ``delta`` at ``ref``.

        Returns:
            The newly stored text.

        Raises:
            ConversionError: The stored text is not a decimal; nothing is written.
            NumericOverflow: The result exceeds the context exponent range.
            StoreError: The read or the write failed.
        """
        context.current()
        if sign not in (1, -1):
            raise ValueError(f"sign must be 1 or -1, got {sign!r}")
        op = Operation.ADD if sign == 1 else Operation.SUB

        def apply_delta(current: Optional[str]) -> str:
            if current is None:
                logger.debug("absent_value_treated_as_zero", key=str(ref))
                value = ZERO
            else:
                value = codec.parse(current)
            return codec.format(operators.compute(op, value, delta))

        result = self.store.update(ref, apply_delta)
        logger.info(
            "decimal_incremented",
            key=str(ref),
            op=op.value,
            delta=codec.format(delta),
            result=result,
        )
        return result

    def increment_by(self, ref: KeyRef, delta_text: Text, sign: int = 1) -> str:
        """Parse ``delta_text`` and increment by it.

        A malformed delta raises ``ConversionError`` before the store is touched.
        """
        delta = codec.parse(delta_text)
        return self.increment(ref, delta, sign)

    @staticmethod
    def fixed_point(text: Text, fractional_digits: int) -> str:
        """Rescale a literal to ``fractional_digits`` digits and format it."""
        return codec.format(codec.rescale(codec.parse(text), fractional_digits))

    @staticmethod
    def apply(op: Operation, lhs_text: Text, rhs_text: Text) -> str:
        return operators.apply(op, lhs_text, rhs_text)


# Singleton instance
_engine: Optional[DecimalEngine] = None


def get_engine() -> DecimalEngine:
    """Get or create the engine bound to the Redis store singleton."""
    global _engine
    if _engine is None:
        _engine = DecimalEngine(get_redis_store())
    return _engine
