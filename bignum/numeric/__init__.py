"""Decimal value engine: numeric context, codec and binary operators."""
from bignum.numeric.context import NumericContext, current, init, is_initialized
from bignum.numeric.codec import format, parse, parse_digits, rescale
from bignum.numeric.operators import Operation, apply, compute

__all__ = [
    "NumericContext",
    "current",
    "init",
    "is_initialized",
    "format",
    "parse",
    "parse_digits",
    "rescale",
    "Operation",
    "apply",
    "compute",
]
