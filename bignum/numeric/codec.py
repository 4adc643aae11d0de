"""Text <-> Decimal conversion under the numeric context.

Values are stored as canonical scientific notation, the same form
``Decimal.__str__`` produces, so ``parse(format(v)) == v`` for every value the
context can represent.
"""
import decimal
import re
from decimal import Decimal
from typing import Union

from bignum.errors import ConversionError, InvalidDigits, NumericOverflow
from bignum.numeric.context import current

Text = Union[str, bytes]

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_LITERAL = re.compile(r"-?(?:0|[1-9]\d*)", re.ASCII)

# Same range as a signed 64-bit integer argument.
_DIGITS_MIN = -(2**63)
_DIGITS_MAX = 2**63 - 1


def _to_str(text: Text) -> str:
    if isinstance(text, bytes):
        try:
            return text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConversionError() from exc
    if not isinstance(text, str):
        raise ConversionError()
    return text


def parse(text: Text, fractional_digits: int = 0) -> Decimal:
    """Parse a decimal literal.

    Args:
        text: Literal such as ``"-12.50"`` or ``"1.5E+3"``.
        fractional_digits: When non-zero, rescale the parsed value to exactly
            this many digits after the decimal point.

    Returns:
        The parsed value, rounded to the context precision.

    Raises:
        ConversionError: ``text`` is not a decimal literal.
        NumericOverflow: The exponent is beyond the context limits, or the
            rescaled value needs more digits than the precision allows.
    """
    numeric = current()
    text = _to_str(text)
    if len(text) > numeric.max_text_length or not _DECIMAL_LITERAL.fullmatch(text):
        raise ConversionError()

    ctx = numeric.new_context()
    ctx.traps[decimal.InvalidOperation] = False
    try:
        value = ctx.create_decimal(text)
    except decimal.Overflow as exc:
        raise NumericOverflow(f"value '{text}' exceeds the maximum exponent") from exc
    if ctx.flags[decimal.InvalidOperation] or not value.is_finite():
        raise ConversionError()

    if fractional_digits:
        value = rescale(value, fractional_digits)
    return value


def format(value: Decimal) -> str:
    """Render ``value`` in canonical scientific notation."""
    return str(value)


def rescale(value: Decimal, fractional_digits: int) -> Decimal:
    """Force exactly ``fractional_digits`` digits after the decimal point.

    Extra digits are removed with the context rounding and missing digits are
    zero-padded. A negative count rescales to a multiple of
    ``10 ** -fractional_digits``.

    Raises:
        NumericOverflow: The result would need more significant digits than
            the precision, or the exponent is outside the context range.
    """
    ctx = current().new_context()
    error = NumericOverflow(f"cannot rescale '{value}' to {fractional_digits} fractional digits")
    if not ctx.Etiny() <= -fractional_digits <= ctx.Emax:
        raise error
    exponent = Decimal((0, (1,), -fractional_digits))
    try:
        return ctx.quantize(value, exponent)
    except decimal.InvalidOperation as exc:
        raise error from exc


def parse_digits(text: Union[Text, int]) -> int:
    """Parse a fractional-digit count given as a base-10 integer."""
    if isinstance(text, bool):
        raise InvalidDigits()
    if isinstance(text, int):
        digits = text
    else:
        try:
            text = _to_str(text)
        except ConversionError as exc:
            raise InvalidDigits() from exc
        if not _INTEGER_LITERAL.fullmatch(text):
            raise InvalidDigits()
        digits = int(text)
    if not _DIGITS_MIN <= digits <= _DIGITS_MAX:
        raise InvalidDigits()
    return digits
