"""Stateless binary arithmetic on decimal literals."""
import decimal
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, Union

import structlog

from bignum.errors import DivisionByZero, NumericOverflow
from bignum.numeric import codec
from bignum.numeric.codec import Text
from bignum.numeric.context import current

logger = structlog.get_logger(__name__)


class Operation(str, Enum):
    """Binary operations supported by the engine."""
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"


_OPERATIONS: Dict[Operation, Callable[[decimal.Context, Decimal, Decimal], Decimal]] = {
    Operation.ADD: decimal.Context.add,
    Operation.SUB: decimal.Context.subtract,
    Operation.MUL: decimal.Context.multiply,
    Operation.DIV: decimal.Context.divide,
}


def compute(op: Union[Operation, str], lhs: Decimal, rhs: Decimal) -> Decimal:
    """Apply ``op`` to two parsed operands under the numeric context.

    Results wider than the precision are rounded with the context rounding
    (truncated toward zero by default).

    Raises:
        DivisionByZero: ``op`` is division and ``rhs`` is exactly zero.
        NumericOverflow: The result exponent exceeds the context maximum.
    """
    op = Operation(op)
    if op is Operation.DIV and rhs.is_zero():
        raise DivisionByZero()

    ctx = current().new_context()
    try:
        return _OPERATIONS[op](ctx, lhs, rhs)
    except decimal.Overflow as exc:
        raise NumericOverflow(f"result of {op.value} exceeds the maximum exponent") from exc


def apply(op: Union[Operation, str], lhs_text: Text, rhs_text: Text) -> str:
    """Parse both operands, compute, and format the result.

    Both operands are parsed before any arithmetic so a malformed literal
    never reaches the division-by-zero check.
    """
    op = Operation(op)
    lhs = codec.parse(lhs_text)
    rhs = codec.parse(rhs_text)
    result = codec.format(compute(op, lhs, rhs))
    logger.debug("binary_operation_applied", op=op.value, result=result)
    return result
