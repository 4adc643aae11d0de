"""Stateless decimal arithmetic."""
from fastapi import APIRouter
from bignum.engine import DecimalEngine
from bignum.models import BinaryOperationRequest, ResultResponse, ToFixedRequest
from bignum.numeric import Operation, parse_digits

router = APIRouter(prefix="/api/v1/arithmetic", tags=["Arithmetic"])


@router.post("/to_fixed", response_model=ResultResponse, summary="Rescale Literal")
async def to_fixed(request: ToFixedRequest):
    """Rescale ``value`` to exactly ``digits`` fractional digits (truncating)."""
    return ResultResponse(result=DecimalEngine.fixed_point(request.value, parse_digits(request.digits)))


@router.post("/{op}", response_model=ResultResponse, summary="Binary Operation")
async def binary_operation(op: Operation, request: BinaryOperationRequest):
    """Compute ``lhs <op> rhs`` for op in add, sub, mul, div."""
    return ResultResponse(result=DecimalEngine.apply(op, request.lhs, request.rhs))
