"""Pydantic models for the bignum API."""

from bignum.models.common import (
    HealthResponse,
    ErrorResponse,
)

from bignum.models.commands import (
    CommandRequest,
    CommandResponse,
    DeltaRequest,
    BinaryOperationRequest,
    ToFixedRequest,
    ValueResponse,
    ResultResponse,
)

__all__ = [
    # Common
    "HealthResponse",
    "ErrorResponse",
    # Commands
    "CommandRequest",
    "CommandResponse",
    "DeltaRequest",
    "BinaryOperationRequest",
    "ToFixedRequest",
    "ValueResponse",
    "ResultResponse",
]
