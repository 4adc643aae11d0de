"""Request and response models for decimal commands."""
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    """A raw command, e.g. ``{"command": "INCRBY", "args": ["acct", "10.5"]}``."""
    command: str = Field(..., min_length=1, description="Command name, optionally BN.-prefixed")
    args: List[str] = Field(default_factory=list)


class CommandResponse(BaseModel):
    """Command result; ``null`` when a GET target does not exist."""
    result: Optional[str] = None


class DeltaRequest(BaseModel):
    """Decimal delta for INCRBY/DECRBY style updates."""
    delta: str = Field(..., description="Decimal literal, e.g. '10.5' or '-3'")


class BinaryOperationRequest(BaseModel):
    """Operands for a stateless binary operation."""
    lhs: str
    rhs: str


class ToFixedRequest(BaseModel):
    """Literal and digit count for a fixed-point rescale."""
    value: str
    digits: Union[int, str] = Field(..., description="Base-10 integer, e.g. 2 or \"2\"")


class ValueResponse(BaseModel):
    """A decimal value stored at a flat key or a hash field."""
    key: str
    field: Optional[str] = None
    value: str


class ResultResponse(BaseModel):
    """Result of a stateless operation."""
    result: str
