"""Decimal values stored at flat keys and hash fields."""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from bignum.engine import ONE, get_engine
from bignum.models import DeltaRequest, ValueResponse
from bignum.numeric import parse_digits
from bignum.services import KeyRef

router = APIRouter(prefix="/api/v1", tags=["Keys"])

_DIGITS = Query("0", description="Fractional digits to rescale the value to")


def _read(ref: KeyRef, digits: str) -> str:
    value = get_engine().get(ref, parse_digits(digits))
    if value is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{ref} not found"
        )
    return value


def _response(key: str, field: Optional[str], value: str) -> ValueResponse:
    return ValueResponse(key=key, field=field, value=value)


# ── flat keys ────────────────────────────────────────────────────────────────

@router.get("/keys/{key}", response_model=ValueResponse, summary="Get Value")
def get_value(key: str, digits: str = _DIGITS):
    """Read the decimal at ``key``, optionally rescaled."""
    return _response(key, None, _read(KeyRef.flat(key), digits))


@router.post("/keys/{key}/incr", response_model=ValueResponse, summary="Increment by One")
def incr(key: str):
    return _response(key, None, get_engine().increment(KeyRef.flat(key), ONE, 1))


@router.post("/keys/{key}/decr", response_model=ValueResponse, summary="Decrement by One")
def decr(key: str):
    return _response(key, None, get_engine().increment(KeyRef.flat(key), ONE, -1))


@router.post("/keys/{key}/incrby", response_model=ValueResponse, summary="Increment by Delta")
def incrby(key: str, request: DeltaRequest):
    return _response(key, None, get_engine().increment_by(KeyRef.flat(key), request.delta, 1))


@router.post("/keys/{key}/decrby", response_model=ValueResponse, summary="Decrement by Delta")
def decrby(key: str, request: DeltaRequest):
    return _response(key, None, get_engine().increment_by(KeyRef.flat(key), request.delta, -1))


# ── hash fields ──────────────────────────────────────────────────────────────

@router.get("/hashes/{container}/{field}", response_model=ValueResponse, summary="Get Hash Field")
def hget(container: str, field: str, digits: str = _DIGITS):
    """Read the decimal stored in ``field`` of hash ``container``."""
    return _response(container, field, _read(KeyRef.in_hash(container, field), digits))


@router.post("/hashes/{container}/{field}/incr", response_model=ValueResponse, summary="Increment Hash Field")
def hincr(container: str, field: str):
    ref = KeyRef.in_hash(container, field)
    return _response(container, field, get_engine().increment(ref, ONE, 1))


@router.post("/hashes/{container}/{field}/decr", response_model=ValueResponse, summary="Decrement Hash Field")
def hdecr(container: str, field: str):
    ref = KeyRef.in_hash(container, field)
    return _response(container, field, get_engine().increment(ref, ONE, -1))


@router.post("/hashes/{container}/{field}/incrby", response_model=ValueResponse, summary="Increment Hash Field by Delta")
def hincrby(container: str, field: str, request: DeltaRequest):
    ref = KeyRef.in_hash(container, field)
    return _response(container, field, get_engine().increment_by(ref, request.delta, 1))


@router.post("/hashes/{container}/{field}/decrby", response_model=ValueResponse, summary="Decrement Hash Field by Delta")
def hdecrby(container: str, field: str, request: DeltaRequest):
    ref = KeyRef.in_hash(container, field)
    return _response(container, field, get_engine().increment_by(ref, request.delta, -1))
