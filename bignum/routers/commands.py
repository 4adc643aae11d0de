"""Raw command endpoint."""
from fastapi import APIRouter
from bignum.commands import get_dispatcher
from bignum.models import CommandRequest, CommandResponse

router = APIRouter(prefix="/api/v1/commands", tags=["Commands"])


@router.post(
    "",
    response_model=CommandResponse,
    summary="Execute Command",
    description="Run one command from the GET/INCR/HINCRBY/ADD/TO_FIXED family.",
)
def execute_command(request: CommandRequest):
    """Execute a command; a missing GET/HGET target yields ``result: null``."""
    result = get_dispatcher().execute(request.command, *request.args)
    return CommandResponse(result=result)
