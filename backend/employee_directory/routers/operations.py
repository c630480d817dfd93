"""The single endpoint through which every directory operation is invoked."""
import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, Field, ValidationError

from ..config import Settings
from ..dependencies import get_app_settings, get_resolvers
from ..errors import format_error
from ..exceptions import DirectoryError
from ..operations import execute
from ..resolvers import Resolvers

logger = logging.getLogger("employee_directory.api")

router = APIRouter(tags=["operations"])


class OperationRequest(BaseModel):
    """Name of the operation to run and its arguments."""

    operation: str
    variables: dict[str, Any] = Field(default_factory=dict)


@router.post("/api")
async def run_operation(
    payload: OperationRequest,
    resolvers: Resolvers = Depends(get_resolvers),
    settings: Settings = Depends(get_app_settings),
) -> dict[str, Any]:
    """Run one operation; failures are reported in `errors`, never as HTTP errors."""

    try:
        result = await execute(resolvers, payload.operation, payload.variables)
    except (DirectoryError, ValidationError) as exc:
        error = format_error(exc, payload.operation, settings.expose_error_traces)
        return {"data": None, "errors": [error]}
    except Exception as exc:
        logger.exception("Operation %s raised an unexpected error", payload.operation)
        error = format_error(exc, payload.operation, settings.expose_error_traces)
        return {"data": None, "errors": [error]}

    return {"data": {payload.operation: jsonable_encoder(result)}}
