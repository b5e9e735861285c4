"""
Uniform JSON envelope: ``{success, message, data?, errors?}``.
"""
import logging
from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from nomination_service.errors import FieldError, NominationError, StorageFault, ValidationError

logger = logging.getLogger(__name__)


def envelope(success: bool, message: str, data: Any = None, errors: Optional[List[FieldError]] = None) -> dict:
    body = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = [e.to_dict() for e in errors]
    return body


def success_response(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(envelope(True, message, data)))


def error_response(exc: Exception, action: str = "request") -> JSONResponse:
    """Map an exception to its status and a client-safe envelope.

    Anything outside the NominationError hierarchy is logged and reported as
    a generic server error.
    """
    if not isinstance(exc, NominationError):
        logger.error("nomination_%s_unexpected_error: %s", action, exc, exc_info=exc)
        exc = StorageFault()
    errors = exc.errors if isinstance(exc, ValidationError) else None
    return JSONResponse(status_code=exc.status_code, content=envelope(False, exc.message, errors=errors))
