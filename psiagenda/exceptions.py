from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any

class APIException(HTTPException):
    """Raised by the services; rendered through the error envelope."""
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

def error_envelope(error: Any) -> dict:
    """Body shared by every error response (see schemas.common.ErrorResponse)"""
    return {"success": False, "data": None, "error": error}

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.detail))

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Keep pydantic's field-level detail so the client can point at the bad input
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=422, content=error_envelope(errors))
