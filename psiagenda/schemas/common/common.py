# psiagenda/schemas/common/common.py
from pydantic import BaseModel
from typing import Any, Optional

class ErrorResponse(BaseModel):
    success: bool = False
    data: Optional[Any] = None
    error: Any

# Envelope written by the exception handlers, documented on the routers
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    404: {"model": ErrorResponse, "description": "Not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    storage: str
    timestamp: str
