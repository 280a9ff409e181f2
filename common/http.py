"""Common HTTP helpers shared by the service layer."""
from typing import Dict, Any

from fastapi.responses import JSONResponse

from .errors import StyleError

XML_MEDIA_TYPE = "application/xml"


def error_response(code: str, message: str) -> Dict[str, Any]:
    """Generate a standardized error response as JSON."""
    return {"error": {"code": code, "message": message}}


def style_error_response(exc: StyleError) -> JSONResponse:
    """Render a StyleError with the status code it carries."""
    return JSONResponse(status_code=exc.status_code,
                        content=error_response(exc.code, exc.message))
