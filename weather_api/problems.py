"""RFC 7807 problem detail responses."""
from http import HTTPStatus
from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(
    status_code: int,
    detail: Optional[str] = None,
    extensions: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Build a problem detail body with the reason phrase as title.

    ``extensions`` are added as extra members next to the standard ones.
    """
    content = {
        "type": "about:blank",
        "title": HTTPStatus(status_code).phrase,
        "status": status_code,
        "detail": detail,
    }
    content.update(extensions or {})
    return JSONResponse(status_code=status_code, media_type=PROBLEM_MEDIA_TYPE, content=content)
