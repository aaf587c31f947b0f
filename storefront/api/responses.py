"""
Shared response helper: ActionResult -> JSONResponse with the result's status
"""
from fastapi.responses import JSONResponse

from storefront.domain.results import ActionResult


def respond(result: ActionResult) -> JSONResponse:
    return JSONResponse(
        status_code=result.status_code,
        content=result.model_dump(mode="json", exclude_none=True),
    )
