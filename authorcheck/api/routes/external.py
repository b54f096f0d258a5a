from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from authorcheck.api.deps import enforce_rate_limit, get_analysis_gateway
from authorcheck.core.errors import GatewayError, GatewayTimeout, InternalGatewayError, InvalidContentType, MethodNotAllowed
from authorcheck.core.logging import get_logger
from authorcheck.schemas.common import ExternalAnalysisResponse
from authorcheck.services.gateway import AnalysisGateway
from authorcheck.utils.http import is_json_request
from authorcheck.utils.request_body import read_json_body
from authorcheck.utils.trace import get_trace_id

router = APIRouter()
logger = get_logger(__name__)


@router.api_route(
    "/external",
    # Every method reaches the origin and rate-limit guards; CORS preflights never get here.
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_model=ExternalAnalysisResponse,
)
async def external_analysis(
    request: Request,
    identifier: str = Depends(enforce_rate_limit),
    gateway: AnalysisGateway = Depends(get_analysis_gateway),
):
    if request.method == "GET":
        logger.info("get_redirected", client=identifier)
        return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    if request.method != "POST":
        raise MethodNotAllowed()

    if not is_json_request(request):
        raise InvalidContentType()

    try:
        payload = await read_json_body(request)
        data = await gateway.analyze(payload.get("text"), payload.get("timeout"))
    except GatewayTimeout as exc:
        exc.error_id = get_trace_id()
        logger.warning("analysis_timeout", error_id=exc.error_id, client=identifier)
        raise
    except GatewayError:
        raise
    except Exception as exc:
        error_id = get_trace_id()
        logger.exception("analysis_unexpected_error", error_id=error_id)
        raise InternalGatewayError(error_id=error_id) from exc

    return ExternalAnalysisResponse(
        success=True,
        data=data,
        model=gateway.model,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
