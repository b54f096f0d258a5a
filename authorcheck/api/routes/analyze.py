from __future__ import annotations

import time

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from authorcheck.api.deps import enforce_rate_limit, get_analysis_gateway
from authorcheck.core.config import Settings, get_settings
from authorcheck.core.errors import GatewayError, InternalGatewayError, InvalidInput
from authorcheck.core.logging import get_logger
from authorcheck.schemas.analysis import AnalysisResult
from authorcheck.services.gateway import AnalysisGateway
from authorcheck.services.orchestrator import AnalysisOrchestrator, LocalGatewayClient
from authorcheck.utils.files import extract_text_from_upload
from authorcheck.utils.http import is_json_request
from authorcheck.utils.request_body import read_json_body
from authorcheck.utils.trace import get_trace_id

router = APIRouter()
logger = get_logger(__name__)


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_content(
    request: Request,
    identifier: str = Depends(enforce_rate_limit),
    settings: Settings = Depends(get_settings),
    gateway: AnalysisGateway = Depends(get_analysis_gateway),
    file: UploadFile | None = File(default=None),
    text_form: str | None = Form(default=None, alias="text"),
):
    start = time.perf_counter()
    source = "paste"

    if is_json_request(request):
        payload = await read_json_body(request)
        text = payload.get("text", "")
    elif file is not None:
        text = await extract_text_from_upload(file, settings.max_upload_bytes)
        source = "upload"
    else:
        text = text_form or ""

    if not isinstance(text, str):
        raise InvalidInput("Invalid text input")

    orchestrator = AnalysisOrchestrator.from_settings(settings, LocalGatewayClient(gateway))
    try:
        result = await orchestrator.analyze(text)
    except GatewayError:
        raise
    except Exception as exc:
        error_id = get_trace_id()
        logger.exception("analyze_unexpected_error", error_id=error_id)
        raise InternalGatewayError(error_id=error_id) from exc

    logger.info(
        "analyze_completed",
        client=identifier,
        source=source,
        word_count=result.word_count,
        latency_ms=round((time.perf_counter() - start) * 1000, 3),
    )
    return result
