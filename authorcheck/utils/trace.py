from __future__ import annotations

import uuid
from contextvars import ContextVar

from fastapi import Request

TRACE_HEADER = "x-trace-id"

trace_id_ctx: ContextVar[str] = ContextVar("trace_id", default="")


def make_trace_id() -> str:
    return uuid.uuid4().hex


async def trace_context_middleware(request: Request, call_next):
    # Caller supplied ids are accepted only when they look like ours.
    supplied = (request.headers.get(TRACE_HEADER) or "").strip()
    trace_id = supplied if supplied.isalnum() and len(supplied) <= 64 else make_trace_id()
    token = trace_id_ctx.set(trace_id)
    try:
        response = await call_next(request)
        response.headers[TRACE_HEADER] = trace_id
        return response
    finally:
        trace_id_ctx.reset(token)


def get_trace_id() -> str:
    return trace_id_ctx.get() or make_trace_id()
