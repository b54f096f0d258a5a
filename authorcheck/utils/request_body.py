from __future__ import annotations

import json
from typing import Any

from fastapi import Request
from starlette.requests import ClientDisconnect

from authorcheck.core.errors import ClientDisconnected, InvalidInput


async def read_json_body(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ClientDisconnect as exc:
        raise ClientDisconnected() from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidInput("Invalid JSON body") from exc

    if not isinstance(payload, dict):
        raise InvalidInput("JSON body must be an object")

    return payload
