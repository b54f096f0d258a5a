from fastapi import Request


def client_identifier(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    real_ip = request.headers.get("x-real-ip", "").strip()
    return real_ip or "unknown"


def is_json_request(request: Request) -> bool:
    return "application/json" in (request.headers.get("content-type") or "").lower()
