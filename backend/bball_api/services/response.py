from datetime import datetime, timezone
from typing import Any

from fastapi.responses import JSONResponse

from bball_api.core.constants import SOURCE_TAG

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_meta(params: dict, **extra) -> dict:
    return {
        "source": SOURCE_TAG,
        "cachedAt": utc_now_iso(),
        **extra,
        "params": params,
    }


def wrap_payload(data: Any, params: dict, **extra_meta) -> dict:
    """
    Shallow-merge an upstream payload with a _meta block.

    Object payloads keep their top-level keys; anything else (a bare list,
    a scalar) is placed under "data" so the response is always an object.
    """
    body = dict(data) if isinstance(data, dict) else {"data": data}
    body["_meta"] = build_meta(params, **extra_meta)
    return body


def error_body(message: str) -> dict:
    return {"error": message, "timestamp": utc_now_iso()}


def json_response(data, status_code: int = 200, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(data, status_code=status_code, headers={**CORS_HEADERS, **(headers or {})})


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return json_response(error_body(message), status_code)


def cached_response(data, hit: bool) -> JSONResponse:
    return json_response(data, headers={"X-Cache": "HIT" if hit else "MISS"})
