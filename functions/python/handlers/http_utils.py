# handlers/http_utils.py
"""핸들러 공통 응답/요청 유틸."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional

from firebase_functions import https_fn

from agents.common.gemini_client import CONFIG_ERROR_MESSAGE


def json_response(payload: Dict[str, Any], status: int = 200) -> https_fn.Response:
    return https_fn.Response(
        json.dumps(payload, ensure_ascii=False, default=str),
        status=status,
        mimetype="application/json",
    )


def html_response(body: str, status: int = 200) -> https_fn.Response:
    return https_fn.Response(body, status=status, mimetype="text/html")


def config_error_response() -> https_fn.Response:
    return json_response({"error": CONFIG_ERROR_MESSAGE, "code": "CONFIG_ERROR"}, 500)


def extract_payload(req: https_fn.Request) -> Optional[Dict[str, Any]]:
    """JSON 본문. onCall 형식({"data": {...}})도 허용. 파싱 불가면 None."""
    raw = req.get_json(silent=True)
    if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
        raw = raw["data"]
    if isinstance(raw, dict):
        return raw
    return None


def text_field(data: Dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v).strip() for v in value if str(v).strip())
    return str(value).strip()


def run_async(coro):
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    finally:
        loop.close()
        asyncio.set_event_loop(None)
