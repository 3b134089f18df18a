# handlers/health.py
from datetime import datetime, timezone

from firebase_functions import https_fn

from services.config import get_gemini_api_keys, get_naver_credentials

from .http_utils import json_response

VERSION = "6.0"
FEATURES = ["keyword-analysis", "qna-full-auto", "design-image", "proposal-image", "proxy-pac"]


def handle_health(req: https_fn.Request) -> https_fn.Response:
    client_id, client_secret = get_naver_credentials()
    return json_response({
        "status": "ok",
        "version": VERSION,
        "ai": "gemini + naver",
        "features": FEATURES,
        "geminiKeys": len(get_gemini_api_keys()),
        "naverConfigured": bool(client_id and client_secret),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })
