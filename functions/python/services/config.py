"""
런타임 설정 로더.

Firebase Functions `secrets=[...]` 로 주입되는 환경 변수를 한 곳에서 읽는다.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

DEFAULT_TEXT_MODEL = "gemini-2.0-flash"
DEFAULT_IMAGE_MODELS = (
    "gemini-2.0-flash-preview-image-generation",
    "gemini-2.0-flash-exp",
)

DEFAULT_PROXY_HOST = "brd.superproxy.io"
DEFAULT_PROXY_PORT = 33335
DEFAULT_PROXY_COUNTRY = "kr"


def _split_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in re.split(r"[,\n]", raw) if part.strip()]


def get_gemini_api_keys() -> List[str]:
    """GEMINI_API_KEYS(쉼표/줄바꿈 구분) 우선, 없으면 GEMINI_API_KEY 단일 키."""
    keys = _split_list(os.environ.get("GEMINI_API_KEYS"))
    if keys:
        return keys
    return _split_list(os.environ.get("GEMINI_API_KEY"))


def get_text_model() -> str:
    return (os.environ.get("GEMINI_TEXT_MODEL") or DEFAULT_TEXT_MODEL).strip()


def get_image_models() -> List[str]:
    models = _split_list(os.environ.get("GEMINI_IMAGE_MODELS"))
    return models or list(DEFAULT_IMAGE_MODELS)


def get_naver_credentials() -> Tuple[str, str]:
    return (
        (os.environ.get("NAVER_CLIENT_ID") or "").strip(),
        (os.environ.get("NAVER_CLIENT_SECRET") or "").strip(),
    )


@dataclass(frozen=True)
class ProxySettings:
    host: str
    port: int
    username: str
    password: str
    country: str
    allowed_origins: Tuple[str, ...]


def get_proxy_settings() -> ProxySettings:
    try:
        port = int(os.environ.get("PROXY_PORT") or DEFAULT_PROXY_PORT)
    except ValueError:
        port = DEFAULT_PROXY_PORT

    return ProxySettings(
        host=(os.environ.get("PROXY_HOST") or DEFAULT_PROXY_HOST).strip(),
        port=port,
        username=(os.environ.get("PROXY_USERNAME") or "").strip(),
        password=(os.environ.get("PROXY_PASSWORD") or "").strip(),
        country=(os.environ.get("PROXY_COUNTRY") or DEFAULT_PROXY_COUNTRY).strip(),
        allowed_origins=tuple(_split_list(os.environ.get("PROXY_ALLOWED_ORIGINS"))),
    )
