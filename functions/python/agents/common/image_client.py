"""
Gemini 이미지 생성 (모델 폴백 + 키 로테이션).

모델을 바깥 루프, API 키를 안쪽 루프로 순회한다.
- 403/429: 다음 키
- 그 외 오류: 다음 모델
- 성공했지만 이미지 데이터 없음: 다음 모델
"""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from google.genai import types

from services.config import get_image_models

from .gemini_client import (
    ApiKeyRotator,
    ClientFactory,
    GeminiConfigError,
    CONFIG_ERROR_MESSAGE,
    default_client_factory,
    extract_status_code,
    get_default_rotator,
    is_rotatable_error,
    mask_key,
)

logger = logging.getLogger(__name__)

IMAGE_FAILURE_MESSAGE = "이미지 생성에 실패했습니다. 잠시 후 다시 시도해주세요."


@dataclass
class ImageResult:
    success: bool
    image_url: str = ""
    model: str = ""
    error: str = ""
    attempts: int = 0
    tried: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "imageUrl": self.image_url,
                "model": self.model,
                "attempts": self.attempts,
            }
        return {
            "success": False,
            "error": self.error or IMAGE_FAILURE_MESSAGE,
            "attempts": self.attempts,
            "tried": self.tried,
        }


def _image_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"])


def extract_inline_image(response: Any) -> Optional[Tuple[str, bytes]]:
    """응답의 첫 inline 이미지 (mime_type, bytes). 없으면 None."""
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None) if inline is not None else None
            if not data:
                continue
            if isinstance(data, str):
                data = base64.b64decode(data)
            mime_type = getattr(inline, "mime_type", None) or "image/png"
            return mime_type, data
    return None


def to_data_url(mime_type: str, data: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


async def generate_image(
    prompt: str,
    *,
    models: Optional[Sequence[str]] = None,
    rotator: Optional[ApiKeyRotator] = None,
    client_factory: ClientFactory = default_client_factory,
) -> ImageResult:
    """
    이미지 생성. 모든 모델 × 모든 키가 실패하면 success=False 결과를 반환한다.
    키가 하나도 없으면 GeminiConfigError.
    """
    rotator = rotator or get_default_rotator()
    if rotator.size == 0:
        raise GeminiConfigError(CONFIG_ERROR_MESSAGE)

    model_list = list(models or get_image_models())
    clients: Dict[str, Any] = {}
    attempts = 0
    tried: List[Dict[str, Any]] = []

    for model in model_list:
        for _ in range(rotator.size):
            api_key = rotator.next_key()
            client = clients.get(api_key)
            if client is None:
                client = clients[api_key] = client_factory(api_key)

            attempts += 1
            try:
                response = await client.aio.models.generate_content(
                    model=model,
                    contents=prompt,
                    config=_image_config(),
                )
            except Exception as error:  # pragma: no cover - SDK 예외 다양성
                status = extract_status_code(error)
                tried.append({"model": model, "status": status})
                if is_rotatable_error(error):
                    logger.warning(
                        "[ImageClient] %s 키 한도 초과 (%s): %s", model, status, mask_key(api_key)
                    )
                    continue
                logger.warning("[ImageClient] %s 호출 실패, 다음 모델로: %s", model, error)
                break

            image = extract_inline_image(response)
            if image is None:
                tried.append({"model": model, "status": 200, "reason": "no_image"})
                logger.warning("[ImageClient] %s 응답에 이미지 없음, 다음 모델로", model)
                break

            mime_type, data = image
            logger.info("[ImageClient] 이미지 생성 성공 - model=%s (%s bytes)", model, len(data))
            return ImageResult(
                success=True,
                image_url=to_data_url(mime_type, data),
                model=model,
                attempts=attempts,
                tried=tried,
            )

    logger.error("[ImageClient] 모든 모델/키 실패 (%s회 시도)", attempts)
    return ImageResult(success=False, error=IMAGE_FAILURE_MESSAGE, attempts=attempts, tried=tried)
