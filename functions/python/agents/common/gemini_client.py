"""
공통 Gemini 클라이언트 모듈 (google-genai SDK)
여러 API 키를 라운드로빈으로 돌려가며 Gemini API를 호출합니다.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional

from google import genai
from google.genai import types

from services.config import get_gemini_api_keys, get_text_model

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_RETRIES = 3

# generation config 기본값
DEFAULT_TEMPERATURE = 0.8
DEFAULT_TOP_K = 40
DEFAULT_TOP_P = 0.95
DEFAULT_MAX_OUTPUT_TOKENS = 8192

# 키 교체 대상 상태 코드
ROTATE_STATUS_CODES = {403, 429}

CONFIG_ERROR_MESSAGE = "AI 서비스 설정에 오류가 발생했습니다. (API 키 미설정)"

ClientFactory = Callable[[str], Any]


class GeminiClientError(RuntimeError):
    """Gemini 호출 실패 시 사용자 친화 메시지를 전달하기 위한 예외."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class GeminiConfigError(GeminiClientError):
    """API 키가 하나도 설정되지 않음."""


class GeminiQuotaExhaustedError(GeminiClientError):
    """모든 키가 403/429로 소진됨."""


class GeminiUpstreamError(GeminiClientError):
    """403/429 이외의 API 오류 또는 네트워크 오류."""


class GeminiResponseError(GeminiClientError):
    """정상 응답이지만 본문이 비었거나 파싱할 수 없음."""


def mask_key(api_key: str) -> str:
    if len(api_key) > 12:
        return f"{api_key[:8]}...{api_key[-4:]}"
    return "****"


class ApiKeyRotator:
    """
    API 키 라운드로빈.

    next_key()는 keys[cursor % N]을 반환하고 커서를 한 칸 전진시킨다.
    서버리스 인스턴스 간 공유는 보장하지 않는다.
    """

    def __init__(self, keys: Iterable[str]):
        self._keys: List[str] = [k.strip() for k in keys if k and k.strip()]
        self._cursor = 0

    @classmethod
    def from_env(cls) -> "ApiKeyRotator":
        return cls(get_gemini_api_keys())

    @property
    def size(self) -> int:
        return len(self._keys)

    @property
    def cursor(self) -> int:
        return self._cursor

    def next_key(self) -> str:
        if not self._keys:
            raise GeminiConfigError(CONFIG_ERROR_MESSAGE)
        key = self._keys[self._cursor % len(self._keys)]
        self._cursor = (self._cursor + 1) % len(self._keys)
        return key

    def advance(self) -> None:
        if self._keys:
            self._cursor = (self._cursor + 1) % len(self._keys)

    def masked(self) -> List[str]:
        return [mask_key(k) for k in self._keys]


_default_rotator: Optional[ApiKeyRotator] = None


def get_default_rotator() -> ApiKeyRotator:
    """프로세스 단위 기본 로테이터 (환경 변수 기반)."""
    global _default_rotator
    if _default_rotator is None or _default_rotator.size == 0:
        _default_rotator = ApiKeyRotator.from_env()
        logger.info("[GeminiClient] API 키 %s개 로드됨", _default_rotator.size)
    return _default_rotator


def _extract_error_text(error: Exception) -> str:
    message_parts = [str(error)]
    raw_message = getattr(error, "message", None)
    if raw_message:
        message_parts.append(str(raw_message))
    status_text = getattr(error, "status_text", None)
    if status_text:
        message_parts.append(str(status_text))
    return " | ".join(part for part in message_parts if part).lower()


def extract_status_code(error: Exception) -> Optional[int]:
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        return status_code

    status = getattr(error, "status", None)
    if isinstance(status, int):
        return status

    code = getattr(error, "code", None)
    if isinstance(code, int):
        return code

    return None


def is_rotatable_error(error: Exception) -> bool:
    status_code = extract_status_code(error)
    if status_code in ROTATE_STATUS_CODES:
        return True
    if status_code is not None:
        return False
    error_text = _extract_error_text(error)
    return (
        "429" in error_text
        or "resource exhausted" in error_text
        or "too many requests" in error_text
        or "permission denied" in error_text
    )


def get_user_friendly_error_message(error: Exception) -> str:
    """API 오류를 사용자 친화 메시지로 변환."""
    if isinstance(error, GeminiConfigError):
        return CONFIG_ERROR_MESSAGE
    if isinstance(error, GeminiQuotaExhaustedError):
        return (
            "AI 모델 사용량이 일시적으로 초과되었습니다.\n\n"
            "잠시 후 다시 시도해주세요."
        )
    if isinstance(error, GeminiResponseError):
        return "AI가 응답을 생성하지 못했습니다. 다른 주제로 다시 시도해주세요."

    error_text = _extract_error_text(error)
    status_code = extract_status_code(error)

    if status_code == 401 or "unauthorized" in error_text or "api key" in error_text:
        return "API 인증에 실패했습니다. 관리자에게 문의해주세요."

    if status_code in {500, 502, 503, 504} or "service unavailable" in error_text:
        return "AI 서비스에 일시적인 문제가 발생했습니다. 잠시 후 다시 시도해주세요."

    if "timeout" in error_text or "timed out" in error_text or "network" in error_text:
        return "네트워크 연결에 문제가 발생했습니다. 잠시 후 다시 시도해주세요."

    return (
        "AI 콘텐츠 생성 중 오류가 발생했습니다.\n\n"
        f"오류 내용: {str(error)}\n\n"
        "잠시 후 다시 시도해주세요."
    )


def _normalize_model_name(model_name: str) -> str:
    if model_name.startswith("models/"):
        return model_name[7:]
    return model_name


def _build_generation_config(
    temperature: float,
    max_output_tokens: int,
    response_mime_type: Optional[str],
) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=temperature,
        top_k=DEFAULT_TOP_K,
        top_p=DEFAULT_TOP_P,
        max_output_tokens=max_output_tokens,
        response_mime_type=response_mime_type or None,
    )


def _extract_response_text(response: Any) -> str:
    text = getattr(response, "text", None)
    if callable(text):
        text = text()

    if not text or not str(text).strip():
        raise GeminiResponseError("Gemini API가 빈 응답을 반환했습니다.")

    return str(text)


def extract_json_object(text: str) -> Dict[str, Any]:
    """코드블록/잡음이 섞인 응답에서 최상위 JSON 객체를 추출."""
    clean = (text or "").strip()
    code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", clean, flags=re.IGNORECASE)
    if code_block:
        clean = code_block.group(1).strip()

    try:
        parsed = json.loads(clean)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    brace_match = re.search(r"\{[\s\S]*\}", clean)
    if brace_match:
        try:
            parsed = json.loads(brace_match.group(0))
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    raise GeminiResponseError("JSON 응답을 해석할 수 없습니다.")


def default_client_factory(api_key: str) -> Any:
    return genai.Client(api_key=api_key)


class GeminiTextClient:
    """텍스트 생성 클라이언트. 키별 SDK 클라이언트를 캐싱한다."""

    def __init__(
        self,
        rotator: Optional[ApiKeyRotator] = None,
        model_name: Optional[str] = None,
        client_factory: ClientFactory = default_client_factory,
    ):
        self.rotator = rotator or get_default_rotator()
        self.model_name = _normalize_model_name(model_name or get_text_model() or DEFAULT_MODEL)
        self._client_factory = client_factory
        self._clients: Dict[str, Any] = {}

    def _client_for(self, api_key: str) -> Any:
        client = self._clients.get(api_key)
        if client is None:
            client = self._client_factory(api_key)
            self._clients[api_key] = client
        return client

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        response_mime_type: Optional[str] = None,
        retries: int = DEFAULT_RETRIES,
    ) -> str:
        """
        콘텐츠 생성 (비동기).

        403/429 응답은 다음 키로 교체해 재시도하며, 최대 retries × 키 개수만큼 시도한다.
        그 외 오류는 즉시 GeminiUpstreamError로 전달한다.
        """
        if self.rotator.size == 0:
            raise GeminiConfigError(CONFIG_ERROR_MESSAGE)

        config = _build_generation_config(temperature, max_output_tokens, response_mime_type)
        max_attempts = max(1, int(retries or 1)) * self.rotator.size

        last_error: Optional[Exception] = None
        for attempt in range(1, max_attempts + 1):
            api_key = self.rotator.next_key()
            try:
                logger.info(
                    "[GeminiClient] 호출 시도 (%s/%s) - model=%s key=%s",
                    attempt,
                    max_attempts,
                    self.model_name,
                    mask_key(api_key),
                )
                response = await self._client_for(api_key).aio.models.generate_content(
                    model=self.model_name,
                    contents=prompt,
                    config=config,
                )
            except Exception as error:  # pragma: no cover - 외부 SDK 예외 타입 다양성 대응
                last_error = error
                if is_rotatable_error(error):
                    logger.warning(
                        "[GeminiClient] 키 한도 초과 (%s) - 다음 키로 교체: %s",
                        extract_status_code(error),
                        mask_key(api_key),
                    )
                    continue
                logger.error("[GeminiClient] 업스트림 오류: %s", error)
                raise GeminiUpstreamError(
                    get_user_friendly_error_message(error), original_error=error
                ) from error

            text = _extract_response_text(response)
            logger.info("[GeminiClient] 호출 성공 (%s자)", len(text))
            return text

        logger.error("[GeminiClient] 모든 API 키 소진 (%s회 시도)", max_attempts)
        raise GeminiQuotaExhaustedError(
            "모든 API 키의 사용량이 초과되었습니다.", original_error=last_error
        )

    async def generate_json(self, prompt: str, **kwargs: Any) -> Dict[str, Any]:
        kwargs.setdefault("response_mime_type", "application/json")
        text = await self.generate(prompt, **kwargs)
        try:
            return extract_json_object(text)
        except GeminiResponseError:
            logger.warning("[GeminiClient] JSON 파싱 실패: %s", text[:200])
            raise
