"""
네이버 마케팅 프록시 - PAC 스크립트 / 확장 프로그램 메시지 API.

PAC 분할 터널링:
- *.naver.com, naver.com, *.navercorp.com → 업스트림 프록시
- 그 외 모든 트래픽 → DIRECT
"""

from __future__ import annotations

import logging
import random
import string
import time
from typing import Any, Callable, Dict, Optional

from services.config import ProxySettings, get_proxy_settings

logger = logging.getLogger(__name__)

PROXIED_HOST_PATTERNS = ("*.naver.com", "naver.com", "*.navercorp.com")

EXTENSION_VERSION = "1.0.0"


def build_pac_script(settings: ProxySettings) -> str:
    conditions = " ||\n          ".join(f'shExpMatch(host, "{p}")' for p in PROXIED_HOST_PATTERNS)
    return f"""function FindProxyForURL(url, host) {{
  if ({conditions}) {{
    return "PROXY {settings.host}:{settings.port}";
  }}
  return "DIRECT";
}}
"""


def generate_session_id(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(rng.choice(string.ascii_lowercase + string.digits) for _ in range(7))
    return f"session_{now_ms}_{suffix}"


def build_proxy_username(settings: ProxySettings, session_id: str = "") -> str:
    """세션 ID가 있으면 username에 붙여 같은 출구 IP를 유지한다."""
    base = f"{settings.username}-country-{settings.country}"
    return f"{base}-session-{session_id}" if session_id else base


class ProxyController:
    """확장 프로그램 background script의 상태 머신."""

    def __init__(
        self,
        settings: Optional[ProxySettings] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_proxy_settings()
        self._clock = clock
        self._rng = rng or random.Random()
        self.enabled = False
        self.session_id = ""
        self.last_changed: Optional[int] = None

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def enable_proxy(self, session_id: Optional[str] = None) -> Dict[str, Any]:
        self.session_id = session_id or generate_session_id(self._now_ms(), self._rng)
        self.enabled = True
        self.last_changed = self._now_ms()
        logger.info(
            "[Proxy] Enabled with session: %s (user=%s)",
            self.session_id,
            build_proxy_username(self.settings, self.session_id),
        )
        return {"success": True, "sessionId": self.session_id, "status": "enabled"}

    def disable_proxy(self) -> Dict[str, Any]:
        self.enabled = False
        self.session_id = ""
        self.last_changed = self._now_ms()
        logger.info("[Proxy] Disabled")
        return {"success": True, "status": "disabled"}

    def change_ip(self) -> Dict[str, Any]:
        new_session_id = generate_session_id(self._now_ms(), self._rng)
        result = self.enable_proxy(new_session_id)
        logger.info("[Proxy] IP changed, new session: %s", new_session_id)
        return {**result, "message": "IP가 성공적으로 변경되었습니다."}

    def get_status(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "sessionId": self.session_id,
            "lastChanged": self.last_changed,
            "config": {
                "host": self.settings.host,
                "port": self.settings.port,
                "country": self.settings.country,
            },
        }

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        """origin이 없거나 허용 목록 밖이면 거부."""
        if not origin:
            return False
        return origin.rstrip("/") in {o.rstrip("/") for o in self.settings.allowed_origins}

    def dispatch_message(self, message: Dict[str, Any], origin: Optional[str] = None) -> Dict[str, Any]:
        if not self.is_origin_allowed(origin):
            logger.warning("[Proxy] 허용되지 않은 origin: %s", origin)
            return {"success": False, "error": "Unauthorized origin"}

        action = (message or {}).get("action")
        if action == "enableProxy":
            return self.enable_proxy(message.get("sessionId"))
        if action == "disableProxy":
            return self.disable_proxy()
        if action == "changeIP":
            return self.change_ip()
        if action == "getStatus":
            return self.get_status()
        if action == "ping":
            return {"success": True, "message": "Extension is active", "version": EXTENSION_VERSION}
        return {"success": False, "error": f"Unknown action: {action}"}


_controller: Optional[ProxyController] = None


def get_controller() -> ProxyController:
    global _controller
    if _controller is None:
        _controller = ProxyController()
    return _controller
