# handlers/blog.py
"""네이버 블로그 원고 생성 / SEO 분석."""

import logging
from typing import Any, Dict

from firebase_functions import https_fn

from agents.common.bracket_parser import parse_analysis_response, parse_blog_response
from agents.common.gemini_client import (
    GeminiClientError,
    GeminiConfigError,
    GeminiTextClient,
)
from prompts.builders.blog_prompts import build_analysis_prompt, build_blog_prompt

from .http_utils import (
    config_error_response,
    extract_payload,
    json_response,
    run_async,
    text_field,
)

logger = logging.getLogger(__name__)

DEFAULT_SCORES = {"seoScore": 70, "crankScore": 70, "aeoScore": 60, "geoScore": 50}
FAILED_ANALYSIS = {
    "totalScore": 65,
    "seoScore": 70,
    "crankScore": 65,
    "aeoScore": 60,
    "geoScore": 50,
    "analysis": "분석 중 오류",
    "improved": "개선안 생성 실패",
}


def _build_text_client() -> GeminiTextClient:
    return GeminiTextClient()


def _compact(text: str) -> str:
    return "".join(text.split())


def _fallback_blog(topic: str, target: str) -> Dict[str, str]:
    return {
        "title": f"{topic}, 완벽 가이드",
        "content": (
            f"> 📌 3줄 요약\n> 1. {topic}의 핵심\n> 2. {target}을 위한 정보\n> 3. 실용적인 가이드\n\n"
            f"[📷 이미지 삽입]\n\n{topic}에 대해 알아보겠습니다..."
        ),
        "hashtags": f"#{_compact(topic)} #{target}추천",
    }


def handle_generate_blog(req: https_fn.Request) -> https_fn.Response:
    data = extract_payload(req)
    if data is None:
        return json_response({"error": "Invalid JSON"}, 400)

    topic = text_field(data, "topic")
    if not topic:
        return json_response({"error": "topic is required"}, 400)
    target = text_field(data, "target")

    prompt = build_blog_prompt(
        topic=topic,
        keywords=text_field(data, "keywords"),
        region=text_field(data, "region"),
        post_type=text_field(data, "type"),
        target=target,
    )
    try:
        text = run_async(_build_text_client().generate(prompt))
    except GeminiConfigError:
        return config_error_response()
    except GeminiClientError as e:
        logger.warning("블로그 생성 실패, 기본 원고 사용: %s", e)
        return json_response(_fallback_blog(topic, target))

    parsed = parse_blog_response(text)
    return json_response({
        "title": parsed["title"] or f"{topic}, 이것만 알면 끝!",
        "content": parsed["content"],
        "hashtags": parsed["hashtags"] or f"#{_compact(topic)}",
    })


def _fill_scores(parsed: Dict[str, Any]) -> Dict[str, Any]:
    scores = {key: parsed.get(key) if parsed.get(key) is not None else default
              for key, default in DEFAULT_SCORES.items()}
    total = parsed.get("totalScore")
    if total is None:
        total = round(sum(scores.values()) / len(scores))
    return {"totalScore": total, **scores}


def handle_analyze_blog(req: https_fn.Request) -> https_fn.Response:
    data = extract_payload(req)
    if data is None:
        return json_response({"error": "Invalid JSON"}, 400)

    content = text_field(data, "content")
    if not content:
        return json_response({"error": "content is required"}, 400)

    prompt = build_analysis_prompt(
        content=content,
        keyword=text_field(data, "keyword"),
        region=text_field(data, "region"),
    )
    try:
        text = run_async(_build_text_client().generate(prompt))
    except GeminiConfigError:
        return config_error_response()
    except GeminiClientError as e:
        logger.warning("블로그 분석 실패: %s", e)
        return json_response(dict(FAILED_ANALYSIS))

    parsed = parse_analysis_response(text)
    return json_response({
        **_fill_scores(parsed),
        "analysis": parsed["analysis"] or "분석 결과",
        "improved": parsed["improved"] or "개선안",
    })
