# handlers/generate_qna.py
"""
Q&A 생성 핸들러.

- generate_qna_full: 검색 → 전략 → 작성 → 자체 검수(재생성) 전체 파이프라인
- generate_qna: 단일 호출 레거시 API (호환성 유지)
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from firebase_functions import https_fn

from agents.common.bracket_parser import parse_qna_response
from agents.common.gemini_client import (
    GeminiClientError,
    GeminiConfigError,
    GeminiTextClient,
)
from agents.common.qna_types import GeneratedContent, GenerationRequest, QnAResult
from agents.orchestrator import QnAOrchestrator
from prompts.builders.qna_prompts import build_legacy_qna_prompt

from .http_utils import (
    config_error_response,
    extract_payload,
    json_response,
    run_async,
    text_field,
)

logger = logging.getLogger(__name__)


def _build_orchestrator() -> QnAOrchestrator:
    return QnAOrchestrator()


def _build_text_client() -> GeminiTextClient:
    return GeminiTextClient()


def serialize_result(result: QnAResult) -> Dict[str, Any]:
    content = result.content
    customer = result.customer
    return {
        "titles": content.titles,
        "questions": content.questions,
        "answers": content.answers,
        "comments": content.comments,
        "highlights": content.highlights,
        "keywords": content.keywords or result.strategy.seo_keywords,
        "customerInfo": f"{customer.get('name', '')} ({customer.get('phone', '')})",
        "concern": result.concern,
        "strategy": result.strategy.to_dict(),
        "audit": result.audit.to_dict(),
        "seoScore": result.audit.seo_score,
        "attempts": result.attempts,
        "history": result.history,
        "usedFallback": result.used_fallback,
        "designHtml": result.design_html,
    }


def handle_generate_qna_full(req: https_fn.Request) -> https_fn.Response:
    """
    Request Body:
        {
            "target": "40대 가장",
            "insuranceType": "종신보험",
            "concern": "...",          # 비우면 자동 생성
            "tone": "친근한",           # 문자열 또는 배열
            "generateDesign": true
        }
    """
    data = extract_payload(req)
    if data is None:
        return json_response({"error": "Invalid JSON"}, 400)

    request = GenerationRequest.from_payload(data)
    if not request.target or not request.insurance_type:
        return json_response({"error": "target and insuranceType are required"}, 400)

    try:
        result = run_async(_build_orchestrator().run(request))
    except GeminiConfigError:
        logger.error("Q&A 생성 불가: Gemini API 키 미설정")
        return config_error_response()

    logger.info(
        "Q&A 생성 완료: attempts=%s score=%s passed=%s",
        result.attempts,
        result.audit.overall_score,
        result.audit.passed,
    )
    return json_response(serialize_result(result))


def _legacy_fallback(target: str, product: str) -> Dict[str, Any]:
    return {
        "question": f"[{target}] {product} 가입 고민이에요",
        "answer": f"{product} 관련 답변입니다.",
        "comments": "저도 같은 고민이었어요!\n\n전문가 답변 감사합니다.\n\n저도 가입 고려해봐야겠네요.",
    }


def handle_generate_qna(req: https_fn.Request) -> https_fn.Response:
    data = extract_payload(req)
    if data is None:
        return json_response({"error": "Invalid JSON"}, 400)

    product = text_field(data, "product")
    target = text_field(data, "target")
    insurance_type = text_field(data, "insuranceType")
    prompt = build_legacy_qna_prompt(
        product=product,
        concern=text_field(data, "concern"),
        target=target,
        tone=text_field(data, "tone"),
        insurance_type=insurance_type,
    )

    try:
        text = run_async(_build_text_client().generate(prompt))
    except GeminiConfigError:
        return config_error_response()
    except GeminiClientError as e:
        logger.warning("레거시 Q&A 생성 실패, 기본 응답 사용: %s", e)
        return json_response(_legacy_fallback(target, product))

    fallback = GeneratedContent(
        questions=[f"[{target}] {product} 가입 고민"],
        answers=[f"{product}에 대한 답변입니다."],
        comments=["저도 같은 고민!", "좋은 정보 감사합니다.", "저도 가입 고려해봐야겠네요."],
    )
    content = parse_qna_response(text, fallback)
    return json_response({
        "question": content.questions[0],
        "answer": content.answers[0],
        "comments": "\n\n".join(content.comments[:3]),
    })
