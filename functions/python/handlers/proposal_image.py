# handlers/proposal_image.py
"""보험 설계 제안서 이미지 생성 (모델 × 키 폴백)."""

import logging
from typing import Any, Dict

from firebase_functions import https_fn

from agents.common.gemini_client import GeminiConfigError
from agents.common.image_client import generate_image
from prompts.builders.design_prompts import build_proposal_image_prompt

from .http_utils import (
    config_error_response,
    extract_payload,
    json_response,
    run_async,
    text_field,
)

logger = logging.getLogger(__name__)


def _customer_from(data: Dict[str, Any]) -> Dict[str, Any]:
    customer = data.get("customer")
    if isinstance(customer, dict):
        return customer
    return {
        "name": text_field(data, "customerName"),
        "age": text_field(data, "customerAge"),
        "gender": text_field(data, "customerGender"),
        "target": text_field(data, "target"),
    }


def handle_generate_proposal_image(req: https_fn.Request) -> https_fn.Response:
    data = extract_payload(req)
    if data is None:
        return json_response({"error": "Invalid JSON"}, 400)

    insurance_type = text_field(data, "insuranceType")
    if not insurance_type:
        return json_response({"error": "insuranceType is required"}, 400)

    items = data.get("items")
    prompt = build_proposal_image_prompt(
        company=text_field(data, "company"),
        insurance_type=insurance_type,
        customer=_customer_from(data),
        items=[i for i in items if isinstance(i, dict)] if isinstance(items, list) else (),
    )

    try:
        result = run_async(generate_image(prompt))
    except GeminiConfigError:
        return config_error_response()

    if not result.success:
        logger.error("제안서 이미지 생성 실패: %s회 시도", result.attempts)
        return json_response(result.to_dict(), 502)
    return json_response(result.to_dict())
