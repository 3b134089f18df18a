"""
설계서(보장 내역 표) HTML 렌더링.

모델이 만든 JSON을 관대하게 읽어 표 형태의 단독 HTML 문서로 만든다.
모든 값은 html.escape 후 삽입한다.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from agents.common.gemini_client import GeminiResponseError, extract_json_object

logger = logging.getLogger(__name__)

DEFAULT_AGE = "35세"
DEFAULT_GENDER = "남성"
DEFAULT_TOTAL_PREMIUM = "월 100,000원"


@dataclass
class CoverageItem:
    name: str
    coverage: str = ""
    premium: str = ""
    period: str = ""


@dataclass
class ProposalTable:
    title: str
    customer_name: str
    customer_age: str
    customer_gender: str
    insurance_type: str
    items: List[CoverageItem] = field(default_factory=list)
    total_premium: str = DEFAULT_TOTAL_PREMIUM
    highlights: List[str] = field(default_factory=list)
    issued_on: Optional[date] = None


def age_from_target(target: str) -> str:
    """'40대 가장' → '40세'."""
    match = re.search(r"(\d+)대", target or "")
    return f"{match.group(1)}세" if match else DEFAULT_AGE


def gender_from_target(target: str) -> str:
    text = target or ""
    if any(word in text for word in ("여성", "엄마", "주부", "워킹맘", "여자")):
        return "여성"
    return DEFAULT_GENDER


def parse_design_json(text: str) -> Dict[str, Any]:
    """설계서 JSON → {'items': [CoverageItem], 'totalPremium', 'highlights'}."""
    data = extract_json_object(text)

    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        raise GeminiResponseError("설계서 JSON의 items가 배열이 아닙니다.")

    items: List[CoverageItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict) or not raw.get("name"):
            continue
        items.append(
            CoverageItem(
                name=str(raw.get("name", "")).strip(),
                coverage=str(raw.get("coverage", "")).strip(),
                premium=str(raw.get("premium", "")).strip(),
                period=str(raw.get("period", "")).strip(),
            )
        )
    if not items:
        raise GeminiResponseError("설계서 JSON에 보장 항목이 없습니다.")

    raw_highlights = data.get("highlights")
    if not isinstance(raw_highlights, list):
        raw_highlights = []
    highlights = [str(h).strip() for h in raw_highlights if str(h).strip()]
    return {
        "items": items,
        "totalPremium": str(data.get("totalPremium") or DEFAULT_TOTAL_PREMIUM),
        "highlights": highlights,
    }


def _row(index: int, item: CoverageItem) -> str:
    row_class = "bg-gray-50" if index % 2 == 0 else "bg-white"
    return f"""
    <tr class="{row_class}">
      <td class="px-4 py-3 text-center font-medium">{index + 1}</td>
      <td class="px-4 py-3">{html.escape(item.name)}</td>
      <td class="px-4 py-3 text-right font-semibold text-blue-600">{html.escape(item.coverage)}</td>
      <td class="px-4 py-3 text-right">{html.escape(item.premium)}</td>
      <td class="px-4 py-3 text-center text-gray-600">{html.escape(item.period)}</td>
    </tr>"""


def render_coverage_table_html(table: ProposalTable) -> str:
    rows = "".join(_row(i, item) for i, item in enumerate(table.items))
    highlights = "".join(
        f"""
      <li class="flex items-start gap-2"><span class="text-primary font-bold">✓</span><span>{html.escape(h)}</span></li>"""
        for h in table.highlights
    )
    issued_on = (table.issued_on or date.today()).strftime("%Y. %m. %d.")

    return f"""<!DOCTYPE html>
<html lang="ko">
<head>
  <meta charset="UTF-8">
  <script src="https://cdn.tailwindcss.com"></script>
  <style>
    @import url('https://fonts.googleapis.com/css2?family=Noto+Sans+KR:wght@400;500;600;700&display=swap');
    body {{ font-family: 'Noto Sans KR', sans-serif; }}
    .text-primary {{ color: #03C75A; }}
  </style>
</head>
<body class="bg-gray-100 p-6">
  <div class="max-w-2xl mx-auto bg-white rounded-2xl shadow-xl overflow-hidden">
    <div class="bg-gradient-to-r from-emerald-600 to-green-500 px-6 py-5 flex items-center justify-between">
      <div>
        <h1 class="text-white text-2xl font-bold">{html.escape(table.title)}</h1>
        <p class="text-emerald-100 text-sm mt-1">보험 설계 제안서</p>
      </div>
      <span class="bg-white/20 rounded-xl px-4 py-2 text-white font-bold">{html.escape(table.insurance_type)}</span>
    </div>
    <div class="px-6 py-4 bg-gray-50 border-b border-gray-200 flex gap-8 text-sm">
      <span>피보험자: <b>{html.escape(table.customer_name)}</b></span>
      <span>연령: <b>{html.escape(table.customer_age)}</b></span>
      <span>성별: <b>{html.escape(table.customer_gender)}</b></span>
    </div>
    <div class="p-6">
      <h3 class="font-bold text-gray-800 mb-4">보장 내역</h3>
      <table class="w-full text-sm border border-gray-200">
        <thead class="bg-gray-800 text-white">
          <tr>
            <th class="px-4 py-3 text-center w-12">순번</th>
            <th class="px-4 py-3 text-left">가입담보</th>
            <th class="px-4 py-3 text-right">가입금액</th>
            <th class="px-4 py-3 text-right">보험료</th>
            <th class="px-4 py-3 text-center">만기</th>
          </tr>
        </thead>
        <tbody>{rows}
        </tbody>
        <tfoot class="bg-emerald-50 border-t-2 border-emerald-500">
          <tr>
            <td colspan="3" class="px-4 py-4 font-bold text-gray-800">월 납입 보험료 합계</td>
            <td class="px-4 py-4 text-right font-bold text-2xl text-emerald-600">{html.escape(table.total_premium)}</td>
            <td></td>
          </tr>
        </tfoot>
      </table>
    </div>
    <div class="px-6 pb-6">
      <h3 class="font-bold text-gray-800 mb-3">핵심 포인트</h3>
      <ul class="space-y-2 text-sm text-gray-700 bg-emerald-50 rounded-xl p-4">{highlights}
      </ul>
    </div>
    <div class="px-6 py-4 bg-gray-100 border-t border-gray-200 flex justify-between text-xs">
      <p class="text-gray-500">※ 이 자료는 참고용이며, 실제 보험료는 가입 시점에 따라 다를 수 있습니다.</p>
      <p class="text-gray-400">{issued_on}</p>
    </div>
  </div>
</body>
</html>"""


def build_proposal_table(
    design_text: str,
    *,
    target: str,
    insurance_type: str,
    customer_name: str,
    fallback_highlights: Optional[List[str]] = None,
) -> ProposalTable:
    parsed = parse_design_json(design_text)
    return ProposalTable(
        title=f"{insurance_type} 보장분석",
        customer_name=customer_name,
        customer_age=age_from_target(target),
        customer_gender=gender_from_target(target),
        insurance_type=insurance_type,
        items=parsed["items"],
        total_premium=parsed["totalPremium"],
        highlights=parsed["highlights"] or list(fallback_highlights or []),
    )
