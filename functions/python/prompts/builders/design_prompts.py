"""설계서(보장 내역 표) / 제안서 이미지 프롬프트."""

from __future__ import annotations

from typing import Any, Dict, Sequence


def build_design_prompt(target: str, insurance_type: str) -> str:
    return f"""{insurance_type} 보험 설계서용 보장 내역을 JSON으로 생성해주세요.

【조건】
- 타겟: {target}
- 보험 종류: {insurance_type}
- 현실적인 보험료와 보장금액 설정

【출력 형식 - 반드시 JSON만 출력】
{{
  "items": [
    {{"name": "사망보장", "coverage": "1억원", "premium": "45,000원", "period": "90세"}},
    {{"name": "암진단", "coverage": "5,000만원", "premium": "32,000원", "period": "90세"}}
  ],
  "totalPremium": "125,000원",
  "highlights": ["비갱신형으로 보험료 인상 없음", "해지환급금 100% 보장", "추가납입으로 적립금 증대 가능"]
}}"""


def build_proposal_image_prompt(
    *,
    company: str,
    insurance_type: str,
    customer: Dict[str, Any],
    items: Sequence[Dict[str, Any]] = (),
) -> str:
    customer_line = " / ".join(
        str(v)
        for v in (customer.get("name"), customer.get("age"), customer.get("gender"), customer.get("target"))
        if v
    ) or "40대 가장"
    coverage_lines = "\n".join(
        f"- {item.get('name', '')}: {item.get('coverage', '')} (월 {item.get('premium', '')})"
        for item in items
        if item.get("name")
    )
    coverage_block = f"\n보장 내역:\n{coverage_lines}\n" if coverage_lines else ""

    return f"""한국 보험사 스타일의 '보험 설계 제안서' 문서 이미지를 생성하세요.

- 보험사명: {company or '보험사'}
- 상품 종류: {insurance_type or '종합보험'}
- 고객: {customer_line}
{coverage_block}
디자인 조건:
- 세로형 A4 문서, 흰 배경, 상단에 보험사명과 '보험 설계 제안서' 제목
- 가입담보 / 가입금액 / 보험료 / 만기 열을 가진 표
- 하단에 월 납입 보험료 합계와 '※ 참고용 자료' 문구
- 모든 텍스트는 한국어, 실제 개인정보(주민번호 등)는 넣지 않음"""
