from datetime import date

import pytest

from agents.common.gemini_client import GeminiResponseError
from services.proposal_renderer import (
    CoverageItem,
    ProposalTable,
    age_from_target,
    build_proposal_table,
    gender_from_target,
    parse_design_json,
    render_coverage_table_html,
)


def test_target_helpers():
    assert age_from_target("50대 은퇴준비") == "50세"
    assert age_from_target("시니어") == "35세"
    assert gender_from_target("30대 워킹맘") == "여성"
    assert gender_from_target("40대 가장") == "남성"


def test_parse_design_json_skips_nameless_items():
    parsed = parse_design_json('```json\n{"items": [{"name": "암진단", "coverage": "5천만원"}, {"coverage": "x"}]}\n```')

    assert parsed["items"] == [CoverageItem(name="암진단", coverage="5천만원")]
    assert parsed["totalPremium"] == "월 100,000원"


def test_parse_design_json_requires_items():
    with pytest.raises(GeminiResponseError):
        parse_design_json('{"items": []}')
    with pytest.raises(GeminiResponseError):
        parse_design_json('{"items": 5}')


def test_parse_design_json_ignores_non_list_highlights():
    parsed = parse_design_json('{"items": [{"name": "암진단"}], "highlights": 3}')

    assert parsed["highlights"] == []


def test_render_escapes_every_value():
    table = ProposalTable(
        title="<script>x</script>",
        customer_name="김<민준>",
        customer_age="40세",
        customer_gender="남성",
        insurance_type="암보험",
        items=[CoverageItem(name="암진단 & 수술", coverage="1억", premium="3만원", period="100세")],
        total_premium="3만원",
        highlights=['"비갱신형"'],
        issued_on=date(2026, 1, 2),
    )
    rendered = render_coverage_table_html(table)

    assert "<script>x</script>" not in rendered
    assert "&lt;script&gt;" in rendered
    assert "김&lt;민준&gt;" in rendered
    assert "암진단 &amp; 수술" in rendered
    assert "&quot;비갱신형&quot;" in rendered
    assert "2026. 01. 02." in rendered


def test_build_proposal_table_uses_fallback_highlights():
    table = build_proposal_table(
        '{"items": [{"name": "사망보장"}]}',
        target="40대 가장",
        insurance_type="종신보험",
        customer_name="김민준",
        fallback_highlights=["보험료 고정"],
    )

    assert table.title == "종신보험 보장분석"
    assert table.customer_age == "40세"
    assert table.highlights == ["보험료 고정"]
