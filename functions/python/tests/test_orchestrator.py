import asyncio

import pytest

from agents.common.gemini_client import GeminiConfigError, GeminiUpstreamError
from agents.common.qna_types import GenerationRequest
from agents.orchestrator import QnAOrchestrator
from fakes import FakeSearchClient, FakeTextClient
from samples import (
    CONCERN,
    GOOD_QNA_TEXT,
    INSURANCE_TYPE,
    OFF_TOPIC_QNA_TEXT,
    STRATEGY_JSON,
    TARGET,
)
from services.naver_search import SearchItem

DESIGN_JSON = (
    '{"items": [{"name": "사망보장 <특약>", "coverage": "1억원", "premium": "45,000원", "period": "90세"}],'
    ' "totalPremium": "45,000원", "highlights": ["비갱신형"]}'
)


def _request(**kwargs):
    kwargs.setdefault("concern", CONCERN)
    return GenerationRequest(target=TARGET, insurance_type=INSURANCE_TYPE, **kwargs)


def _orchestrator(client, search_client=None, rng=None):
    return QnAOrchestrator(client=client, search_client=search_client or FakeSearchClient(), rng=rng)


def test_failing_drafts_are_regenerated_twice(rng):
    client = FakeTextClient([OFF_TOPIC_QNA_TEXT], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request()))

    assert len(client.prompts) == 3
    assert result.attempts == 3
    assert not result.audit.passed
    assert [h["attempt"] for h in result.history] == [1, 2, 3]
    assert "fix_these_issues" not in client.prompts[0]
    assert "fix_these_issues" in client.prompts[1]
    assert "고객 고민과 무관" in client.prompts[2]


def test_stops_once_audit_passes(rng):
    client = FakeTextClient([OFF_TOPIC_QNA_TEXT, GOOD_QNA_TEXT], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request()))

    assert result.attempts == 2
    assert result.audit.passed
    assert result.content.keywords == ["종신보험", "사망보장", "40대 가장"]
    assert result.design_html == ""


def test_vendor_failure_returns_fallback_without_regenerating(rng):
    client = FakeTextClient([GeminiUpstreamError("down")], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request()))

    assert result.used_fallback
    assert result.attempts == 1
    assert len(result.content.answers) == 3
    assert result.customer["phone"] in result.content.questions[0]


def test_strategy_failure_uses_search_keywords(rng):
    search = FakeSearchClient({
        "blog": [SearchItem("종신보험 비교 후기", "사망보장 비교 후기"), SearchItem("종신보험 비교", "")],
    })
    client = FakeTextClient([GOOD_QNA_TEXT], json_response=GeminiUpstreamError("down"))

    result = asyncio.run(_orchestrator(client, search_client=search, rng=rng).run(_request()))

    assert result.strategy.seo_keywords[0] == INSURANCE_TYPE
    assert "비교" in result.strategy.seo_keywords
    assert {kwargs["kind"] for _, kwargs in search.calls} == {"blog", "news"}


def test_config_error_propagates(rng):
    client = FakeTextClient([GOOD_QNA_TEXT], json_response=GeminiConfigError("no keys"))

    with pytest.raises(GeminiConfigError):
        asyncio.run(_orchestrator(client, rng=rng).run(_request()))


def test_empty_concern_is_generated(rng):
    client = FakeTextClient(['"신생아가 있는데 종신보험 들어야 하나요?"', GOOD_QNA_TEXT], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request(concern="")))

    assert result.concern == "신생아가 있는데 종신보험 들어야 하나요?"


def test_design_table_is_rendered_and_escaped(rng):
    client = FakeTextClient([GOOD_QNA_TEXT, DESIGN_JSON], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request(generate_design=True)))

    assert "<table" in result.design_html
    assert "사망보장 &lt;특약&gt;" in result.design_html
    assert "40세" in result.design_html


def test_malformed_design_is_skipped(rng):
    client = FakeTextClient([GOOD_QNA_TEXT, "표를 만들 수 없습니다"], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request(generate_design=True)))

    assert result.design_html == ""
    assert result.audit.passed


def test_wrong_shape_strategy_json_falls_back_to_default_keywords(rng):
    client = FakeTextClient([GOOD_QNA_TEXT], json_response={"seoKeywords": 5})

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request()))

    assert result.strategy.seo_keywords[0] == INSURANCE_TYPE
    assert result.audit.passed


def test_wrong_shape_design_json_is_skipped(rng):
    client = FakeTextClient([GOOD_QNA_TEXT, '{"items": 5}'], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request(generate_design=True)))

    assert result.design_html == ""


def test_feedback_comes_from_latest_attempt(rng):
    missing_type = GOOD_QNA_TEXT.replace(INSURANCE_TYPE, "생명보험")
    client = FakeTextClient([OFF_TOPIC_QNA_TEXT, missing_type], json_response=STRATEGY_JSON)

    result = asyncio.run(_orchestrator(client, rng=rng).run(_request()))

    assert result.attempts == 3
    first, second = result.history[0], result.history[1]
    assert first["overallScore"] != second["overallScore"]
    assert any("고객 고민과 무관" in r for r in first["failReasons"])
    assert second["failReasons"] == ['제목/질문/답변에 보험 종류 "종신보험"가 없습니다']
    assert "고객 고민과 무관" in client.prompts[1]
    assert '"종신보험"가 없습니다' in client.prompts[2]
    assert "고객 고민과 무관" not in client.prompts[2]
