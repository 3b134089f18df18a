from dataclasses import replace

from agents.core.audit_agent import audit_qna_content
from samples import CONCERN, INSURANCE_TYPE, SEO_KEYWORDS, TARGET


def _audit(content, **kwargs):
    kwargs.setdefault("seo_keywords", SEO_KEYWORDS)
    return audit_qna_content(
        content, concern=CONCERN, insurance_type=INSURANCE_TYPE, target=TARGET, **kwargs
    )


def test_well_formed_content_passes(passing_content):
    audit = _audit(passing_content)

    assert audit.passed
    assert audit.overall_score == 100
    assert audit.fail_reasons == []
    assert audit.suggestions == []


def test_fewer_than_three_seo_keywords_is_a_soft_penalty(passing_content):
    audit = _audit(passing_content, seo_keywords=["종신보험", "사망보장"])

    assert audit.passed
    assert audit.seo_score == 80
    assert audit.fail_reasons == []
    assert any("SEO 키워드 3개 이상" in s for s in audit.suggestions)


def test_zero_comments_is_a_hard_failure(passing_content):
    audit = _audit(replace(passing_content, comments=[]))

    assert not audit.passed
    assert audit.comment_score == 70
    assert "댓글이 최소 3개 필요합니다 (현재 0개)" in audit.fail_reasons
    assert audit.overall_score >= 70


def test_missing_insurance_type_fails_seo(passing_content):
    content = replace(
        passing_content,
        titles=["아이 태어난 가장 고민"],
        questions=["아이가 생겼어요"],
        answers=[a.replace("종신보험", "보험") for a in passing_content.answers],
    )
    audit = _audit(content)

    assert not audit.passed
    assert audit.seo_score <= 70
    assert any("종신보험" in reason for reason in audit.fail_reasons)


def test_short_single_answer_penalties(passing_content):
    audit = _audit(replace(passing_content, answers=["아이가 태어났다면 짧게 답합니다"]))

    # 개수 -40, 길이 -15, 상담 유도 -15
    assert audit.expert_score == 30
    assert any("최소 3개" in reason for reason in audit.fail_reasons)
    assert not audit.passed


def test_generic_praise_comments_are_penalized(passing_content):
    comments = ["좋은 정보 감사합니다!", "감사합니다~", "저도 같은 고민이에요"]
    audit = _audit(replace(passing_content, comments=comments))

    assert audit.comment_score == 80
    assert any("단순 칭찬" in s for s in audit.suggestions)


def test_off_topic_answers_fail_context(passing_content):
    answers = ["오늘 날씨 이야기" * 40, "점심 메뉴 이야기" * 40, "주말 계획 이야기" * 40]
    audit = _audit(replace(passing_content, answers=answers))

    assert not audit.passed
    assert any("고객 고민과 무관" in reason for reason in audit.fail_reasons)


def test_unreflected_fact_checks_become_suggestions(passing_content):
    audit = _audit(passing_content, fact_checks=["보험업법 개정: 2025년부터 시행"])

    assert audit.passed
    assert any("factChecks" in s for s in audit.suggestions)


def test_feedback_lines_list_failures_first(passing_content):
    audit = _audit(replace(passing_content, comments=["좋아요", "최고", "감사합니다"]))
    lines = audit.feedback_lines()

    assert lines[: len(audit.fail_reasons)] == audit.fail_reasons
    assert lines[len(audit.fail_reasons):] == audit.suggestions
