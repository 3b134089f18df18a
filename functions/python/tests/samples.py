"""테스트 공용 샘플 원고/전략."""

CONCERN = "아이가 태어났는데 종신보험이 필요할까요"
INSURANCE_TYPE = "종신보험"
TARGET = "40대 가장"
SEO_KEYWORDS = ["종신보험", "사망보장", "40대 가장"]

_FILLER = "보장 금액은 연 소득의 3~5배 수준으로 잡는 것이 일반적입니다. "

PASSING_ANSWERS = [
    "안녕하세요, 재무설계 10년차입니다. 아이가 태어났다면 종신보험의 사망보장부터 점검해야 합니다. "
    + _FILLER * 10
    + "자세한 설계는 상담 문의 주시면 도와드리겠습니다.",
    "저도 두 아이 아빠라서 그 마음 잘 압니다. 아이 키우는 동안 가장의 공백을 대비하는 게 핵심이에요. "
    + _FILLER * 10
    + "궁금한 점은 댓글로 남겨주세요.",
    "약관 기준으로 정리해 드리면, 종신보험은 해지환급금과 보험료 납입 기간을 함께 보셔야 합니다. "
    + _FILLER * 10
    + "여러 상품 견적을 비교해 보세요.",
]

PASSING_COMMENTS = [
    "저도 아이 태어나고 종신보험 알아보는 중이에요",
    "사망보장 금액은 어떻게 정하셨나요? 저도 고민이네요",
    "답변 보고 상담 신청해봤어요",
]

GOOD_QNA_TEXT = (
    "[제목1] 40대 가장 종신보험 고민\n"
    "[제목2] 아이 태어나고 종신보험 필요할까요?\n"
    f"[질문1] {CONCERN}? 40대 가장입니다.\n"
    "[질문2] 사망보장 금액은 얼마나 잡아야 할까요?\n"
    f"[답변1] {PASSING_ANSWERS[0]}\n"
    f"[답변2] {PASSING_ANSWERS[1]}\n"
    f"[답변3] {PASSING_ANSWERS[2]}\n"
    "[강조포인트]\n- 사망보장은 소득의 3~5배\n- 납입 기간과 해지환급금 확인\n"
    f"[댓글1] {PASSING_COMMENTS[0]}\n"
    f"[댓글2] {PASSING_COMMENTS[1]}\n"
    f"[댓글3] {PASSING_COMMENTS[2]}\n"
    "[키워드] 종신보험, 사망보장, 40대 가장"
)

OFF_TOPIC_QNA_TEXT = (
    "[제목1] 종신보험 이야기\n"
    "[답변1] 오늘 날씨가 정말 좋네요\n"
    "[답변2] 점심 메뉴 골라주세요\n"
    "[답변3] 주말 계획 세우셨나요\n"
)

STRATEGY_JSON = {
    "seoKeywords": SEO_KEYWORDS,
    "factChecks": [],
    "expertStrategies": {
        "factual": "약관 기준 설명",
        "empathetic": "아빠 입장 공감",
        "action": "상담 유도",
    },
}
