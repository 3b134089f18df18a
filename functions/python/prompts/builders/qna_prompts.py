"""Q&A 생성 프롬프트 빌더.

1) 전략 수립(JSON) → 2) 본문 초안(대괄호 태그) 두 단계 프롬프트와,
고민 자동 생성 / 레거시 단일 호출 프롬프트를 만든다.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from agents.common.insurance_knowledge import get_domain_knowledge
from agents.common.personas import DEFAULT_TONE, get_persona
from agents.common.qna_types import GenerationRequest, StrategyPlan

CTA_GUIDE = "상담, 문의, 댓글, 쪽지, 비교 견적 중 하나로 자연스럽게 다음 행동을 안내"

OUTPUT_FORMAT = """
<output_format priority="critical" description="반드시 아래 대괄호 태그를 순서대로 사용">
[제목1]
(네이버 카페 질문 제목, 25자 이내, 보험 종류 포함)
[제목2]
(다른 각도의 대안 제목, 25자 이내)
[질문1]
(질문자 본인의 고민 글, 200~300자, 구체적인 상황과 숫자 포함)
[질문2]
(같은 질문자의 추가 질문, 100자 내외)
[답변1]
(전문가 1 - 팩트형: 약관/수치 근거 중심, 400자 이상)
[답변2]
(전문가 2 - 공감형: 경험담과 공감 중심, 400자 이상)
[답변3]
(전문가 3 - 행동형: 체크리스트와 다음 행동 중심, 400자 이상)
[강조포인트]
- (핵심 포인트 1)
- (핵심 포인트 2)
- (핵심 포인트 3)
[댓글1]
(실제 가입자 후기형 댓글, 50~80자)
[댓글2]
(추가 질문형 댓글, 50~80자)
[댓글3]
(비슷한 상황 공감 댓글, 50~80자)
[댓글4]
(정보 보충 댓글, 50~80자)
[댓글5]
(상담 경험 공유 댓글, 50~80자)
[키워드]
(쉼표로 구분한 검색 키워드 5개)
</output_format>
""".strip()


def _quote(value: str, default: str = "미지정") -> str:
    return f'"{value}"' if value else f'"{default}"'


def build_concern_prompt(target: str, insurance_type: str) -> str:
    return f"""당신은 {target}입니다. {insurance_type}에 대해 네이버 카페에 질문하려고 합니다.
현실적이고 구체적인 고민을 50자 이내로 작성해주세요.
예: "종신보험 가입 고민인데, 보험료가 부담되고 해지하면 손해라던데 어떤 상품이 좋을까요?"
반드시 한 문장으로 작성하세요."""


def build_strategy_prompt(
    request: GenerationRequest,
    concern: str,
    search_facts: Sequence[str],
    search_keywords: Sequence[str],
) -> str:
    facts = "\n".join(f"  <fact>{f}</fact>" for f in search_facts) or "  <fact>(검색 결과 없음)</fact>"
    keywords = ", ".join(search_keywords) or "(없음)"

    return f"""당신은 네이버 카페 보험 마케팅 전략가입니다.
아래 검색 결과를 바탕으로 Q&A 콘텐츠 작성 전략을 JSON으로만 출력하세요.

<request>
  <target>{_quote(request.target)}</target>
  <insurance_type>{_quote(request.insurance_type)}</insurance_type>
  <concern>{_quote(concern)}</concern>
</request>

<search_results>
{facts}
  <frequent_keywords>{keywords}</frequent_keywords>
</search_results>

<rules>
  <rule>seoKeywords: 검색량이 많을 법한 키워드 정확히 5개. 첫 번째는 반드시 "{request.insurance_type}" 포함</rule>
  <rule>factChecks: 검색 결과에서 확인되는 사실 2~3개 (각 60자 이내, 없는 수치 창작 금지)</rule>
  <rule>expertStrategies: 세 전문가의 답변 전략 각 1문장</rule>
</rules>

출력 형식 (반드시 JSON):
{{
  "seoKeywords": ["키워드1", "키워드2", "키워드3", "키워드4", "키워드5"],
  "factChecks": ["사실1", "사실2"],
  "expertStrategies": {{
    "factual": "팩트형 전문가 전략",
    "empathetic": "공감형 전문가 전략",
    "action": "행동형 전문가 전략"
  }}
}}"""


def build_feedback_section(feedback: Optional[Sequence[str]]) -> str:
    """직전 자체 검수에서 나온 문제 목록을 그대로 전달."""
    if not feedback:
        return ""
    items = "\n".join(f"  <issue>{line}</issue>" for line in feedback)
    return f"""<fix_these_issues priority="highest" description="이전 원고의 검수 실패 사유. 반드시 모두 해결">
{items}
</fix_these_issues>

"""


def build_qna_prompt(
    request: GenerationRequest,
    concern: str,
    strategy: StrategyPlan,
    customer: Dict[str, str],
    feedback: Optional[Sequence[str]] = None,
) -> str:
    tone = request.tone or DEFAULT_TONE
    seo_keywords = ", ".join(strategy.seo_keywords) or request.insurance_type
    facts = "\n".join(f"  <fact>{f}</fact>" for f in strategy.fact_checks) or "  <fact>(없음)</fact>"
    strategies = "\n".join(
        f'  <expert role="{role}">{text}</expert>' for role, text in strategy.expert_strategies.items()
    )

    return f"""{build_feedback_section(feedback)}당신은 보험 전문 콘텐츠 작성 AI입니다. 네이버 카페용 Q&A를 생성해주세요.

{get_persona(tone)}

{get_domain_knowledge(request.insurance_type)}

<conditions>
  <target>{_quote(request.target)}</target>
  <insurance_type>{_quote(request.insurance_type)}</insurance_type>
  <tone>{_quote(tone)}</tone>
  <concern>{_quote(concern)}</concern>
  <customer name="{customer.get('name', '')}" phone="{customer.get('phone', '')}"/>
</conditions>

<seo_rules>
  <rule>핵심 키워드({seo_keywords}) 중 최소 3개를 제목/질문/답변에 자연스럽게 포함</rule>
  <rule>"{request.insurance_type}"는 각 답변에 2회 이상 포함</rule>
  <rule>질문과 모든 답변은 고민 {_quote(concern)}의 상황을 직접 언급</rule>
</seo_rules>

<facts description="아래 사실만 수치 근거로 사용">
{facts}
</facts>

<expert_strategies>
{strategies}
</expert_strategies>

<answer_rules>
  <rule>세 답변은 서로 다른 문장으로 시작하고, 관점이 겹치지 않게 작성</rule>
  <rule>각 답변은 최소 400자</rule>
  <rule>답변 마지막에 {CTA_GUIDE}</rule>
</answer_rules>

<comment_rules>
  <rule>"좋은 정보 감사합니다" 같은 단순 칭찬만 있는 댓글 금지</rule>
  <rule>댓글에도 질문자의 상황이나 보험 종류를 구체적으로 언급</rule>
  <rule>댓글5에는 {customer.get('kakao', '')}를 자연스럽게 언급 가능</rule>
</comment_rules>

{OUTPUT_FORMAT}"""


def build_legacy_qna_prompt(
    *,
    product: str,
    concern: str,
    target: str,
    tone: str,
    insurance_type: str,
) -> str:
    return f"""당신은 보험 전문 콘텐츠 작성 AI입니다. 네이버 카페용 Q&A를 생성해주세요.

【조건】
- 보험 종류: {insurance_type or '종신보험'}
- 구체적 상품명: {product}
- 타겟: {target}
- 문체 톤: {tone or DEFAULT_TONE}
- 고민: {concern}

【출력 형식】
[질문1]
({target}이 {product}에 대해 궁금해하는 자연스러운 질문)

[답변1]
(전문가 답변 800자 이상)

[댓글1]
(공감하는 댓글)

[댓글2]
(정보 추가 댓글)

[댓글3]
(상담 권유 댓글)"""


def fallback_strategy(request: GenerationRequest, search_keywords: Sequence[str]) -> StrategyPlan:
    """전략 단계 실패 시 검색 키워드로 구성한 기본 전략."""
    keywords: List[str] = [request.insurance_type] if request.insurance_type else []
    for keyword in search_keywords:
        if keyword not in keywords:
            keywords.append(keyword)
    if request.target and request.insurance_type:
        keywords.append(f"{request.target} {request.insurance_type}")

    return StrategyPlan(
        seo_keywords=list(dict.fromkeys(keywords))[:5],
        fact_checks=[],
        expert_strategies={
            "factual": "약관과 보장 구조를 수치로 설명",
            "empathetic": "질문자의 불안에 공감하며 경험담 공유",
            "action": "가입 전 체크리스트와 상담 안내",
        },
    )
