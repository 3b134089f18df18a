import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from ..common.qna_types import AuditResult, GeneratedContent

logger = logging.getLogger(__name__)

PASS_THRESHOLD = 70
BASE_SCORE = 100

MIN_ANSWERS = 3
MIN_ANSWER_LENGTH = 300
MIN_COMMENTS = 3
ANSWER_PREFIX_LENGTH = 30
CONCERN_PREFIX_LENGTH = 15
GENERIC_COMMENT_MAX_LENGTH = 50
SEO_KEYWORD_WINDOW = 5
SEO_KEYWORD_MIN_HITS = 3
CTA_MIN_ANSWERS = 2

PENALTIES = {
    'seo_missing_insurance_type': 30,
    'seo_keyword_coverage': 20,
    'context_questions': 25,
    'context_answers': 30,
    'context_comments': 15,
    'expert_answer_count': 40,
    'expert_short_answer': 15,
    'expert_duplicate_prefix': 20,
    'expert_cta': 15,
    'comment_count': 30,
    'comment_generic': 20,
}

CTA_KEYWORDS = [
    '상담', '문의', '댓글', '쪽지', '연락', '비교', '견적', '확인해 보세요', '확인해보세요',
    '점검해 보세요', '점검해보세요', '알아보세요', '카톡', '카카오톡',
]

EMPATHY_WORDS = ['저도', '공감', '같은 고민', '같은 상황', '비슷한', '맞아요', '걱정', '고민']

GENERIC_PRAISE = [
    '좋은 정보', '감사합니다', '감사해요', '고맙습니다', '유익', '도움이 됐', '도움 됐',
    '도움이 되', '잘 보고 갑니다', '잘 봤', '최고', '좋네요', '좋아요', '추천',
]

_PARTICLES = '은는이가을를에도의로만과와요'


def _concern_tokens(concern: str) -> List[str]:
    tokens: List[str] = []
    for word in re.findall(r'[가-힣A-Za-z0-9]{2,}', concern or ''):
        tokens.append(word)
        if len(word) >= 3 and word[-1] in _PARTICLES:
            tokens.append(word[:-1])
    return list(dict.fromkeys(tokens))


def _matches_concern(text: str, tokens: Sequence[str], concern_prefix: str) -> bool:
    if not text:
        return False
    if concern_prefix and concern_prefix in text:
        return True
    return any(token in text for token in tokens)


def _is_generic_praise(comment: str) -> bool:
    text = (comment or '').strip()
    if not text or len(text) >= GENERIC_COMMENT_MAX_LENGTH:
        return False
    remainder = text
    for phrase in GENERIC_PRAISE:
        remainder = remainder.replace(phrase, '')
    # 칭찬 문구를 지우고 나면 문장부호/이모티콘만 남는 댓글
    remainder = re.sub(r'[\s!~.,^ㅎㅋㅠㅜ?]+', '', remainder)
    return len(remainder) <= 4


def check_seo(content: GeneratedContent, insurance_type: str, seo_keywords: Sequence[str]) -> Dict[str, Any]:
    score = BASE_SCORE
    fails: List[str] = []
    suggestions: List[str] = []

    combined = ' '.join(content.titles + content.questions + content.answers).lower()

    if insurance_type and insurance_type.lower() not in combined:
        score -= PENALTIES['seo_missing_insurance_type']
        fails.append(f'제목/질문/답변에 보험 종류 "{insurance_type}"가 없습니다')

    window = [k for k in seo_keywords if k][:SEO_KEYWORD_WINDOW]
    if window:
        hits = [k for k in window if k.lower() in combined]
        if len(hits) < SEO_KEYWORD_MIN_HITS:
            score -= PENALTIES['seo_keyword_coverage']
            missing = [k for k in window if k not in hits]
            suggestions.append(
                f'SEO 키워드 {SEO_KEYWORD_MIN_HITS}개 이상 포함 필요 (현재 {len(hits)}개, 누락: {", ".join(missing)})'
            )

    return {'score': score, 'fails': fails, 'suggestions': suggestions}


def check_context(content: GeneratedContent, concern: str) -> Dict[str, Any]:
    score = BASE_SCORE
    fails: List[str] = []
    suggestions: List[str] = []

    if not concern:
        return {'score': score, 'fails': fails, 'suggestions': suggestions}

    tokens = _concern_tokens(concern)
    prefix = concern[:CONCERN_PREFIX_LENGTH]

    if not any(_matches_concern(q, tokens, prefix) for q in content.questions):
        score -= PENALTIES['context_questions']
        suggestions.append('질문에 고객 고민 상황이 반영되지 않았습니다')

    if not any(_matches_concern(a, tokens, prefix) for a in content.answers):
        score -= PENALTIES['context_answers']
        fails.append('답변이 고객 고민과 무관합니다. 고민 내용을 직접 언급하세요')

    comments_ok = any(
        _matches_concern(c, tokens, prefix) or any(w in c for w in EMPATHY_WORDS)
        for c in content.comments
    )
    if not comments_ok:
        score -= PENALTIES['context_comments']
        suggestions.append('댓글이 질문 상황과 연결되지 않습니다')

    return {'score': score, 'fails': fails, 'suggestions': suggestions}


def check_expert_diversity(content: GeneratedContent) -> Dict[str, Any]:
    score = BASE_SCORE
    fails: List[str] = []
    suggestions: List[str] = []
    answers = content.answers

    if len(answers) < MIN_ANSWERS:
        score -= PENALTIES['expert_answer_count']
        fails.append(f'전문가 답변이 최소 {MIN_ANSWERS}개 필요합니다 (현재 {len(answers)}개)')

    for index, answer in enumerate(answers[:MIN_ANSWERS], start=1):
        if len(answer) < MIN_ANSWER_LENGTH:
            score -= PENALTIES['expert_short_answer']
            suggestions.append(f'답변{index}이 너무 짧습니다 ({len(answer)}자, {MIN_ANSWER_LENGTH}자 이상 필요)')

    prefixes = [a.strip()[:ANSWER_PREFIX_LENGTH] for a in answers[:MIN_ANSWERS]]
    if len(prefixes) > 1 and len(set(prefixes)) < len(prefixes):
        score -= PENALTIES['expert_duplicate_prefix']
        suggestions.append('답변들이 같은 문장으로 시작합니다. 전문가별로 도입부를 다르게 작성하세요')

    cta_count = sum(1 for a in answers[:MIN_ANSWERS] if any(k in a for k in CTA_KEYWORDS))
    if cta_count < CTA_MIN_ANSWERS:
        score -= PENALTIES['expert_cta']
        suggestions.append(f'상담/문의 유도 문구가 있는 답변이 {CTA_MIN_ANSWERS}개 이상 필요합니다 (현재 {cta_count}개)')

    return {'score': score, 'fails': fails, 'suggestions': suggestions}


def check_comment_realism(content: GeneratedContent) -> Dict[str, Any]:
    score = BASE_SCORE
    fails: List[str] = []
    suggestions: List[str] = []
    comments = content.comments

    if len(comments) < MIN_COMMENTS:
        score -= PENALTIES['comment_count']
        fails.append(f'댓글이 최소 {MIN_COMMENTS}개 필요합니다 (현재 {len(comments)}개)')

    generic = [c for c in comments if _is_generic_praise(c)]
    if len(generic) > 1:
        score -= PENALTIES['comment_generic']
        suggestions.append(f'단순 칭찬 댓글이 {len(generic)}개입니다. 구체적인 경험/질문으로 바꾸세요')

    return {'score': score, 'fails': fails, 'suggestions': suggestions}


def audit_qna_content(
    content: GeneratedContent,
    *,
    concern: str,
    insurance_type: str,
    target: str = '',
    seo_keywords: Optional[Sequence[str]] = None,
    fact_checks: Optional[Sequence[str]] = None,
) -> AuditResult:
    """
    Q&A 자체 검수.
    하위 점수는 0 아래로 내려갈 수 있으며 그대로 평균낸다.
    passed = 평균 70 이상 AND 필수 조건 실패(fail_reasons) 없음.
    """
    seo = check_seo(content, insurance_type, seo_keywords or [])
    context = check_context(content, concern)
    expert = check_expert_diversity(content)
    comments = check_comment_realism(content)
    checks = [seo, context, expert, comments]

    fail_reasons = [reason for check in checks for reason in check['fails']]
    suggestions = [s for check in checks for s in check['suggestions']]

    facts = [f for f in (fact_checks or []) if f]
    if facts and content.answers:
        fact_heads = [f.split(':')[0].strip()[:10] for f in facts]
        if not any(head and head in answer for head in fact_heads for answer in content.answers):
            suggestions.append('검색으로 확인한 사실(factChecks)이 답변에 반영되지 않았습니다')

    overall = round(sum(check['score'] for check in checks) / len(checks), 1)
    passed = overall >= PASS_THRESHOLD and not fail_reasons

    logger.info(
        "[AuditAgent] target=%s seo=%s context=%s expert=%s comment=%s overall=%s passed=%s",
        target, seo['score'], context['score'], expert['score'], comments['score'], overall, passed,
    )

    return AuditResult(
        seo_score=seo['score'],
        context_score=context['score'],
        expert_score=expert['score'],
        comment_score=comments['score'],
        overall_score=overall,
        passed=passed,
        fail_reasons=fail_reasons,
        suggestions=suggestions,
    )
