"""
대괄호 태그 응답 파서.

모델에게 `[제목1] ... [답변1] ...` 형태로 출력하도록 지시하고,
알려진 태그 경계로만 잘라 (tag, body) 목록을 만든다.
본문 안의 `[📷 이미지 삽입]` 같은 임의 대괄호는 경계로 취급하지 않는다.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .qna_types import GeneratedContent

TITLE_TAGS = ("제목1", "제목2")
QUESTION_TAGS = ("질문1", "질문2")
ANSWER_TAGS = ("답변1", "답변2", "답변3")
HIGHLIGHT_TAG = "강조포인트"
COMMENT_TAGS = ("댓글1", "댓글2", "댓글3", "댓글4", "댓글5")
KEYWORD_TAG = "키워드"

QNA_TAGS: Tuple[str, ...] = (
    TITLE_TAGS
    + QUESTION_TAGS
    + ANSWER_TAGS
    + (HIGHLIGHT_TAG,)
    + COMMENT_TAGS
    + (KEYWORD_TAG,)
)

BLOG_TAGS: Tuple[str, ...] = ("제목", "본문", "해시태그")
ANALYSIS_TAGS: Tuple[str, ...] = ("점수", "분석", "개선된 제목")

# 이모지/기호 영역
_EMOJI_PATTERN = re.compile(
    "["
    "\U0001F000-\U0001FAFF"
    "\U00002600-\U000027BF"
    "\U00002B00-\U00002BFF"
    "\U0000FE00-\U0000FE0F"
    "\U0000200D"
    "\U000020E3"
    "]+"
)
_MARKDOWN_EMPHASIS = re.compile(r"(\*\*|__|\*|`+)")
_MARKDOWN_HEADING = re.compile(r"^\s{0,3}#{1,6}\s*", re.MULTILINE)


def _tag_pattern(known_tags: Iterable[str]) -> re.Pattern:
    # 긴 태그부터 매칭 (예: "제목" 보다 "제목1" 우선)
    ordered = sorted({t for t in known_tags if t}, key=len, reverse=True)
    alternatives = "|".join(re.escape(t) for t in ordered)
    return re.compile(rf"\[\s*({alternatives})\s*\]")


def tokenize_sections(text: str, known_tags: Sequence[str]) -> List[Tuple[str, str]]:
    """알려진 태그 경계로 나눈 (tag, body) 목록. 태그 순서는 자유."""
    if not text or not known_tags:
        return []

    matches = list(_tag_pattern(known_tags).finditer(text))
    sections: List[Tuple[str, str]] = []
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(text)
        sections.append((match.group(1), text[match.end():end].strip()))
    return sections


def section_map(text: str, known_tags: Sequence[str]) -> Dict[str, str]:
    """태그별 첫 번째 본문. 빈 본문은 없는 것으로 취급."""
    result: Dict[str, str] = {}
    for tag, body in tokenize_sections(text, known_tags):
        if body and tag not in result:
            result[tag] = body
    return result


def extract_section(
    text: str, tag: str, known_tags: Sequence[str] = QNA_TAGS
) -> Optional[str]:
    return section_map(text, known_tags).get(tag)


def clean_text(text: str) -> str:
    """이모지와 마크다운 강조/헤딩 기호 제거."""
    if not text:
        return ""
    cleaned = _EMOJI_PATTERN.sub("", text)
    cleaned = _MARKDOWN_HEADING.sub("", cleaned)
    cleaned = _MARKDOWN_EMPHASIS.sub("", cleaned)
    cleaned = re.sub(r"[ \t]+\n", "\n", cleaned)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    return cleaned.strip()


def split_list_lines(text: str, *, min_length: int = 1, limit: Optional[int] = None) -> List[str]:
    """불릿 목록 본문을 줄 단위 리스트로."""
    items: List[str] = []
    for line in (text or "").splitlines():
        item = re.sub(r"^\s*(?:[-•*]|\d+[.)])\s*", "", line).strip()
        if len(item) >= min_length:
            items.append(item)
    return items[:limit] if limit else items


def split_keywords(text: str) -> List[str]:
    parts = re.split(r"[,\n#]+", text or "")
    keywords = [clean_text(p).strip() for p in parts]
    return list(dict.fromkeys(k for k in keywords if k))


def _pick(sections: Dict[str, str], tags: Sequence[str], fallbacks: Sequence[str]) -> List[str]:
    values: List[str] = []
    for index, tag in enumerate(tags):
        body = clean_text(sections.get(tag, ""))
        if not body and index < len(fallbacks):
            body = fallbacks[index]
        if body:
            values.append(body)
    return values


def parse_qna_response(text: str, fallback: GeneratedContent) -> GeneratedContent:
    """
    Q&A 응답을 GeneratedContent로 변환.
    누락된 태그는 fallback의 같은 위치 값으로 채운다.
    """
    sections = section_map(text or "", QNA_TAGS)

    highlights = split_list_lines(sections.get(HIGHLIGHT_TAG, ""), min_length=6, limit=3)
    highlights = [clean_text(h) for h in highlights if clean_text(h)]
    keywords = split_keywords(sections.get(KEYWORD_TAG, ""))

    return GeneratedContent(
        titles=_pick(sections, TITLE_TAGS, fallback.titles),
        questions=_pick(sections, QUESTION_TAGS, fallback.questions),
        answers=_pick(sections, ANSWER_TAGS, fallback.answers),
        comments=_pick(sections, COMMENT_TAGS, fallback.comments),
        highlights=highlights or list(fallback.highlights),
        keywords=keywords or list(fallback.keywords),
    )


def parse_blog_response(text: str) -> Dict[str, str]:
    sections = section_map(text or "", BLOG_TAGS)
    return {
        "title": clean_text(sections.get("제목", "")),
        "content": sections.get("본문", "").strip(),
        "hashtags": sections.get("해시태그", "").strip(),
    }


_SCORE_LABELS = {
    "seoScore": r"SEO",
    "crankScore": r"C-RANK",
    "aeoScore": r"AEO",
    "geoScore": r"GEO",
    "totalScore": r"총점",
}


def parse_analysis_response(text: str) -> Dict[str, object]:
    """블로그 분석 응답. 점수는 못 찾으면 None."""
    sections = section_map(text or "", ANALYSIS_TAGS)
    score_block = sections.get("점수") or text or ""

    scores: Dict[str, object] = {}
    for key, label in _SCORE_LABELS.items():
        match = re.search(rf"(?<![A-Z-]){label}\s*[:：]\s*(\d+)", score_block, re.IGNORECASE)
        scores[key] = int(match.group(1)) if match else None

    scores["analysis"] = sections.get("분석", "").strip()
    scores["improved"] = clean_text(sections.get("개선된 제목", ""))
    return scores
