"""네이버 블로그 원고 / SEO 분석 프롬프트."""

from __future__ import annotations

ANALYSIS_CONTENT_LIMIT = 4000


def build_blog_prompt(
    *,
    topic: str,
    keywords: str,
    region: str,
    post_type: str,
    target: str,
) -> str:
    return f"""당신은 네이버 블로그 SEO 전문 작성 AI입니다.

【조건】
- 주제: {topic}
- 키워드: {keywords or topic}
- 지역: {region or '전국'}
- 유형: {post_type}
- 타겟: {target}

【규칙】
1. 본문 1,700자 이상
2. 키워드 3회+ 포함
3. [📷 이미지 삽입] 3-4회
4. > 3줄 요약 포함
5. Q&A 섹션 포함

【출력 형식】
[제목]
(30자 이내)

[본문]
(1,700자 이상)

[해시태그]
(10개)"""


def build_analysis_prompt(
    *,
    content: str,
    keyword: str,
    region: str,
) -> str:
    return f"""당신은 네이버 블로그 SEO 분석 전문가입니다.

【분석 대상】
{content[:ANALYSIS_CONTENT_LIMIT]}

【조건】
- 목표 키워드: {keyword or '미지정'}
- 목표 지역: {region or '미지정'}
- 글자수: {len(content)}자

【평가 기준】
- SEO (0-100)
- C-RANK (0-100)
- AEO (0-100)
- GEO (0-100)

【출력 형식】
[점수]
SEO: (숫자)
C-RANK: (숫자)
AEO: (숫자)
GEO: (숫자)
총점: (숫자)

[분석]
(상세 분석)

[개선된 제목]
(개선안)"""
