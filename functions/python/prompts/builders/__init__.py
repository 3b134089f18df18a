"""프롬프트 빌더 패키지."""

from . import blog_prompts, design_prompts, qna_prompts

__all__ = [
    "qna_prompts",
    "design_prompts",
    "blog_prompts",
]
