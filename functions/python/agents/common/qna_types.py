"""Q&A 파이프라인에서 요청 단위로만 존재하는 값 객체들."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass
class GenerationRequest:
    target: str
    insurance_type: str
    concern: str = ""
    tone: str = ""
    generate_design: bool = False

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "GenerationRequest":
        tone = data.get("tone") or ""
        if isinstance(tone, (list, tuple)):
            tone = ", ".join(str(t).strip() for t in tone if str(t).strip())
        return cls(
            target=str(data.get("target") or "").strip(),
            insurance_type=str(data.get("insuranceType") or "").strip(),
            concern=str(data.get("concern") or "").strip(),
            tone=str(tone).strip(),
            generate_design=_as_bool(data.get("generateDesign")),
        )


def _as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclass
class StrategyPlan:
    seo_keywords: List[str] = field(default_factory=list)
    fact_checks: List[str] = field(default_factory=list)
    expert_strategies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "StrategyPlan":
        strategies = data.get("expertStrategies") or {}
        if isinstance(strategies, list):
            strategies = {f"expert{i + 1}": str(s) for i, s in enumerate(strategies)}
        if not isinstance(strategies, dict):
            strategies = {}
        return cls(
            seo_keywords=_str_list(data.get("seoKeywords"))[:5],
            fact_checks=_str_list(data.get("factChecks"))[:3],
            expert_strategies={str(k): str(v) for k, v in strategies.items() if v},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seoKeywords": self.seo_keywords,
            "factChecks": self.fact_checks,
            "expertStrategies": self.expert_strategies,
        }


def _str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        value = [value]
    if not value or not isinstance(value, (list, tuple)):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass
class GeneratedContent:
    titles: List[str] = field(default_factory=list)
    questions: List[str] = field(default_factory=list)
    answers: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    highlights: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class AuditResult:
    seo_score: int
    context_score: int
    expert_score: int
    comment_score: int
    overall_score: float
    passed: bool
    fail_reasons: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seoScore": self.seo_score,
            "contextScore": self.context_score,
            "expertScore": self.expert_score,
            "commentScore": self.comment_score,
            "overallScore": self.overall_score,
            "passed": self.passed,
            "failReasons": self.fail_reasons,
            "suggestions": self.suggestions,
        }

    def feedback_lines(self) -> List[str]:
        return list(self.fail_reasons) + list(self.suggestions)


@dataclass
class QnAResult:
    request: GenerationRequest
    concern: str
    customer: Dict[str, str]
    strategy: StrategyPlan
    content: GeneratedContent
    audit: AuditResult
    attempts: int
    used_fallback: bool = False
    design_html: str = ""
    history: List[Dict[str, Any]] = field(default_factory=list)
