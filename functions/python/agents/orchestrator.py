import asyncio
import logging
import random
from typing import Any, Dict, List, Optional

from prompts.builders.design_prompts import build_design_prompt
from prompts.builders.qna_prompts import build_concern_prompt
from services.naver_search import (
    NaverSearchClient,
    collect_facts,
    extract_keywords,
    extract_title_keywords,
)
from services.proposal_renderer import build_proposal_table, render_coverage_table_html
from services.virtual_contact import generate_virtual_contact

from .common.gemini_client import (
    GeminiClientError,
    GeminiConfigError,
    GeminiTextClient,
)
from .common.qna_types import GenerationRequest, QnAResult
from .core.audit_agent import audit_qna_content
from .core.qna_writer_agent import QnAWriterAgent
from .core.strategy_agent import StrategyAgent

logger = logging.getLogger(__name__)

# 초안 1회 + 재생성 최대 2회
MAX_REGENERATION_ATTEMPTS = 2

SEARCH_QUERY_SUFFIX = '추천'
SEARCH_KEYWORD_LIMIT = 8


class QnAOrchestrator:
    """
    검색 → 전략(JSON) → 초안 → 자체 검수 → (실패 시 재생성) 파이프라인.

    재생성 시에는 직전 검수의 실패 사유/개선 제안만 다음 프롬프트로 넘긴다.
    """

    def __init__(
        self,
        client: Optional[GeminiTextClient] = None,
        search_client: Optional[NaverSearchClient] = None,
        options: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.options = options or {}
        self.client = client or GeminiTextClient()
        self.search_client = search_client or NaverSearchClient()
        self.rng = rng
        self.max_regenerations = self.options.get('maxRegenerationAttempts', MAX_REGENERATION_ATTEMPTS)

        agent_options = {**self.options, 'client': self.client}
        self.strategy_agent = StrategyAgent(options=agent_options)
        self.writer_agent = QnAWriterAgent(options=agent_options)

    async def gather_search_context(self, request: GenerationRequest) -> Dict[str, List[str]]:
        """블로그/뉴스 검색을 동시에 호출 (서로 의존 없음)."""
        blog_query = f"{request.target} {request.insurance_type} {SEARCH_QUERY_SUFFIX}".strip()
        blog_items, news_items = await asyncio.gather(
            self.search_client.search_async(blog_query, kind='blog', display=30, sort='sim'),
            self.search_client.search_async(request.insurance_type, kind='news', display=10, sort='sim'),
        )

        keywords = list(dict.fromkeys(
            extract_keywords(blog_items)[:5] + extract_title_keywords(news_items)[:3]
        ))[:SEARCH_KEYWORD_LIMIT]
        facts = collect_facts(news_items) or collect_facts(blog_items)

        logger.info(f"[QnAOrchestrator] 검색 키워드 {len(keywords)}개, 팩트 {len(facts)}개")
        return {'keywords': keywords, 'facts': facts}

    async def resolve_concern(self, request: GenerationRequest) -> str:
        if request.concern:
            return request.concern
        try:
            text = await self.client.generate(
                build_concern_prompt(request.target, request.insurance_type),
                max_output_tokens=256,
            )
            concern = text.replace('"', '').replace('\n', ' ').strip()
            if concern:
                return concern
        except GeminiConfigError:
            raise
        except GeminiClientError as e:
            logger.warning(f"[QnAOrchestrator] 고민 자동 생성 실패: {e}")
        return f"{request.insurance_type} 가입을 고민 중인데 어떤 상품이 좋을까요?"

    async def build_design_html(self, request: GenerationRequest, customer: Dict[str, str], highlights: List[str]) -> str:
        try:
            design_text = await self.client.generate(
                build_design_prompt(request.target, request.insurance_type),
                response_mime_type='application/json',
            )
            table = build_proposal_table(
                design_text,
                target=request.target,
                insurance_type=request.insurance_type,
                customer_name=customer.get('name', ''),
                fallback_highlights=highlights,
            )
        except GeminiConfigError:
            raise
        except GeminiClientError as e:
            logger.warning(f"[QnAOrchestrator] 설계서 생성 실패: {e}")
            return ''
        return render_coverage_table_html(table)

    async def run(self, request: GenerationRequest) -> QnAResult:
        logger.info(f"[QnAOrchestrator] 시작: target={request.target}, type={request.insurance_type}")

        search = await self.gather_search_context(request)
        concern = await self.resolve_concern(request)
        customer = generate_virtual_contact(self.rng)

        context: Dict[str, Any] = {
            'request': request,
            'concern': concern,
            'customer': customer,
            'searchKeywords': search['keywords'],
            'searchFacts': search['facts'],
        }
        context.update(await self.strategy_agent.run(context))
        strategy = context['strategy']

        history: List[Dict[str, Any]] = []
        feedback: Optional[List[str]] = None
        attempt = 0
        while True:
            attempt += 1
            draft = await self.writer_agent.run({**context, 'feedback': feedback})
            content = draft['content']
            audit = audit_qna_content(
                content,
                concern=concern,
                insurance_type=request.insurance_type,
                target=request.target,
                seo_keywords=strategy.seo_keywords,
                fact_checks=strategy.fact_checks,
            )
            history.append({
                'attempt': attempt,
                'overallScore': audit.overall_score,
                'passed': audit.passed,
                'failReasons': audit.fail_reasons,
            })

            if audit.passed:
                logger.info(f"[QnAOrchestrator] 검수 통과 ({attempt}회차, {audit.overall_score}점)")
                break
            if draft.get('usedFallback'):
                logger.warning("[QnAOrchestrator] 기본 Q&A로 대체됨 - 재생성 생략")
                break
            if attempt > self.max_regenerations:
                logger.warning(f"[QnAOrchestrator] 재생성 한도 도달 - 마지막 결과 반환 ({audit.overall_score}점)")
                break

            feedback = audit.feedback_lines()
            logger.info(f"[QnAOrchestrator] 검수 실패 ({audit.overall_score}점) - 재생성 {attempt}/{self.max_regenerations}")

        design_html = ''
        if request.generate_design:
            design_html = await self.build_design_html(request, customer, content.highlights)

        return QnAResult(
            request=request,
            concern=concern,
            customer=customer,
            strategy=strategy,
            content=content,
            audit=audit,
            attempts=attempt,
            used_fallback=bool(draft.get('usedFallback')),
            design_html=design_html,
            history=history,
        )
