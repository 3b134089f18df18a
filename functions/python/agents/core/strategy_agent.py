import logging
from typing import Any, Dict, Optional

from prompts.builders.qna_prompts import build_strategy_prompt, fallback_strategy

from ..base_agent import Agent
from ..common.gemini_client import GeminiClientError, GeminiConfigError, GeminiResponseError
from ..common.qna_types import StrategyPlan

logger = logging.getLogger(__name__)


class StrategyAgent(Agent):
    """검색 결과 → SEO 키워드 / 팩트 / 전문가 전략 JSON."""

    def __init__(self, name: str = 'StrategyAgent', options: Optional[Dict[str, Any]] = None):
        super().__init__(name, options)

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        request = context['request']
        search_keywords = context.get('searchKeywords', [])
        prompt = build_strategy_prompt(
            request,
            context.get('concern', ''),
            context.get('searchFacts', []),
            search_keywords,
        )

        try:
            data = await self.client.generate_json(prompt, temperature=0.4)
        except GeminiConfigError:
            raise
        except GeminiResponseError as e:
            logger.warning(f"[StrategyAgent] 전략 JSON 형식 오류 - 기본 전략 사용: {e}")
            return {'strategy': fallback_strategy(request, search_keywords), 'strategyFallback': True}
        except GeminiClientError as e:
            logger.warning(f"[StrategyAgent] Gemini 사용 불가 - 기본 전략 사용: {e}")
            return {'strategy': fallback_strategy(request, search_keywords), 'strategyFallback': True}

        strategy = StrategyPlan.from_json(data)
        if not strategy.seo_keywords:
            strategy.seo_keywords = fallback_strategy(request, search_keywords).seo_keywords

        logger.info(f"[StrategyAgent] 키워드 {strategy.seo_keywords}, 팩트 {len(strategy.fact_checks)}개")
        return {'strategy': strategy, 'strategyFallback': False}
