import logging
from typing import Any, Dict, Optional

from prompts.builders.qna_prompts import build_qna_prompt

from ..base_agent import Agent
from ..common.bracket_parser import parse_qna_response
from ..common.gemini_client import GeminiClientError, GeminiConfigError, GeminiResponseError
from ..common.qna_types import GeneratedContent, GenerationRequest

logger = logging.getLogger(__name__)


def build_fallback_content(request: GenerationRequest, concern: str, customer: Dict[str, str]) -> GeneratedContent:
    """Gemini 호출이 불가능할 때 내려주는 기본 Q&A."""
    target = request.target or '고객'
    insurance_type = request.insurance_type or '보험'
    phone = customer.get('phone', '')

    return GeneratedContent(
        titles=[f'[{target}] {insurance_type} 가입 고민', f'{insurance_type}, 지금 가입해도 될까요?'],
        questions=[
            f'{concern or insurance_type + " 가입을 고민 중입니다."}\n\n연락처: {phone}'.strip(),
            f'{insurance_type} 보험료가 적당한지 궁금합니다.',
        ],
        answers=[
            f'{insurance_type}에 대해 답변 드립니다. 가입 전 보장 범위와 면책 기간을 먼저 확인해 보세요.',
            f'{target}이라면 {insurance_type}의 갱신형/비갱신형 차이를 비교해 보시는 게 좋습니다.',
            f'정확한 설계는 상담을 통해 현재 가입 내역을 점검한 뒤 결정하시길 권합니다.',
        ],
        comments=[
            '저도 같은 고민이었어요!',
            '전문가 답변 감사합니다.',
            '저도 상담 받아봐야겠네요.',
        ],
        highlights=[],
        keywords=[insurance_type],
    )


class QnAWriterAgent(Agent):
    """대괄호 태그 형식 Q&A 초안 생성."""

    def __init__(self, name: str = 'QnAWriterAgent', options: Optional[Dict[str, Any]] = None):
        super().__init__(name, options)

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        request: GenerationRequest = context['request']
        concern = context.get('concern', '')
        customer = context.get('customer', {})
        fallback = build_fallback_content(request, concern, customer)

        prompt = build_qna_prompt(
            request,
            concern,
            context['strategy'],
            customer,
            feedback=context.get('feedback'),
        )

        try:
            text = await self.client.generate(prompt)
        except GeminiConfigError:
            raise
        except GeminiResponseError as e:
            logger.warning(f"[QnAWriterAgent] 빈 응답/형식 오류 - 기본 Q&A 사용: {e}")
            return {'content': fallback, 'usedFallback': True, 'fallbackReason': 'malformed'}
        except GeminiClientError as e:
            logger.error(f"[QnAWriterAgent] Gemini 사용 불가 - 기본 Q&A 사용: {e}")
            return {'content': fallback, 'usedFallback': True, 'fallbackReason': 'unavailable'}

        content = parse_qna_response(text, fallback)
        logger.info(
            f"[QnAWriterAgent] 파싱 완료: 제목 {len(content.titles)}, 답변 {len(content.answers)}, 댓글 {len(content.comments)}"
        )
        return {'content': content, 'usedFallback': False, 'rawText': text}
