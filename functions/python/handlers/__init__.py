from .blog import handle_analyze_blog, handle_generate_blog
from .generate_qna import handle_generate_qna, handle_generate_qna_full
from .health import handle_health
from .keywords import handle_naver_keywords
from .pages import handle_admin, handle_index
from .proposal_image import handle_generate_proposal_image
from .proxy import handle_proxy_message, handle_proxy_pac

__all__ = [
    'handle_index',
    'handle_admin',
    'handle_health',
    'handle_naver_keywords',
    'handle_generate_qna_full',
    'handle_generate_qna',
    'handle_generate_blog',
    'handle_analyze_blog',
    'handle_generate_proposal_image',
    'handle_proxy_pac',
    'handle_proxy_message',
]
