# handlers/keywords.py
import logging

from firebase_functions import https_fn

from services.naver_search import NaverSearchClient, extract_keywords

from .http_utils import json_response

logger = logging.getLogger(__name__)


def _build_search_client() -> NaverSearchClient:
    return NaverSearchClient()


def handle_naver_keywords(req: https_fn.Request) -> https_fn.Response:
    """GET ?q=검색어 → 블로그 검색 결과의 빈도 상위 키워드."""
    query = (req.args.get("q") or "").strip()
    if not query:
        return json_response({"error": "Query required"}, 400)

    items = _build_search_client().search(query, kind="blog", display=30, sort="sim")
    keywords = extract_keywords(items)
    logger.info("키워드 조회 '%s': %s개", query, len(keywords))
    return json_response({"keywords": keywords})
