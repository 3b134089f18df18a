import asyncio
import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional

import requests
from bs4 import BeautifulSoup

from services.config import get_naver_credentials

logger = logging.getLogger(__name__)

SEARCH_URL = "https://openapi.naver.com/v1/search/{kind}.json"
REQUEST_TIMEOUT_SEC = 5

STOP_WORDS = [
    "있습니다", "합니다", "입니다", "됩니다", "그리고", "하지만",
    "그러나", "때문에", "대해서", "관련해", "라고", "이라고",
]


@dataclass
class SearchItem:
    title: str
    description: str
    link: str = ""


def strip_markup(text: str) -> str:
    """검색 API의 <b> 태그와 HTML 엔티티 제거."""
    if not text:
        return ""
    return " ".join(BeautifulSoup(text, "lxml").get_text().split())


class NaverSearchClient:
    """
    네이버 검색 오픈 API (블로그/뉴스).
    자격증명이 없거나 호출이 실패하면 빈 목록을 반환한다.
    """

    def __init__(self, client_id: Optional[str] = None, client_secret: Optional[str] = None, session=None):
        if client_id is None or client_secret is None:
            env_id, env_secret = get_naver_credentials()
            client_id = client_id if client_id is not None else env_id
            client_secret = client_secret if client_secret is not None else env_secret
        self.client_id = client_id
        self.client_secret = client_secret
        self.session = session or requests

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def search(self, query: str, *, kind: str = "blog", display: int = 10, sort: str = "sim") -> List[SearchItem]:
        if not query or not query.strip():
            return []
        if not self.configured:
            logger.warning("⚠️ 네이버 API 자격증명 미설정 - 검색 생략: %s", query)
            return []

        try:
            logger.info(f"🔍 네이버 {kind} 검색: {query}")
            resp = self.session.get(
                SEARCH_URL.format(kind=kind),
                params={"query": query, "display": display, "sort": sort},
                headers={
                    "X-Naver-Client-Id": self.client_id,
                    "X-Naver-Client-Secret": self.client_secret,
                },
                timeout=REQUEST_TIMEOUT_SEC,
            )
            resp.raise_for_status()
            items = resp.json().get("items") or []
        except Exception as e:
            logger.error(f"❌ 네이버 검색 실패 ({kind}): {e}")
            return []

        results = [
            SearchItem(
                title=strip_markup(item.get("title", "")),
                description=strip_markup(item.get("description", "")),
                link=item.get("link", ""),
            )
            for item in items
        ]
        logger.info(f"✅ 검색 결과 {len(results)}개: {query}")
        return results

    async def search_async(self, query: str, **kwargs) -> List[SearchItem]:
        return await asyncio.to_thread(self.search, query, **kwargs)


def extract_keywords(items: List[SearchItem], limit: int = 20) -> List[str]:
    """제목+설명에서 2~8자 한글 단어 빈도 상위."""
    all_text = " ".join(f"{item.title} {item.description}" for item in items)
    words = re.findall(r"[가-힣]{2,8}", all_text)

    counter = Counter(w for w in words if not any(sw in w for sw in STOP_WORDS))
    return [word for word, _ in counter.most_common(limit)]


def extract_title_keywords(items: List[SearchItem], limit: int = 10) -> List[str]:
    """제목에 등장한 한글 단어 (등장 순서 유지, 중복 제거)."""
    keywords: List[str] = []
    for item in items:
        for match in re.findall(r"[가-힣]{2,10}", item.title):
            if len(match) <= 8 and match not in keywords:
                keywords.append(match)
    return keywords[:limit]


def collect_facts(items: List[SearchItem], limit: int = 3) -> List[str]:
    facts = []
    for item in items:
        if not item.title:
            continue
        summary = item.description[:80]
        facts.append(f"{item.title}: {summary}" if summary else item.title)
        if len(facts) >= limit:
            break
    return facts
