import requests

from services.naver_search import (
    SEARCH_URL,
    NaverSearchClient,
    SearchItem,
    collect_facts,
    extract_keywords,
    extract_title_keywords,
    strip_markup,
)


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        pass

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, payload=None, error=None):
        self.payload = payload or {"items": []}
        self.error = error
        self.requests = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error:
            raise self.error
        return FakeResponse(self.payload)


def test_search_strips_markup_and_sends_credentials():
    session = FakeSession({"items": [
        {"title": "40대 <b>종신보험</b> 추천", "description": "사망보장 &amp; 해지환급금", "link": "https://blog"},
    ]})
    client = NaverSearchClient("id", "secret", session=session)

    items = client.search("종신보험", kind="news", display=5)

    assert items == [SearchItem("40대 종신보험 추천", "사망보장 & 해지환급금", "https://blog")]
    url, kwargs = session.requests[0]
    assert url == SEARCH_URL.format(kind="news")
    assert kwargs["params"] == {"query": "종신보험", "display": 5, "sort": "sim"}
    assert kwargs["headers"]["X-Naver-Client-Id"] == "id"


def test_search_without_credentials_returns_empty():
    session = FakeSession()
    client = NaverSearchClient("", "", session=session)

    assert not client.configured
    assert client.search("종신보험") == []
    assert session.requests == []


def test_search_errors_return_empty():
    client = NaverSearchClient("id", "secret", session=FakeSession(error=requests.ConnectionError("down")))
    assert client.search("종신보험") == []


def test_strip_markup_handles_plain_text():
    assert strip_markup("") == ""
    assert strip_markup("<b>암보험</b>이 필요할까") == "암보험이 필요할까"


def test_extract_keywords_by_frequency_without_stop_words():
    items = [
        SearchItem("암보험 비교 후기", "암보험 비교 있습니다"),
        SearchItem("암보험 가입", "비교 견적"),
    ]
    keywords = extract_keywords(items)

    assert keywords[:2] == ["암보험", "비교"]
    assert "있습니다" not in keywords


def test_title_keywords_keep_order():
    items = [SearchItem("실손보험 개편 소식", ""), SearchItem("실손보험 청구 방법", "")]
    assert extract_title_keywords(items) == ["실손보험", "개편", "소식", "청구", "방법"]


def test_collect_facts_truncates_descriptions():
    items = [SearchItem("", "무시"), SearchItem("제목", "가" * 100), SearchItem("제목2", "")]
    assert collect_facts(items) == [f"제목: {'가' * 80}", "제목2"]
