import json
import random

from agents.common.gemini_client import GeminiConfigError, GeminiUpstreamError
from agents.common.image_client import ImageResult
from agents.orchestrator import QnAOrchestrator
from fakes import FakeSearchClient, FakeTextClient
from handlers import blog, generate_qna, keywords, proposal_image, proxy
from handlers.health import handle_health
from handlers.pages import handle_admin, handle_index
from samples import GOOD_QNA_TEXT, STRATEGY_JSON
from services.config import ProxySettings
from services.naver_search import SearchItem
from services.proxy_pac import ProxyController


def _body(resp):
    return json.loads(resp.get_data(as_text=True))


def _use_text_client(monkeypatch, module, client):
    monkeypatch.setattr(module, "_build_text_client", lambda: client)


def test_pages_render_html(make_request):
    index = handle_index(make_request("GET"))
    admin = handle_admin(make_request("GET"))

    assert index.status_code == 200
    assert index.mimetype == "text/html"
    assert "generate_qna_full" in index.get_data(as_text=True)
    assert "naver_keywords" in admin.get_data(as_text=True)


def test_health(make_request):
    body = _body(handle_health(make_request("GET")))

    assert body["status"] == "ok"
    assert body["ai"] == "gemini + naver"
    assert "qna-full-auto" in body["features"]
    assert body["timestamp"]


def test_naver_keywords_requires_query(make_request):
    resp = keywords.handle_naver_keywords(make_request("GET"))

    assert resp.status_code == 400
    assert _body(resp) == {"error": "Query required"}


def test_naver_keywords(monkeypatch, make_request):
    search = FakeSearchClient({"blog": [SearchItem("암보험 비교", "암보험 진단비")]})
    monkeypatch.setattr(keywords, "_build_search_client", lambda: search)

    resp = keywords.handle_naver_keywords(make_request("GET", query_string={"q": "암보험"}))

    assert _body(resp) == {"keywords": ["암보험", "비교", "진단비"]}
    assert search.calls[0][0] == "암보험"


def test_generate_qna_full_validates_input(make_request):
    missing = generate_qna.handle_generate_qna_full(make_request(json={"target": "40대 가장"}))
    invalid = generate_qna.handle_generate_qna_full(make_request(data="not json", content_type="text/plain"))

    assert missing.status_code == 400
    assert invalid.status_code == 400


def test_generate_qna_full(monkeypatch, make_request):
    client = FakeTextClient([GOOD_QNA_TEXT], json_response=STRATEGY_JSON)
    monkeypatch.setattr(
        generate_qna,
        "_build_orchestrator",
        lambda: QnAOrchestrator(client=client, search_client=FakeSearchClient(), rng=random.Random(3)),
    )

    resp = generate_qna.handle_generate_qna_full(make_request(json={
        "target": "40대 가장",
        "insuranceType": "종신보험",
        "concern": "아이가 태어났는데 종신보험이 필요할까요",
        "tone": ["친근한"],
    }))
    body = _body(resp)

    assert resp.status_code == 200
    assert len(body["answers"]) == 3
    assert body["audit"]["passed"] is True
    assert body["seoScore"] == body["audit"]["seoScore"]
    assert body["attempts"] == 1
    assert body["keywords"] == ["종신보험", "사망보장", "40대 가장"]
    assert body["strategy"]["seoKeywords"] == STRATEGY_JSON["seoKeywords"]
    name, phone = body["customerInfo"].rsplit(" (", 1)
    assert name and phone.startswith("010-") and phone.endswith(")")
    assert body["designHtml"] == ""


def test_generate_qna_full_without_keys(monkeypatch, make_request):
    client = FakeTextClient([GOOD_QNA_TEXT], json_response=GeminiConfigError("no keys"))
    monkeypatch.setattr(
        generate_qna,
        "_build_orchestrator",
        lambda: QnAOrchestrator(client=client, search_client=FakeSearchClient()),
    )

    resp = generate_qna.handle_generate_qna_full(make_request(json={"target": "a", "insuranceType": "b"}))

    assert resp.status_code == 500
    assert _body(resp)["code"] == "CONFIG_ERROR"


def test_legacy_generate_qna(monkeypatch, make_request):
    _use_text_client(monkeypatch, generate_qna, FakeTextClient([
        "[질문1] 종신보험 필요할까요\n[답변1] 필요합니다\n[댓글1] c1\n[댓글2] c2\n[댓글3] c3",
    ]))

    body = _body(generate_qna.handle_generate_qna(make_request(json={"product": "A종신", "target": "40대"})))

    assert body == {"question": "종신보험 필요할까요", "answer": "필요합니다", "comments": "c1\n\nc2\n\nc3"}


def test_legacy_generate_qna_degrades_on_vendor_failure(monkeypatch, make_request):
    _use_text_client(monkeypatch, generate_qna, FakeTextClient([GeminiUpstreamError("down")]))

    resp = generate_qna.handle_generate_qna(make_request(json={"product": "A종신", "target": "40대"}))

    assert resp.status_code == 200
    assert _body(resp)["question"] == "[40대] A종신 가입 고민이에요"


def test_generate_blog(monkeypatch, make_request):
    _use_text_client(monkeypatch, blog, FakeTextClient(["[제목]\n제목\n[본문]\n본문\n[해시태그]\n#태그"]))

    body = _body(blog.handle_generate_blog(make_request(json={"topic": "암보험 비교", "target": "30대"})))

    assert body == {"title": "제목", "content": "본문", "hashtags": "#태그"}


def test_generate_blog_fallback(monkeypatch, make_request):
    _use_text_client(monkeypatch, blog, FakeTextClient([GeminiUpstreamError("down")]))

    body = _body(blog.handle_generate_blog(make_request(json={"topic": "암보험 비교", "target": "30대"})))

    assert body["title"] == "암보험 비교, 완벽 가이드"
    assert body["hashtags"] == "#암보험비교 #30대추천"


def test_analyze_blog_fills_missing_scores(monkeypatch, make_request):
    _use_text_client(monkeypatch, blog, FakeTextClient(["SEO: 80"]))

    body = _body(blog.handle_analyze_blog(make_request(json={"content": "본문입니다"})))

    assert body["seoScore"] == 80
    assert body["crankScore"] == 70
    assert body["aeoScore"] == 60
    assert body["geoScore"] == 50
    assert body["totalScore"] == 65
    assert body["analysis"] == "분석 결과"


def test_analyze_blog_requires_content(make_request):
    assert blog.handle_analyze_blog(make_request(json={"keyword": "x"})).status_code == 400


def test_proposal_image(monkeypatch, make_request):
    prompts = []

    async def fake_generate_image(prompt):
        prompts.append(prompt)
        return ImageResult(success=True, image_url="data:image/png;base64,UE5H", model="m2", attempts=3)

    monkeypatch.setattr(proposal_image, "generate_image", fake_generate_image)

    resp = proposal_image.handle_generate_proposal_image(make_request(json={
        "company": "한빛생명",
        "insuranceType": "암보험",
        "customer": {"name": "김민준", "age": "40세"},
    }))

    assert resp.status_code == 200
    assert _body(resp) == {"success": True, "imageUrl": "data:image/png;base64,UE5H", "model": "m2", "attempts": 3}
    assert "한빛생명" in prompts[0]
    assert "김민준 / 40세" in prompts[0]


def test_proposal_image_failure(monkeypatch, make_request):
    async def fake_generate_image(prompt):
        return ImageResult(success=False, attempts=4, tried=[{"model": "m1", "status": 429}])

    monkeypatch.setattr(proposal_image, "generate_image", fake_generate_image)

    resp = proposal_image.handle_generate_proposal_image(make_request(json={"insuranceType": "암보험"}))

    assert resp.status_code == 502
    assert _body(resp)["success"] is False


def _controller():
    settings = ProxySettings("proxy.example.com", 33335, "user", "pw", "kr", ("chrome-extension://abc",))
    return ProxyController(settings=settings, clock=lambda: 1.0, rng=random.Random(1))


def test_proxy_pac(monkeypatch, make_request):
    monkeypatch.setattr(proxy, "get_controller", _controller)

    resp = proxy.handle_proxy_pac(make_request("GET"))

    assert resp.mimetype == "application/x-ns-proxy-autoconfig"
    assert "PROXY proxy.example.com:33335" in resp.get_data(as_text=True)


def test_proxy_message(monkeypatch, make_request):
    controller = _controller()
    monkeypatch.setattr(proxy, "get_controller", lambda: controller)

    denied = proxy.handle_proxy_message(
        make_request(json={"action": "getStatus"}, headers={"Origin": "https://evil.example"})
    )
    anonymous = proxy.handle_proxy_message(make_request(json={"action": "enableProxy"}))
    enabled = proxy.handle_proxy_message(
        make_request(json={"action": "enableProxy", "sessionId": "s1"}, headers={"Origin": "chrome-extension://abc"})
    )
    unknown = proxy.handle_proxy_message(
        make_request(json={"action": "nope"}, headers={"Origin": "chrome-extension://abc"})
    )

    assert denied.status_code == 403
    assert anonymous.status_code == 403
    assert "proxyAuth" not in _body(anonymous)
    assert enabled.status_code == 200
    assert _body(enabled) == {"success": True, "sessionId": "s1", "status": "enabled"}
    assert unknown.status_code == 400
