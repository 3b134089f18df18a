"""
프론트엔드 HTML (단일 페이지 + 관리자 페이지).

결과는 fetch 후 textContent 로만 채워 넣는다 (모델 출력을 innerHTML 로 쓰지 않음).
설계서 HTML은 sandbox iframe(srcdoc)으로 격리한다.
"""

from __future__ import annotations

import html
import json
from typing import Sequence

APP_TITLE = "보험 콘텐츠 마스터"

TARGET_OPTIONS = ["20대 사회초년생", "30대 신혼부부", "40대 가장", "50대 은퇴준비", "60대 시니어", "30대 워킹맘"]
INSURANCE_OPTIONS = ["종신보험", "암보험", "실손보험", "운전자보험", "어린이보험", "치아보험", "연금보험", "간병보험"]
TONE_OPTIONS = ["친근한", "전문적인", "공감형", "간결한", "유머러스한"]

_BASE_STYLE = """
    body { font-family: 'Noto Sans KR', sans-serif; background: #0a0a0a; color: #fff; }
    .glass-card { background: rgba(255,255,255,0.02); border: 1px solid rgba(255,255,255,0.06); border-radius: 28px; }
    .input-premium { background: rgba(255,255,255,0.04); border: 1px solid rgba(255,255,255,0.08); border-radius: 16px; }
    .input-premium:focus { border-color: #03C75A; outline: none; }
    .chip { background: rgba(255,255,255,0.04); border: 1px solid rgba(255,255,255,0.08); border-radius: 100px;
            padding: 10px 20px; font-size: 14px; color: rgba(255,255,255,0.6); cursor: pointer; }
    .chip.active { border-color: rgba(3,199,90,0.5); color: #03C75A; }
    .btn-primary { background: linear-gradient(135deg, #03C75A 0%, #00A84D 100%); border-radius: 16px; font-weight: 700; }
    .result-text { white-space: pre-wrap; line-height: 1.8; }
    .score-pass { color: #03C75A; } .score-fail { color: #f87171; }
"""


def _chips(group: str, options: Sequence[str], multiple: bool = False) -> str:
    return "\n".join(
        f'<button type="button" class="chip{" active" if i == 0 else ""}" data-group="{group}" '
        f'data-multiple="{str(multiple).lower()}" data-value="{html.escape(o)}">{html.escape(o)}</button>'
        for i, o in enumerate(options)
    )


def _head(title: str) -> str:
    return f"""<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(title)}</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <link href="https://fonts.googleapis.com/css2?family=Noto+Sans+KR:wght@400;500;700;900&display=swap" rel="stylesheet">
  <style>{_BASE_STYLE}</style>
</head>"""


_MAIN_SCRIPT = """
const API_BASE = window.API_BASE || '';
const $ = (id) => document.getElementById(id);

document.querySelectorAll('.chip').forEach((chip) => {
  chip.addEventListener('click', () => {
    const group = chip.dataset.group;
    if (chip.dataset.multiple === 'true') {
      chip.classList.toggle('active');
      return;
    }
    document.querySelectorAll(`.chip[data-group="${group}"]`).forEach((c) => c.classList.remove('active'));
    chip.classList.add('active');
  });
});

function selected(group) {
  return Array.from(document.querySelectorAll(`.chip[data-group="${group}"].active`)).map((c) => c.dataset.value);
}

function fillList(containerId, items, label) {
  const container = $(containerId);
  container.replaceChildren();
  (items || []).forEach((text, i) => {
    const block = document.createElement('div');
    block.className = 'glass-card p-5 mb-4';
    const heading = document.createElement('h4');
    heading.className = 'text-sm text-gray-400 mb-2';
    heading.textContent = `${label} ${i + 1}`;
    const body = document.createElement('p');
    body.className = 'result-text';
    body.textContent = text;
    const copy = document.createElement('button');
    copy.className = 'text-xs text-emerald-400 mt-2';
    copy.textContent = '복사';
    copy.addEventListener('click', () => navigator.clipboard.writeText(text));
    block.append(heading, body, copy);
    container.appendChild(block);
  });
}

async function generateQnA() {
  const button = $('generateBtn');
  button.disabled = true;
  $('status').textContent = '검색 → 전략 수립 → 작성 → 자체 검수 중...';
  try {
    const res = await fetch(`${API_BASE}/generate_qna_full`, {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify({
        target: selected('target')[0] || '',
        insuranceType: selected('insurance')[0] || '',
        tone: selected('tone').join(', '),
        concern: $('concern').value.trim(),
        generateDesign: $('generateDesign').checked,
      }),
    });
    const data = await res.json();
    if (!res.ok) throw new Error(data.error || '생성 실패');

    $('resultSection').classList.remove('hidden');
    fillList('titles', data.titles, '제목');
    fillList('questions', data.questions, '질문');
    fillList('answers', data.answers, '답변');
    fillList('comments', data.comments, '댓글');
    $('keywords').textContent = (data.keywords || []).map((k) => `#${k}`).join(' ');
    $('customerInfo').textContent = data.customerInfo || '';
    const audit = data.audit || {};
    $('seoScore').textContent = `${data.seoScore ?? '-'}`;
    $('overallScore').textContent = `${audit.overallScore ?? '-'}`;
    $('overallScore').className = audit.passed ? 'score-pass' : 'score-fail';
    $('attempts').textContent = `${data.attempts || 1}회`;
    $('auditNotes').textContent = [...(audit.failReasons || []), ...(audit.suggestions || [])].join('\\n');
    const frame = $('designFrame');
    if (data.designHtml) {
      frame.srcdoc = data.designHtml;
      frame.classList.remove('hidden');
    } else {
      frame.classList.add('hidden');
    }
    $('status').textContent = '완료';
  } catch (err) {
    $('status').textContent = `오류: ${err.message}`;
  } finally {
    button.disabled = false;
  }
}

$('generateBtn').addEventListener('click', generateQnA);
"""


def render_main_page() -> str:
    return f"""<!DOCTYPE html>
<html lang="ko">
{_head(f"{APP_TITLE} | AI 기반 Q&A 자동화")}
<body>
  <main class="max-w-5xl mx-auto px-6 py-12">
    <h1 class="text-4xl font-black mb-2">{APP_TITLE}</h1>
    <p class="text-gray-400 mb-10">네이버 카페 Q&A 자동 생성 + 설계서 이미지</p>

    <section class="glass-card p-8 mb-10">
      <h2 class="font-bold mb-3">타겟 고객</h2>
      <div class="flex flex-wrap gap-2 mb-6">{_chips("target", TARGET_OPTIONS)}</div>
      <h2 class="font-bold mb-3">보험 종류</h2>
      <div class="flex flex-wrap gap-2 mb-6">{_chips("insurance", INSURANCE_OPTIONS)}</div>
      <h2 class="font-bold mb-3">문체 톤</h2>
      <div class="flex flex-wrap gap-2 mb-6">{_chips("tone", TONE_OPTIONS, multiple=True)}</div>
      <h2 class="font-bold mb-3">고객 고민 (비우면 자동 생성)</h2>
      <textarea id="concern" rows="3" class="input-premium w-full p-4 text-white mb-6"
        placeholder="예: 아이가 태어났는데 종신보험이 꼭 필요한지 모르겠어요"></textarea>
      <label class="flex items-center gap-2 mb-6 text-sm text-gray-300">
        <input type="checkbox" id="generateDesign"> 설계서(보장 내역 표)도 함께 생성
      </label>
      <button id="generateBtn" class="btn-primary w-full py-4 text-white">Q&A 생성하기</button>
      <p id="status" class="text-sm text-gray-400 mt-4"></p>
    </section>

    <section id="resultSection" class="hidden">
      <div class="glass-card p-6 mb-6 flex gap-10 text-sm">
        <div>SEO 점수 <b id="seoScore" class="text-2xl"></b></div>
        <div>종합 점수 <b id="overallScore" class="text-2xl"></b></div>
        <div>생성 횟수 <b id="attempts"></b></div>
        <div>질문자 <b id="customerInfo"></b></div>
      </div>
      <pre id="auditNotes" class="text-xs text-gray-400 mb-6 whitespace-pre-wrap"></pre>
      <h3 class="text-xl font-bold mb-3">제목</h3><div id="titles"></div>
      <h3 class="text-xl font-bold mb-3">질문</h3><div id="questions"></div>
      <h3 class="text-xl font-bold mb-3">전문가 답변</h3><div id="answers"></div>
      <h3 class="text-xl font-bold mb-3">댓글</h3><div id="comments"></div>
      <p id="keywords" class="text-emerald-400 my-6"></p>
      <iframe id="designFrame" class="hidden w-full bg-white rounded-2xl" style="height: 900px" sandbox="allow-scripts"></iframe>
    </section>
  </main>
  <script>{_MAIN_SCRIPT}</script>
</body>
</html>"""


_ADMIN_SCRIPT = """
const API_BASE = window.API_BASE || '';
const $ = (id) => document.getElementById(id);

async function loadHealth() {
  const res = await fetch(`${API_BASE}/health`);
  $('health').textContent = JSON.stringify(await res.json(), null, 2);
}

async function lookupKeywords() {
  const q = $('query').value.trim();
  if (!q) return;
  const res = await fetch(`${API_BASE}/naver_keywords?q=${encodeURIComponent(q)}`);
  const data = await res.json();
  $('keywordResult').textContent = (data.keywords || []).join(', ') || data.error || '결과 없음';
}

$('lookupBtn').addEventListener('click', lookupKeywords);
loadHealth();
"""


def render_admin_page(features: Sequence[str]) -> str:
    features_json = html.escape(json.dumps(list(features), ensure_ascii=False))
    return f"""<!DOCTYPE html>
<html lang="ko">
{_head(f"{APP_TITLE} | 관리자")}
<body>
  <main class="max-w-3xl mx-auto px-6 py-12" data-features="{features_json}">
    <h1 class="text-3xl font-black mb-8">관리자</h1>
    <section class="glass-card p-6 mb-6">
      <h2 class="font-bold mb-3">서비스 상태</h2>
      <pre id="health" class="text-xs text-gray-300"></pre>
    </section>
    <section class="glass-card p-6">
      <h2 class="font-bold mb-3">네이버 키워드 조회</h2>
      <div class="flex gap-2">
        <input id="query" class="input-premium flex-1 p-3 text-white" placeholder="예: 40대 종신보험">
        <button id="lookupBtn" class="btn-primary px-6 text-white">조회</button>
      </div>
      <p id="keywordResult" class="text-sm text-gray-300 mt-4"></p>
    </section>
  </main>
  <script>{_ADMIN_SCRIPT}</script>
</body>
</html>"""
