# functions/python/agents/common/insurance_knowledge.py
"""
보험 종류별 도메인 지식 블록.
보험 종류 라벨에 키가 부분 문자열로 포함되면 해당 블록을 사용한다.
"""

from typing import List, Tuple

# 순서가 우선순위 (더 구체적인 키가 앞)
INSURANCE_KNOWLEDGE: List[Tuple[str, str]] = [
    ("종신", """<domain type="종신보험">
  - 사망보험금이 평생 보장되며, 납입기간(10/20년납)에 따라 보험료 차이가 크다.
  - 저해지/무해지 환급형은 보험료가 저렴하지만 납입 중 해지 시 환급금이 거의 없다.
  - 상속세 재원 마련, 유족 생활비 목적이 주요 가입 동기다.
</domain>"""),
    ("암", """<domain type="암보험">
  - 일반암/유사암(갑상선·제자리암 등) 진단비 구분, 유사암은 보통 일반암의 10~20%.
  - 가입 후 90일 면책, 1~2년 내 진단 시 50% 감액 조건이 흔하다.
  - 비갱신형은 초기 보험료가 높지만 만기까지 보험료가 오르지 않는다.
</domain>"""),
    ("실손", """<domain type="실손보험">
  - 4세대 실손은 비급여 이용량에 따라 보험료가 할증/할인된다.
  - 자기부담금(급여 20%, 비급여 30%)과 통원 공제금액을 함께 설명한다.
  - 중복 가입 시 비례 보상되므로 추가 가입 실익이 없다.
</domain>"""),
    ("운전자", """<domain type="운전자보험">
  - 교통사고처리지원금, 변호사선임비용, 벌금 3대 담보가 핵심이다.
  - 자동차보험과 달리 형사적·행정적 책임을 보장한다.
  - 2020년 민식이법 이후 스쿨존 사고 보장 한도 확인이 중요하다.
</domain>"""),
    ("어린이", """<domain type="어린이보험">
  - 30세 만기 vs 100세 만기 구조와 전환 가능 여부를 비교한다.
  - 태아 가입 시 선천이상, 저체중아 특약을 챙긴다.
  - 성장기 골절·입원 담보와 성인 질환 담보의 비중을 조절한다.
</domain>"""),
    ("치아", """<domain type="치아보험">
  - 보존치료/보철치료 구분, 임플란트·브릿지 개수 한도를 확인한다.
  - 가입 후 면책기간(보통 90일~1년)과 감액기간이 있다.
</domain>"""),
    ("연금", """<domain type="연금보험">
  - 세제적격(연금저축)과 세제비적격(10년 유지 시 비과세)을 구분한다.
  - 공시이율/최저보증이율, 사업비 구조를 함께 설명한다.
</domain>"""),
    ("간병", """<domain type="간병보험">
  - 장기요양등급(1~5등급) 판정 기준과 간병인 사용일당 구조를 설명한다.
  - 치매 단계(CDR 척도)별 진단비 지급 조건을 확인한다.
</domain>"""),
]

GENERAL_KNOWLEDGE = """<domain type="일반">
  - 갱신형/비갱신형, 납입면제 조건, 면책·감액 기간을 반드시 짚는다.
  - 보험료는 나이·성별·직업급수에 따라 달라진다는 점을 명시한다.
</domain>"""


def get_domain_knowledge(insurance_type: str) -> str:
    label = insurance_type or ""
    for key, block in INSURANCE_KNOWLEDGE:
        if key in label:
            return block
    return GENERAL_KNOWLEDGE
