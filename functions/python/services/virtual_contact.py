"""Q&A 질문자용 가상 연락처 생성."""

from __future__ import annotations

import random
from typing import Dict, Optional

SURNAMES = ["김", "이", "박", "최", "정", "강", "조", "윤", "장", "임"]
GIVEN_NAMES = [
    "민준", "서연", "예준", "서윤", "도윤", "지우", "시우", "하은",
    "주원", "하윤", "지호", "수아", "준서", "지아", "현우", "소율",
]


def generate_virtual_contact(rng: Optional[random.Random] = None) -> Dict[str, str]:
    rng = rng or random.Random()

    surname = rng.choice(SURNAMES)
    name = surname + rng.choice(GIVEN_NAMES)
    phone = f"010-{rng.randint(1000, 9999)}-{rng.randint(1000, 9999)}"
    kakao_id = f"ins_{ord(surname) % 100}_{rng.randint(0, 9998):04d}"

    return {"name": name, "phone": phone, "kakao": f"카카오톡: {kakao_id}"}
