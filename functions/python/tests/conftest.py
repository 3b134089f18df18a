import random

import flask
import pytest
from werkzeug.test import EnvironBuilder

from agents.common.qna_types import GeneratedContent
from samples import CONCERN, PASSING_ANSWERS, PASSING_COMMENTS


@pytest.fixture
def passing_content():
    return GeneratedContent(
        titles=["40대 가장 종신보험 고민", "아이 태어나고 종신보험 필요할까요?"],
        questions=[f"{CONCERN}? 40대 가장입니다."],
        answers=list(PASSING_ANSWERS),
        comments=list(PASSING_COMMENTS),
    )


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def make_request():
    def _make(method="POST", json=None, **kwargs):
        return flask.Request(EnvironBuilder(method=method, json=json, **kwargs).get_environ())
    return _make
