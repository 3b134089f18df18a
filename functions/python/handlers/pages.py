# handlers/pages.py
from firebase_functions import https_fn

from services.page_templates import render_admin_page, render_main_page

from .health import FEATURES
from .http_utils import html_response


def handle_index(req: https_fn.Request) -> https_fn.Response:
    return html_response(render_main_page())


def handle_admin(req: https_fn.Request) -> https_fn.Response:
    return html_response(render_admin_page(FEATURES))
