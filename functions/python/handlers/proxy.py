# handlers/proxy.py
"""네이버 프록시 확장 프로그램 백엔드."""

from firebase_functions import https_fn

from services.proxy_pac import build_pac_script, get_controller

from .http_utils import extract_payload, json_response

PAC_MIMETYPE = "application/x-ns-proxy-autoconfig"


def handle_proxy_pac(req: https_fn.Request) -> https_fn.Response:
    return https_fn.Response(build_pac_script(get_controller().settings), status=200, mimetype=PAC_MIMETYPE)


def handle_proxy_message(req: https_fn.Request) -> https_fn.Response:
    message = extract_payload(req)
    if message is None:
        return json_response({"success": False, "error": "Invalid JSON"}, 400)

    controller = get_controller()
    origin = req.headers.get("Origin")
    if not controller.is_origin_allowed(origin):
        return json_response({"success": False, "error": "Unauthorized origin"}, 403)

    result = controller.dispatch_message(message, origin)
    status = 400 if result.get("success") is False else 200
    return json_response(result, status)
