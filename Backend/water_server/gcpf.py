import functions_framework
import json

from water_server import config
from water_server.dispatcher import handle

config.configure_logging()


@functions_framework.http
def http_entrypoint(request):
    headers = {k.lower(): v for k, v in request.headers.items()}
    ck = {k: v for k, v in request.cookies.items()}
    body = request.get_data(as_text=True) or "{}"
    result = handle(body, headers=headers, cookies=ck)
    # Only error dicts carry an HTTP status
    status = result.pop("status", 200) if isinstance(result, dict) and "error" in result else 200
    return (json.dumps(result), status, {"content-type": "application/json"})
