# aws_handler.py
from http import cookies as http_cookies
import json

from water_server import config
from water_server.dispatcher import handle

config.configure_logging()


def lambda_handler(event, context):
    headers = {k.lower(): v for k, v in (event.get("headers") or {}).items()}
    # Parse cookies
    raw_cookie = headers.get("cookie", "")
    jar = http_cookies.SimpleCookie()
    if raw_cookie:
        jar.load(raw_cookie)
    ck = {k: morsel.value for k, morsel in jar.items()}

    body = event.get("body") or "{}"
    if event.get("isBase64Encoded"):
        import base64
        body = base64.b64decode(body).decode("utf-8")
    result = handle(body, headers=headers, cookies=ck)

    # Only error dicts carry an HTTP status
    status = result.pop("status", 200) if isinstance(result, dict) and "error" in result else 200
    return {
        "statusCode": status,
        "headers": {"content-type": "application/json"},
        "body": json.dumps(result),
    }
