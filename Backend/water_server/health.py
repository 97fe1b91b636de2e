import datetime
import time

_STARTED = time.monotonic()


def health():
    return {
        "status": "healthy",
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _STARTED, 3),
    }
