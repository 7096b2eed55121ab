"""
Container health check for the AgriFlow API.

Exits 0 when ``/health`` answers with ``status == "ok"``. A missing
comparison CSV is reported on stderr but does not fail the check, since the
API keeps serving fallback payloads without it.
"""

from __future__ import annotations

import json
import os
import sys
from urllib.error import URLError
from urllib.request import urlopen


def main() -> int:
    port = os.getenv("PORT", "8000")
    path = os.getenv("HEALTHCHECK_PATH", "/health")
    url = f"http://127.0.0.1:{port}{path}"

    try:
        with urlopen(url, timeout=2) as response:
            if not 200 <= response.status < 400:
                return 1
            body = json.loads(response.read().decode("utf-8") or "{}")
    except (URLError, TimeoutError, ValueError):
        return 1

    if body.get("status") != "ok":
        return 1
    if body.get("comparison_source_available") is False:
        print("warning: comparison data file is missing", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
