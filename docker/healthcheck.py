"""Container healthcheck script: exit 0 if the API answers its cache health probe."""

from __future__ import annotations

import json
import os
import sys
import urllib.request

port = os.environ.get("ETSYBOOST_API_PORT", "8080")
path = os.environ.get("ETSYBOOST_HEALTHCHECK_PATH", "/api/health")

try:
    with urllib.request.urlopen(f"http://localhost:{port}{path}", timeout=5) as resp:
        body = json.loads(resp.read() or b"{}")
        if resp.status == 200 and body.get("status") in ("ok", "ready", "healthy"):
            sys.exit(0)
except (OSError, ValueError) as exc:
    print(f"healthcheck failed: {exc}", file=sys.stderr)

sys.exit(1)
