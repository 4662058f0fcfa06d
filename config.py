from __future__ import annotations

import os

# wall-clock seconds per game time unit (countdown tick, dwell)
TIME_UNIT_SECONDS = float(os.getenv("MATHHILL_TIME_UNIT_SECONDS", "1.0"))

# a browsing session idle for longer than this is ended and its levels dropped
SESSION_TTL_SECONDS = float(os.getenv("MATHHILL_SESSION_TTL_SECONDS", "1800"))

LOG_LEVEL = os.getenv("MATHHILL_LOG_LEVEL", "INFO").upper()

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [
    o.strip() for o in os.getenv("MATHHILL_CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
]

SESSION_COOKIE = "mathhill_session"

# `python main.py` serving address
HOST = os.getenv("MATHHILL_HOST", "127.0.0.1")
PORT = int(os.getenv("MATHHILL_PORT", "8000"))
