# security.py - rate limiting and response hardening

import os
from typing import Dict

from dotenv import load_dotenv
from slowapi import Limiter
from slowapi.util import get_remote_address

load_dotenv()

# ==============================================================================
# CONFIGURATION
# ==============================================================================

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT = os.getenv("RATE_LIMIT", "60/minute")

# ==============================================================================
# RATE LIMITING
# ==============================================================================

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

# ==============================================================================
# SECURITY HEADERS
# ==============================================================================

def get_security_headers() -> Dict[str, str]:
    """Headers added to every response. The API serves JSON only."""
    return {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none';",
        "Referrer-Policy": "no-referrer",
        "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
        "Cache-Control": "no-store",
    }

# ==============================================================================
# INITIALIZATION
# ==============================================================================

def init_security():
    print("[SECURITY] Security module initialized", flush=True)
    print(f"[SECURITY] Rate limiting: {'enabled (' + RATE_LIMIT + ')' if RATE_LIMIT_ENABLED else 'disabled'}", flush=True)

init_security()
