"""
API authentication for the check engine service.
Every /api route requires `Authorization: Bearer <BACKEND_API_KEY>`.
"""

import os

from dotenv import load_dotenv
from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

load_dotenv()

security = HTTPBearer(auto_error=False)

BACKEND_API_KEY = os.getenv("BACKEND_API_KEY")

if not BACKEND_API_KEY:
    print("[SECURITY] WARNING: BACKEND_API_KEY not set! Using the development key.", flush=True)
    BACKEND_API_KEY = "development-only-key-change-in-production"


def verify_api_key(credentials: HTTPAuthorizationCredentials = Security(security)) -> str:
    """
    Verify the API key from the Authorization header.

    Usage in routes:
        @app.post("/api/validate", dependencies=[Depends(verify_api_key)])
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Use 'Bearer <token>'",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication scheme. Use 'Bearer <token>'",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if credentials.credentials != BACKEND_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return credentials.credentials
