from fastapi.security.utils import get_authorization_scheme_param
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from config.settings import Settings

FALLBACK_USERNAME_CLAIMS = ("username", "sub")

def create_access_token(
    username: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a token shaped like the ones the identity provider issues.
    Used for local runs and tests; production tokens come from outside.
    """
    now = datetime.now(timezone.utc)
    to_encode = {
        settings.username_claim: username,
        "sub": username,
        "iat": now,
        "exp": now + (expires_delta or timedelta(hours=1)),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)

def verify_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """
    Return the token claims, or None if the token is unusable.
    With signature checks off, claims are trusted as handed over by the gateway.
    """
    try:
        if not settings.verify_token_signature:
            return jwt.get_unverified_claims(token)
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

def get_username_from_claims(claims: Dict[str, Any], settings: Settings) -> Optional[str]:
    for claim in (settings.username_claim,) + FALLBACK_USERNAME_CLAIMS:
        value = claims.get(claim)
        if isinstance(value, str) and value:
            return value
    return None

def get_identity(authorization: Optional[str], settings: Settings) -> Optional[str]:
    """Username from an `Authorization: Bearer <token>` header value, or None."""
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token:
        return None
    claims = verify_token(token, settings)
    if not claims:
        return None
    return get_username_from_claims(claims, settings)
