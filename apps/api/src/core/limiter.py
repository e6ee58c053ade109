from jose import JWTError, jwt
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.core.config import get_settings


def bearer_user_id(request: Request) -> str | None:
    """Subject of a valid `Authorization: Bearer` JWT, else None. Tokens are issued elsewhere in the marketplace."""
    auth = request.headers.get("Authorization") or ""
    if not auth.startswith("Bearer "):
        return None
    token = auth[7:].strip()
    if not token:
        return None
    s = get_settings()
    try:
        payload = jwt.decode(token, s.jwt_secret, algorithms=[s.jwt_algorithm])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub is not None else None


def get_rate_limit_key(request: Request) -> str:
    """Signed-in members get their own bucket; anonymous visitors share one per IP."""
    uid = bearer_user_id(request)
    if uid:
        return f"user:{uid}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=get_rate_limit_key)
