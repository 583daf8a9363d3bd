import jwt
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from .config import settings
from .errors import Unauthenticated

# Token yoksa 403 yerine None; kimlik kontrolü ödül motorunda yapılır
security = HTTPBearer(auto_error=False)


def parse_token(token: str) -> str:
    """Kimlik servisinin verdiği HS256 token'ı doğrular, kullanıcı kimliğini (sub) döner."""
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=["HS256"],
            audience=settings.JWT_AUD,
            issuer=settings.JWT_ISS,
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError:
        raise Unauthenticated("Invalid or expired token")
    return payload["sub"]


def get_caller_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    if creds is None:
        return None
    return parse_token(creds.credentials)
