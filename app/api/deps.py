# app/api/deps.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import UnauthenticatedError
from app.crud import crud_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.token import TokenPayload

# The `tokenUrl` doesn't have to be a real endpoint in this service,
# it's just for the OpenAPI documentation. Tokens may also arrive in the
# auth cookie set by the web frontend, so a missing header is not an error here.
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def _decode_token(token: str) -> Optional[TokenPayload]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return TokenPayload(**payload)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        return None


def get_current_user_optional(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the calling user, or None when there is no valid identity."""
    token = token or request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        return None

    token_data = _decode_token(token)
    if token_data is None:
        return None

    # Banned users keep valid tokens but lose access
    return crud_user.user.get_active(db, user_id=token_data.sub)


def get_current_user(
    current_user: Optional[User] = Depends(get_current_user_optional),
) -> User:
    if current_user is None:
        raise UnauthenticatedError("Could not validate credentials")
    return current_user
