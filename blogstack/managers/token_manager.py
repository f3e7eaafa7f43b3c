"""Token manager for issuing and validating JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt

from blogstack.configs import settings
from blogstack.schemas.auth import TokenData

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    user_id: int,
    login: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a new access token.

    Tokens are normally issued by the identity provider in front of this
    service; this is used by local tooling and the test suite.

    Args:
        user_id: User's ID
        login: User's login
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": login,
        "user_id": str(user_id),
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": ACCESS_TOKEN_TYPE,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> TokenData | None:
    """
    Decode and validate an access token.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded token data or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    login: str | None = payload.get("sub")
    user_id: str | None = payload.get("user_id")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")

    if not login or not user_id or not jti or token_type != ACCESS_TOKEN_TYPE:
        return None

    try:
        return TokenData(login=login, user_id=int(user_id), jti=jti, token_type=token_type)
    except ValueError:
        return None
