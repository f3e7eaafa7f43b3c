from pydantic import BaseModel


class TokenData(BaseModel):
    """Claims extracted from a validated access token."""

    login: str
    user_id: int
    jti: str
    token_type: str = "access"
