from pydantic import BaseModel, ConfigDict


class UserSummary(BaseModel):
    """Owner information embedded in blog responses (no sensitive data)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    login: str
