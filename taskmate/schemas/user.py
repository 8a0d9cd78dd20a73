from typing import Optional

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Registration payload: an email plus any profile fields the client keeps."""

    # kept verbatim: the email is the identity key and compared case-sensitively
    email: str

    model_config = ConfigDict(extra="allow")

    @property
    def profile(self) -> dict:
        return dict(self.model_extra or {})


class SessionRequest(BaseModel):
    email: Optional[str] = None
