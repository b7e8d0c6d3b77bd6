from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    user_type: Optional[str] = Field(default=None, alias="userType")

    @property
    def display_name(self) -> str:
        return self.name or self.email or self.user_id


class SessionState(BaseModel):
    is_authenticated: bool = False
    loading: bool = False
    user: Optional[SessionUser] = None

    @classmethod
    def pending(cls) -> "SessionState":
        return cls(loading=True)

    @classmethod
    def anonymous(cls) -> "SessionState":
        return cls()

    @classmethod
    def for_user(cls, user: SessionUser) -> "SessionState":
        return cls(is_authenticated=True, user=user)
