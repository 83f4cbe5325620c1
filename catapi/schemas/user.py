from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


class UserCreate(BaseModel):
    # passwords are kept verbatim, only names and emails are trimmed
    model_config = ConfigDict(extra="ignore")

    user_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("user_name", "email", mode="before")
    @classmethod
    def trim_text(cls, value: Any) -> Any:
        return _strip(value)


class UserModify(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)

    @field_validator("user_name", "email", mode="before")
    @classmethod
    def trim_text(cls, value: Any) -> Any:
        return _strip(value)


class Credentials(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def trim_email(cls, value: Any) -> Any:
        return _strip(value)
