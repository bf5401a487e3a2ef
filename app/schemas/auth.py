import re

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.config import settings


def code_pattern(length: int) -> re.Pattern[str]:
    return re.compile(rf"\d{{{length}}}", re.ASCII)


class SendCodeRequest(BaseModel):
    email: str | None = Field("", validate_default=True)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str:
        v = (v or "").strip().lower()
        if not v:
            raise ValueError("Missing email")
        return v


class VerifyCodeRequest(BaseModel):
    email: str | None = ""
    code: str | None = ""

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str:
        return (v or "").strip().lower()

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str | None) -> str:
        return (v or "").strip()

    @model_validator(mode="after")
    def check_code_format(self) -> "VerifyCodeRequest":
        if not self.email or not self.code:
            raise ValueError("Missing email or code")
        if not code_pattern(settings.code_length).fullmatch(self.code):
            raise ValueError("Invalid code format")
        return self


class OkResponse(BaseModel):
    ok: bool = True
