from datetime import datetime, timezone

from pydantic import BaseModel, EmailStr, Field, field_validator


class VerificationIssueIn(BaseModel):
    email: EmailStr = Field(..., description="Who the code is sent to", max_length=255)


class VerificationConfirmIn(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    code: str = Field(..., min_length=6, max_length=6, pattern=r"^\d{6}$")


class QrCodeUpdateIn(BaseModel):
    event_name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)
    expiration_date: datetime | None = Field(
        None, description="New expiration; naive values are read as UTC"
    )

    @field_validator("expiration_date")
    @classmethod
    def must_be_in_future(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        if value <= datetime.now(timezone.utc):
            raise ValueError("expiration_date must be in the future")
        return value


class UploadCreateIn(BaseModel):
    image_url: str = Field(..., description="Public URL of the stored file", max_length=2048)
