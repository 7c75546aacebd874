from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"


class VerificationIssuedOut(AcceptedOut):
    debug_code: str | None = Field(
        None, description="Only filled outside production, email delivery stand-in"
    )


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"


class HealthOut(BaseModel):
    status: Literal["ok"] = "ok"
    redis: Literal["ok", "unavailable"]


class QrCodeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    token: str
    user_id: str | None = None
    event_name: str | None = None
    description: str | None = None
    expiration_date: datetime | None = None
    active: bool = True


class QrStatusCountsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    active: int
    expired: int
    none: int


class UploadOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    qrcode_id: str
    image_url: str
    created_at: datetime | None = None


class UploadPageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    items: list[UploadOut]
    total: int
    skip: int | None = Field(None, description="Offset of the next page, null on the last one")
