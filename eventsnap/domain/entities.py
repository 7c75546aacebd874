from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class VerificationPurpose(str, Enum):
    SIGNUP = "signup"
    RESET = "reset"
    UPDATE = "update"


@dataclass
class QrCode:
    id: str
    token: str
    user_id: str | None = None
    event_name: str | None = None
    description: str | None = None
    expiration_date: datetime | None = None
    active: bool = True


@dataclass
class Upload:
    id: str
    qrcode_id: str
    image_url: str
    created_at: datetime | None = None


@dataclass
class UploadPage:
    items: list[Upload] = field(default_factory=list)
    total: int = 0
    next_skip: int | None = None

    @classmethod
    def build(cls, items: list[Upload], total: int, take: int, skip: int) -> "UploadPage":
        """next_skip is None on an empty or final page, else skip + take."""
        if not items:
            return cls(items=[], total=0, next_skip=None)
        over = total - take - skip
        return cls(items=items, total=total, next_skip=None if over <= 0 else skip + take)


@dataclass
class QrStatusCounts:
    active: int = 0
    expired: int = 0
    none: int = 0
