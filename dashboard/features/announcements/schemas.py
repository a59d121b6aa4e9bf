"""
Pydantic schemas for announcements.
"""
import enum
from datetime import datetime, timezone

from pydantic import Field, field_validator

from dashboard.core.schemas import SheetModel


class AnnouncementType(str, enum.Enum):
    BASIC = "basic"
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    POLL = "poll"
    CONTEST = "contest"


class AnnouncementTab(str, enum.Enum):
    ALL = "all"
    DRAFTS = "drafts"
    SCHEDULED = "scheduled"
    POLLS = "polls"
    CONTESTS = "contests"


class Attachment(SheetModel):
    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=2000)
    type: str = Field(..., max_length=100)
    size: int | None = Field(None, ge=0)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AnnouncementBase(SheetModel):
    """Base announcement schema."""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    is_active: bool = True
    scheduled_for: datetime | None = None
    type: AnnouncementType = AnnouncementType.BASIC
    is_premium: bool = False
    attachments: list[Attachment] = Field(default_factory=list)

    @field_validator("scheduled_for")
    @classmethod
    def scheduled_for_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class AnnouncementCreate(AnnouncementBase):
    """Schema for creating a new announcement."""
    pass


class AnnouncementUpdate(SheetModel):
    """Schema for updating an announcement."""
    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    is_active: bool | None = None
    scheduled_for: datetime | None = None
    type: AnnouncementType | None = None
    is_premium: bool | None = None
    attachments: list[Attachment] | None = None

    @field_validator("scheduled_for")
    @classmethod
    def scheduled_for_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class AnnouncementResponse(AnnouncementBase):
    """Schema for announcement responses."""
    id: str
    created_at: str | None = None

    def normalized_type(self) -> AnnouncementType:
        """
        Type implied by the other fields: an inactive announcement is a draft,
        and a scheduled date turns anything but a poll or contest into a
        scheduled announcement.
        """
        if not self.is_active:
            return AnnouncementType.DRAFT
        if self.scheduled_for is not None and self.type not in (AnnouncementType.POLL, AnnouncementType.CONTEST):
            return AnnouncementType.SCHEDULED
        return self.type

    def in_tab(self, tab: AnnouncementTab, now: datetime) -> bool:
        if tab is AnnouncementTab.DRAFTS:
            return self.type is AnnouncementType.DRAFT or not self.is_active
        if tab is AnnouncementTab.SCHEDULED:
            return self.type is AnnouncementType.SCHEDULED or (
                self.scheduled_for is not None and self.scheduled_for > now
            )
        if tab is AnnouncementTab.POLLS:
            return self.type is AnnouncementType.POLL
        if tab is AnnouncementTab.CONTESTS:
            return self.type is AnnouncementType.CONTEST
        return True
