"""Per-day host overrides for a listing's calendar."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict

from .enums import DaySignal


def day_meta_id(listing_id: str, day_key: str) -> str:
    """Composite identity of a listing's day record."""
    return f"{listing_id}__{day_key}"


class DayMeta(BaseModel):
    """Host-authored block flag, demand signal and note for one day.

    A day without a stored record reads as the empty default: not blocked,
    no signal, no note.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    listing_id: str
    date: dt.date
    blocked: bool = False
    block_reason: str = ""
    signal: DaySignal = DaySignal.NONE
    note: str = ""
    updated_at: dt.datetime | None = None

    @property
    def meta_id(self) -> str:
        return day_meta_id(self.listing_id, self.date.isoformat())

    @property
    def is_empty(self) -> bool:
        return not self.blocked and self.signal is DaySignal.NONE and not self.note

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "DayMeta":
        """Convert a DynamoDB item to DayMeta."""
        try:
            signal = DaySignal(str(item.get("signal") or "none"))
        except ValueError:
            signal = DaySignal.NONE
        blocked = bool(item.get("blocked", False))
        updated_at = item.get("updated_at")
        return cls(
            listing_id=item["listing_id"],
            date=dt.date.fromisoformat(item["date"]),
            blocked=blocked,
            block_reason=str(item.get("block_reason") or "") if blocked else "",
            signal=signal,
            note=str(item.get("note") or ""),
            updated_at=dt.datetime.fromisoformat(updated_at) if updated_at else None,
        )

    def to_item(self) -> dict[str, Any]:
        item: dict[str, Any] = {
            "meta_id": self.meta_id,
            "listing_id": self.listing_id,
            "date": self.date.isoformat(),
            "blocked": self.blocked,
            "block_reason": self.block_reason,
            "signal": self.signal.value,
            "note": self.note,
        }
        if self.updated_at:
            item["updated_at"] = self.updated_at.isoformat()
        return item


class DayMetaUpdate(BaseModel):
    """Host edits from the day inspector."""

    model_config = ConfigDict(strict=False)

    blocked: bool = False
    block_reason: str = ""
    signal: DaySignal = DaySignal.NONE
    note: str = ""
