"""Pydantic v2 models for the auxiliary Tarkov data served by the API.

Player and item payloads are passed through from the GraphQL service as
plain dicts.  The models here cover the data this service normalises itself
(ban status, ban statistics, price history) and therefore also has to
substitute when the provider is unreachable.

All models are frozen and serialise with camelCase aliases, which is the
shape clients already consume.  ``note`` is only present on degraded
results; :meth:`TarkovPayload.to_payload` drops it otherwise.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

OFFLINE_SOURCE = "offline"
BAN_CHECK_UNAVAILABLE_NOTE = "Ban check service unavailable, player status unknown"
BAN_STATS_UNAVAILABLE_NOTE = "Ban statistics unavailable"
PRICE_HISTORY_UNAVAILABLE_NOTE = "Price history unavailable"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TarkovPayload(BaseModel):
    """Base for response payloads with camelCase serialisation."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    note: str | None = Field(
        default=None,
        description="Explains degraded provenance; absent on authoritative results.",
    )

    @property
    def is_degraded(self) -> bool:
        return self.note is not None

    def to_payload(self) -> dict[str, Any]:
        """Serialise for the response envelope, omitting ``note`` when unset."""
        data = self.model_dump(by_alias=True)
        if self.note is None:
            data.pop("note", None)
        return data


class BanStatus(TarkovPayload):
    """Ban status of a single player."""

    username: str
    is_banned: bool = False
    ban_reason: str | None = None
    ban_date: str | None = None
    ban_type: str = Field(default="unknown", description="hwid, account, temporary, ...")
    source: str = "unknown"

    @classmethod
    def offline(cls, username: str) -> BanStatus:
        """Fallback used when the ban service cannot be reached.

        ``is_banned`` is ``False`` but ``source`` and ``note`` mark the
        answer as unknown rather than a confirmed clean record.
        """
        return cls(
            username=username,
            source=OFFLINE_SOURCE,
            note=BAN_CHECK_UNAVAILABLE_NOTE,
        )


class BanStats(TarkovPayload):
    """Global ban statistics aggregated by the ban service."""

    total_bans: int = 0
    active_hwid_bans: int = 0
    active_account_bans: int = 0
    temporary_bans: int = 0
    last_update: str = Field(default_factory=_utc_now_iso)
    sources: list[Any] = Field(default_factory=list)

    @classmethod
    def unavailable(cls) -> BanStats:
        return cls(note=BAN_STATS_UNAVAILABLE_NOTE)


class PriceHistory(TarkovPayload):
    """Flea-market price history for one item."""

    item_id: str
    data: list[Any] = Field(default_factory=list)
    min: int | float = 0
    max: int | float = 0
    average: int | float = 0

    @classmethod
    def unavailable(cls, item_id: str) -> PriceHistory:
        return cls(item_id=item_id, note=PRICE_HISTORY_UNAVAILABLE_NOTE)
