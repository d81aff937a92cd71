"""Ban status and ban statistics from the marketplace ban service.

Calls ``{BAN_CHECK_API}/check?username=`` and ``{BAN_CHECK_API}/stats`` with
a fixed timeout and normalises the loosely-typed payloads into
:class:`BanStatus` / :class:`BanStats`.  Missing fields take neutral
defaults.  Failures raise; the service layer degrades them.
"""

from __future__ import annotations

import httpx

from src.interfaces.ban_provider import IBanProvider
from src.models.tarkov import BanStats, BanStatus
from src.providers.tarkov.http_helpers import get_json_object

_DEFAULT_BASE_URL = "https://tarkovmarketplace.com/api"
_DEFAULT_TIMEOUT = 8.0


class BanCheckProvider(IBanProvider):
    """Adapter for the third-party ban lookup service.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    base_url:
        Service root; ``/check`` and ``/stats`` are appended.
    timeout:
        Per-request timeout in seconds.
    """

    _PROVIDER_NAME = "ban_check"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def get_provider_name(self) -> str:
        return self._PROVIDER_NAME

    async def check_ban(self, username: str) -> BanStatus:
        body = await get_json_object(
            self._http,
            f"{self._base_url}/check",
            params={"username": username},
            provider_name=self._PROVIDER_NAME,
            timeout=self._timeout,
        )
        return BanStatus(
            username=username,
            is_banned=body.get("banned") is True,
            ban_reason=body.get("reason") or None,
            ban_date=body.get("bannedAt") or None,
            ban_type=body.get("banType") or "unknown",
            source=body.get("source") or "unknown",
        )

    async def ban_stats(self) -> BanStats:
        body = await get_json_object(
            self._http,
            f"{self._base_url}/stats",
            provider_name=self._PROVIDER_NAME,
            timeout=self._timeout,
        )
        return BanStats(
            total_bans=body.get("totalBans") or 0,
            active_hwid_bans=body.get("activeHwidBans") or 0,
            active_account_bans=body.get("activeAccountBans") or 0,
            temporary_bans=body.get("temporaryBans") or 0,
            sources=body.get("sources") or [],
        )
