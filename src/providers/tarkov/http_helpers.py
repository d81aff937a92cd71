"""Single-attempt JSON GET shared by the REST-style Tarkov providers."""

from __future__ import annotations

from typing import Any

import httpx

from src.utils.errors import UpstreamError


async def get_json_object(
    http_client: httpx.AsyncClient,
    url: str,
    *,
    provider_name: str,
    timeout: float,
    params: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """GET *url* once and return the decoded JSON object.

    Raises
    ------
    UpstreamError
        On timeout, transport error, non-2xx status, or a body that is not
        a JSON object.
    """
    try:
        response = await http_client.get(url, params=params, timeout=timeout)
    except httpx.TimeoutException as exc:
        raise UpstreamError("Request timed out", provider_name=provider_name) from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(f"Request failed: {exc}", provider_name=provider_name) from exc

    if response.status_code >= 400:
        raise UpstreamError(f"HTTP {response.status_code}", provider_name=provider_name)

    try:
        body = response.json()
    except ValueError as exc:
        raise UpstreamError("Malformed response", provider_name=provider_name) from exc

    if not isinstance(body, dict):
        raise UpstreamError("Malformed response", provider_name=provider_name)
    return body
