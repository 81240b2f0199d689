import asyncio
import json
from typing import Any, Optional, Union

import aiohttp
import requests

from capitalflow.core.config import ALPHAVANTAGE_QUERY_URL
from capitalflow.core.errors import NetworkFailure, ParseFailure, UnexpectedShape, UpstreamRejected
from capitalflow.core.logger import get_logger
from capitalflow.core.models import MalformedPayload, MoversPayload, MoversResult, RejectedPayload
from capitalflow.core.normalize import normalize_movers

logger = get_logger(__name__)

TOP_MOVERS_FUNCTION = "TOP_GAINERS_LOSERS"
# checked in this order; "Information" is the provider's newer rate-limit notice
REJECTION_FIELDS = ("Error Message", "Note", "Information")

DecodedPayload = Union[MoversPayload, RejectedPayload, MalformedPayload]


def decode_movers_payload(data: Any) -> DecodedPayload:
    """
    Classify a decoded JSON body as movers, rejection or malformed.
    """
    if not isinstance(data, dict):
        return MalformedPayload.from_body(data)

    for field in REJECTION_FIELDS:
        if data.get(field):
            return RejectedPayload(field=field, message=str(data[field]))

    gainers = data.get("top_gainers")
    losers = data.get("top_losers")
    if isinstance(gainers, list) and isinstance(losers, list):
        return MoversPayload(top_gainers=gainers, top_losers=losers)

    return MalformedPayload.from_body(data)


def movers_from_payload(decoded: DecodedPayload) -> MoversResult:
    """Turn a decoded payload into a result, raising on rejection."""
    if isinstance(decoded, RejectedPayload):
        logger.error(f"Alpha Vantage API Error ({decoded.field}): {decoded.message}")
        raise UpstreamRejected(decoded.message, field=decoded.field)

    if isinstance(decoded, MalformedPayload):
        err = UnexpectedShape(keys=decoded.keys, raw_type=decoded.raw_type)
        logger.error(f"API response for top movers was invalid: {err}")
        return MoversResult()

    return normalize_movers(decoded)


def _query_params(api_key: str) -> dict:
    if not api_key:
        raise ValueError("Alpha Vantage API key required")
    return {"function": TOP_MOVERS_FUNCTION, "apikey": api_key}


async def fetch_top_movers(
    api_key: str,
    base_url: str = ALPHAVANTAGE_QUERY_URL,
    timeout: Optional[float] = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> MoversResult:
    """
    Call the TOP_GAINERS_LOSERS endpoint and return normalized movers.

    An injected session is used as-is and left open; otherwise a session is
    opened for this one call. timeout=None waits indefinitely.
    """
    params = _query_params(api_key)

    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await fetch_top_movers(api_key, base_url, timeout, own_session)

    try:
        response = await session.get(
            base_url, params=params, timeout=aiohttp.ClientTimeout(total=timeout)
        )
        response.raise_for_status()
        data = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise NetworkFailure(f"Alpha Vantage request failed: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseFailure("body", e.doc[:80], "invalid JSON") from e
    except UnicodeDecodeError as e:
        raise ParseFailure("body", e.object[:80], f"undecodable bytes ({e.encoding})") from e

    return movers_from_payload(decode_movers_payload(data))


def fetch_top_movers_sync(
    api_key: str,
    base_url: str = ALPHAVANTAGE_QUERY_URL,
    timeout: Optional[float] = None,
) -> MoversResult:
    """Blocking variant of fetch_top_movers, for scripts."""
    params = _query_params(api_key)
    try:
        r = requests.get(base_url, params=params, timeout=timeout)
        r.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise NetworkFailure(f"Alpha Vantage request failed: {e}") from e
    try:
        data = r.json()
    except ValueError as e:
        raise ParseFailure("body", r.text[:80], "invalid JSON") from e

    return movers_from_payload(decode_movers_payload(data))
