# normalize.py
# Turn raw TOP_GAINERS_LOSERS entries into MoverRecord rows.
# Unlike a best-effort scraper, every bad numeric field raises ParseFailure.

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Iterable, List, Mapping

from capitalflow.core.errors import ParseFailure
from capitalflow.core.models import MoverRecord, MoversPayload, MoversResult


# ---------------------------
# Parsing helpers
# ---------------------------
def _to_float(field: str, val: Any) -> float:
    if val is None or isinstance(val, bool):
        raise ParseFailure(field, val)
    if isinstance(val, (int, float)):
        num = float(val)
    else:
        s = str(val).strip()
        try:
            num = float(s)
        except ValueError:
            raise ParseFailure(field, val) from None
    if not math.isfinite(num):
        raise ParseFailure(field, val, "not finite")
    return num


def parse_price(val: Any) -> float:
    """
    Parse price like '10', '10.5', 10.5 -> float. Raises ParseFailure otherwise.
    """
    return _to_float("price", val)


def parse_change_percentage(val: Any) -> float:
    """
    Parse '5.5%', '-12.3401%', 5.5 -> float, dropping one trailing '%'.
    """
    if isinstance(val, str):
        s = val.strip()
        if s.endswith("%"):
            s = s[:-1]
        return _to_float("change_percentage", s if s else val)
    return _to_float("change_percentage", val)


CENT = Decimal("0.01")
# wide enough for any finite float
_WIDE = Context(prec=400)


def format_2dp(num: float) -> str:
    # exact binary value, ties away from zero: 1.125 -> "1.13", 1.005 -> "1.00"
    return str(Decimal(num).quantize(CENT, rounding=ROUND_HALF_UP, context=_WIDE))


# ---------------------------
# Entry -> record
# ---------------------------
def normalize_mover(entry: Mapping[str, Any]) -> MoverRecord:
    if not isinstance(entry, Mapping):
        raise ParseFailure("entry", entry, "not an object")
    ticker = entry.get("ticker")
    if not isinstance(ticker, str) or not ticker:
        raise ParseFailure("ticker", ticker, "missing symbol")
    return MoverRecord(
        symbol=ticker,
        price=format_2dp(parse_price(entry.get("price"))),
        change=format_2dp(parse_change_percentage(entry.get("change_percentage"))),
    )


def normalize_entries(entries: Iterable[Any]) -> List[MoverRecord]:
    return [normalize_mover(e) for e in entries]


def normalize_movers(payload: MoversPayload) -> MoversResult:
    """Map both arrays, keeping provider order."""
    return MoversResult(
        gainers=normalize_entries(payload.top_gainers),
        losers=normalize_entries(payload.top_losers),
    )
