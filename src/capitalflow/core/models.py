"""
Data models for the dashboard pipeline.
Pydantic models and typed structures; the only logic is serialization.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional


class MoverRecord(BaseModel):
    """One normalized row of the gainers or losers table.
    Price and change are pre-formatted strings with exactly 2 decimals.
    """
    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Ticker symbol, copied verbatim")
    price: str = Field(..., description="Last price, 2 decimals")
    change: str = Field(..., description="Percent change without the % sign, 2 decimals")


class MoversResult(BaseModel):
    """Gainers and losers in the order the provider returned them."""
    gainers: List[MoverRecord] = Field(default_factory=list)
    losers: List[MoverRecord] = Field(default_factory=list)


class BreadthCounts(BaseModel):
    advancing: int = Field(..., ge=0, description="Advancing issues")
    declining: int = Field(..., ge=0, description="Declining issues")
    unchanged: int = Field(..., ge=0, description="Unchanged issues")


class BreadthShares(BaseModel):
    """Integer percentages of each breadth bucket."""
    advancing: int
    declining: int
    unchanged: int


class ChartDataset(BaseModel):
    # field names follow Chart.js
    model_config = ConfigDict(populate_by_name=True)

    label: str
    data: List[float]
    background_color: str = Field("rgba(59, 130, 246, 0.2)", alias="backgroundColor")
    border_color: str = Field("#3b82f6", alias="borderColor")
    border_width: int = Field(2, alias="borderWidth")
    tension: float = 0.4
    fill: bool = True


class ChartData(BaseModel):
    labels: List[str]
    datasets: List[ChartDataset]


class NewsItem(BaseModel):
    title: str
    url: str = "#"


class BlogPost(BaseModel):
    title: str
    author: str
    url: str = "#"


# ---------------------------
# Decoded provider payloads
# ---------------------------
class MoversPayload(BaseModel):
    """Success body: both mover arrays present. Entries are still raw."""
    kind: Literal["movers"] = "movers"
    top_gainers: List[Any]
    top_losers: List[Any]


class RejectedPayload(BaseModel):
    """API-level error carried inside a 200 response."""
    kind: Literal["rejected"] = "rejected"
    field: str = Field(..., description="Body key that carried the error")
    message: str


class MalformedPayload(BaseModel):
    kind: Literal["malformed"] = "malformed"
    keys: List[str] = Field(default_factory=list, description="Top-level keys seen in the body")
    raw_type: Optional[str] = None

    @classmethod
    def from_body(cls, data: Any) -> "MalformedPayload":
        if isinstance(data, dict):
            return cls(keys=[str(k) for k in data.keys()], raw_type="dict")
        return cls(raw_type=type(data).__name__)


def breadth_to_dict(counts: BreadthCounts, shares: Optional[BreadthShares]) -> Dict[str, Any]:
    return {
        "counts": counts.model_dump(),
        "shares": shares.model_dump() if shares is not None else None,
    }
