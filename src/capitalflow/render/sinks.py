"""
Presentation sinks.

Each sink stands in for one element of the dashboard page and holds the HTML
fragments written into it. Renderers only ever clear a sink and append to it,
so rendering the same input twice leaves the same contents.
"""

from dataclasses import dataclass, field
from typing import List


class HtmlSink:
    def __init__(self, element_id: str):
        self.element_id = element_id
        self._fragments: List[str] = []

    def clear(self) -> None:
        self._fragments = []

    def append(self, fragment: str) -> None:
        self._fragments.append(fragment)

    def replace(self, fragment: str) -> None:
        self._fragments = [fragment]

    @property
    def fragments(self) -> List[str]:
        return list(self._fragments)

    @property
    def html(self) -> str:
        return "".join(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        return f"HtmlSink({self.element_id!r}, fragments={len(self._fragments)})"


@dataclass
class PageSinks:
    """All sinks of one dashboard page, keyed by the page's element ids."""
    gainers: HtmlSink = field(default_factory=lambda: HtmlSink("gainersTable"))
    losers: HtmlSink = field(default_factory=lambda: HtmlSink("losersTable"))
    breadth: HtmlSink = field(default_factory=lambda: HtmlSink("breadthWidget"))
    chart: HtmlSink = field(default_factory=lambda: HtmlSink("marketChart"))
    news: HtmlSink = field(default_factory=lambda: HtmlSink("newsFeedList"))
    blogs: HtmlSink = field(default_factory=lambda: HtmlSink("blogsContainer"))
