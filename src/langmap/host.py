from __future__ import annotations

from typing import Protocol


class WikiHost(Protocol):
    def page_exists(self, title: str) -> bool:
        ...

    def get_page_wikitext(self, title: str) -> tuple[str, int, str] | None:
        ...

    def url_for(self, title: str) -> str:
        ...

    def first_heading(self, title: str) -> str | None:
        ...
