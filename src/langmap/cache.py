from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .host import WikiHost
from .tree import EMPTY_TREE, LanguageTree, parse_language_tree

log = logging.getLogger("langmap.cache")


def load_language_tree(host: WikiHost, title: str | None) -> LanguageTree:
    if not title:
        return EMPTY_TREE
    page = host.get_page_wikitext(title)
    if page is None:
        log.info("language data page %s is missing", title)
        return EMPTY_TREE
    text, _, _ = page
    return parse_language_tree(text)


@dataclass
class TreeCache:
    """Parsed language trees keyed by page title, reparsed on new revisions."""

    entries: dict[str, tuple[int, LanguageTree]] = field(default_factory=dict)

    def get(self, host: WikiHost, title: str | None) -> LanguageTree:
        if not title:
            return EMPTY_TREE
        page = host.get_page_wikitext(title)
        if page is None:
            self.entries.pop(title, None)
            log.info("language data page %s is missing", title)
            return EMPTY_TREE
        text, rev_id, _ = page
        cached = self.entries.get(title)
        if cached and cached[0] == rev_id:
            return cached[1]
        tree = parse_language_tree(text)
        self.entries[title] = (rev_id, tree)
        log.info("parsed language tree from %s (rev_id=%s)", title, rev_id)
        return tree
