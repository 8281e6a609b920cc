from __future__ import annotations

import logging
from typing import Callable, Iterator, Mapping, Sequence

from .tree import join_path

log = logging.getLogger("langmap.resolver")

INDEX_PAGE = "start"


def crop_candidates(segments: Sequence[str]) -> Iterator[str]:
    """Yield the titles tried for ``segments``, most specific first."""
    if not segments:
        return
    yield join_path(segments)
    for length in range(len(segments), 0, -1):
        yield join_path([*segments[:length], INDEX_PAGE])


def resolve_pages(
    lang_paths: Mapping[str, Sequence[str]],
    defaults: Mapping[str, str],
    page_exists: Callable[[str], bool],
) -> dict[str, str]:
    """Pick the nearest existing page for every language.

    Falls back to the language's default page when no candidate built from
    ``lang_paths`` exists; languages with neither are left out.
    """
    resolved: dict[str, str] = {}
    langs = list(dict.fromkeys([*lang_paths, *defaults]))
    for lang in langs:
        for title in crop_candidates(lang_paths.get(lang, ())):
            if page_exists(title):
                resolved[lang] = title
                break
        else:
            if lang in defaults:
                resolved[lang] = defaults[lang]
            else:
                log.debug("no existing page for lang=%s", lang)
    return resolved
