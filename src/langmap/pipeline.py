from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import Config
from .domains import DomainTable
from .host import WikiHost
from .links import TranslationLink, build_translation_links
from .resolver import resolve_pages
from .tree import LanguageTree, match_path, split_page_id

log = logging.getLogger("langmap.pipeline")


@dataclass
class Outcome:
    lang: str
    translations: list[TranslationLink] = field(default_factory=list)
    redirect_url: str | None = None


def preprocess(
    page_id: str,
    current_lang: str,
    request_host: str,
    host: WikiHost,
    cfg: Config,
    tree: LanguageTree,
) -> Outcome:
    """Decide the language, redirect and translation links for one page view."""
    match = match_path(split_page_id(page_id), tree)
    lang = match.page_lang or current_lang

    lang_paths = {k: v for k, v in match.lang_paths.items() if k != lang}
    defaults = {k: v for k, v in match.defaults.items() if k != lang}

    domains = DomainTable(cfg.http_hosts_by_lang)
    if match.page_lang is None:
        log.debug("no language found for %s; keeping %s", page_id, current_lang)
    if not tree.is_empty():
        redirect_url = domains.redirect_for(
            lang, host.url_for(page_id), request_host, cfg.host_prefix
        )
        if redirect_url:
            return Outcome(lang=lang, redirect_url=redirect_url)

    pages = resolve_pages(lang_paths, defaults, host.page_exists)
    translations = build_translation_links(pages, lang, host, domains, cfg)
    return Outcome(lang=lang, translations=translations)
