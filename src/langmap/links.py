from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .config import Config
from .domains import DomainTable
from .host import WikiHost
from .tree import PATH_SEPARATOR

log = logging.getLogger("langmap.links")


@dataclass(frozen=True)
class TranslationLink:
    code: str
    text: str
    url: str

    def as_menu_item(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "content": {"text": self.text, "url": self.url, "class": "", "more": ""},
        }


def format_label(fmt: str, name: str, heading: str, code: str) -> str:
    return fmt.format(name=name, heading=heading, code=code)


def build_translation_links(
    pages: Mapping[str, str],
    current_lang: str | None,
    host: WikiHost,
    domains: DomainTable,
    cfg: Config,
) -> list[TranslationLink]:
    names = cfg.language_names or {}
    links: list[TranslationLink] = []
    for lang, title in pages.items():
        if lang == current_lang:
            continue
        heading = host.first_heading(title) or title.replace(PATH_SEPARATOR, " ")
        url = host.url_for(title)
        domain = domains.domain_for(lang)
        if domain:
            url = f"{cfg.host_prefix}{domain}{url}"
        links.append(
            TranslationLink(
                code=lang,
                text=format_label(cfg.translation_format, names.get(lang, lang), heading, lang),
                url=url,
            )
        )
    log.debug("built %s translation links", len(links))
    return links
