from __future__ import annotations

import os
import json
from dataclasses import dataclass


@dataclass(frozen=True)
class Config:
    mw_api_url: str
    mw_user_agent: str = "LangmapBot/0.1"
    mw_username: str | None = None
    mw_password: str | None = None
    article_path: str = "/wiki/$1"

    language_data_page: str | None = "system:languages"
    http_hosts_by_lang: tuple[tuple[str, str], ...] = ()
    host_prefix: str = "https://"
    translation_format: str = "{name}: {heading}"
    language_names: dict[str, str] | None = None
    default_lang: str = "en"


def parse_lang_pairs(raw: str, name: str = "value") -> tuple[tuple[str, str], ...]:
    """Parse ``"cs:fykos.cz,en:fykos.org"`` into ordered ``(lang, value)`` pairs."""
    pairs: list[tuple[str, str]] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        lang, sep, value = part.partition(":")
        lang = lang.strip()
        value = value.strip()
        if not sep or not lang or not value:
            raise RuntimeError(f"{name} entries must look like lang:value, got {part!r}")
        pairs.append((lang, value))
    return tuple(pairs)


def load_config() -> Config:
    def _load_language_names() -> dict[str, str] | None:
        raw = os.getenv("LANGMAP_LANGUAGE_NAMES")
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise RuntimeError("LANGMAP_LANGUAGE_NAMES must be valid JSON") from exc
        if not isinstance(data, dict):
            raise RuntimeError("LANGMAP_LANGUAGE_NAMES must be a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def _load_translation_format() -> str:
        value = os.getenv("LANGMAP_TRANSLATION_FORMAT", "{name}: {heading}")
        try:
            value.format(name="", heading="", code="")
        except (AttributeError, KeyError, IndexError, ValueError) as exc:
            raise RuntimeError(
                "LANGMAP_TRANSLATION_FORMAT may only use {name}, {heading} and {code}"
            ) from exc
        return value

    def req(name: str) -> str:
        value = os.getenv(name)
        if not value:
            raise RuntimeError(f"Missing required env var: {name}")
        return value

    data_page = os.getenv("LANGMAP_LANGUAGE_DATA_PAGE", "system:languages").strip()

    cfg = Config(
        mw_api_url=req("MW_API_URL"),
        mw_user_agent=os.getenv("MW_USER_AGENT", "LangmapBot/0.1"),
        mw_username=os.getenv("MW_USERNAME") or None,
        mw_password=os.getenv("MW_PASSWORD") or None,
        article_path=os.getenv("MW_ARTICLE_PATH", "/wiki/$1"),
        language_data_page=data_page or None,
        http_hosts_by_lang=parse_lang_pairs(
            os.getenv("LANGMAP_HTTP_HOSTS_BY_LANG", ""), "LANGMAP_HTTP_HOSTS_BY_LANG"
        ),
        host_prefix=os.getenv("LANGMAP_HOST_PREFIX", "https://"),
        translation_format=_load_translation_format(),
        language_names=_load_language_names(),
        default_lang=os.getenv("LANGMAP_DEFAULT_LANG", "en"),
    )
    return cfg
