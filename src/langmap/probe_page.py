from __future__ import annotations

import argparse
import json
import logging

import requests

from .cache import load_language_tree
from .config import load_config
from .logging import configure_logging
from .mediawiki import MediaWikiClient
from .pipeline import preprocess


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Show the language, redirect and translation links computed for a page."
    )
    parser.add_argument("--page", required=True, help="Page id, e.g. hry:sachy")
    parser.add_argument("--lang", help="Language configured for the request.")
    parser.add_argument("--host", required=True, help="HTTP host of the request.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args()

    configure_logging(verbose=args.verbose)
    cfg = load_config()

    session = requests.Session()
    client = MediaWikiClient(cfg.mw_api_url, cfg.mw_user_agent, session, cfg.article_path)
    if cfg.mw_username and cfg.mw_password:
        client.login(cfg.mw_username, cfg.mw_password)

    general = client.site_info()
    logging.getLogger("probe").info(
        "connected wiki: %s (version=%s)", general.get("sitename"), general.get("generator")
    )

    tree = load_language_tree(client, cfg.language_data_page)
    outcome = preprocess(
        args.page, args.lang or cfg.default_lang, args.host, client, cfg, tree
    )
    summary = {
        "page": args.page,
        "lang": outcome.lang,
        "redirect": outcome.redirect_url,
        "translations": [link.as_menu_item() for link in outcome.translations],
    }
    print(json.dumps(summary, indent=2, sort_keys=True, ensure_ascii=False))


if __name__ == "__main__":
    main()
