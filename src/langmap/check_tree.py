from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import requests

from .config import load_config
from .logging import configure_logging
from .mediawiki import MediaWikiClient
from .tree import LanguageTree, MalformedDocumentError, iter_nodes, parse_language_tree

log = logging.getLogger("langmap.check_tree")


def summarize(tree: LanguageTree) -> dict:
    nodes = list(iter_nodes(tree.roots))
    return {
        "defaults": tree.defaults,
        "languages": tree.languages(),
        "nodes": len(nodes),
        "depth": max((node.level + 1 for node in nodes), default=0),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate the language mapping document.")
    parser.add_argument("--file", help="Read the document from a local file instead of the wiki.")
    parser.add_argument("--title", help="Wiki page holding the document (defaults to config).")
    args = parser.parse_args()

    configure_logging()

    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
        source = args.file
    else:
        cfg = load_config()
        source = args.title or cfg.language_data_page
        if not source:
            raise SystemExit("no language data page configured")
        session = requests.Session()
        client = MediaWikiClient(cfg.mw_api_url, cfg.mw_user_agent, session, cfg.article_path)
        if cfg.mw_username and cfg.mw_password:
            client.login(cfg.mw_username, cfg.mw_password)
        page = client.get_page_wikitext(source)
        if page is None:
            raise SystemExit(f"language data page {source} does not exist")
        text, rev_id, source = page
        log.info("fetched %s (rev_id=%s bytes=%s)", source, rev_id, len(text))

    try:
        tree = parse_language_tree(text)
    except MalformedDocumentError as exc:
        log.error("%s is malformed: %s", source, exc)
        raise SystemExit(2) from exc

    print(json.dumps(summarize(tree), indent=2, sort_keys=True, ensure_ascii=False))


if __name__ == "__main__":
    main()
