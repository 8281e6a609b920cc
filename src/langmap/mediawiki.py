from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests


log = logging.getLogger("langmap.mediawiki")

TAG_RE = re.compile(r"<[^>]+>")


class MediaWikiError(RuntimeError):
    pass


@dataclass
class MediaWikiClient:
    api_url: str
    user_agent: str
    session: requests.Session
    article_path: str = "/wiki/$1"

    def _request(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        params = {"format": "json", "formatversion": 2, **params}
        headers = {"User-Agent": self.user_agent}
        backoff = 1
        for attempt in range(5):
            if method == "GET":
                resp = self.session.get(self.api_url, params=params, headers=headers, timeout=30)
            else:
                resp = self.session.post(self.api_url, data=params, headers=headers, timeout=30)
            resp.raise_for_status()
            data = resp.json()
            if "error" not in data:
                return data
            error = data["error"]
            code = str(error.get("code", ""))
            info = str(error.get("info", ""))
            if code == "ratelimited" or "rate limit" in info.lower():
                if attempt < 4:
                    log.warning("rate limited; backing off %ss", backoff)
                    time.sleep(backoff)
                    backoff *= 2
                    continue
            raise MediaWikiError(f"MediaWiki API error: {error}")
        raise MediaWikiError("MediaWiki API error: exceeded retry attempts")

    def _query_page(self, title: str, **params: Any) -> dict[str, Any]:
        data = self._request("GET", {"action": "query", "titles": title, **params})
        pages = data.get("query", {}).get("pages") or []
        if not pages:
            raise MediaWikiError(f"unexpected response for {title}: {data}")
        return pages[0]

    def get_login_token(self) -> str:
        data = self._request("GET", {"action": "query", "meta": "tokens", "type": "login"})
        token = data["query"]["tokens"]["logintoken"]
        if not token:
            raise MediaWikiError("login token missing")
        return token

    def login(self, username: str, password: str) -> None:
        token = self.get_login_token()
        data = self._request(
            "POST",
            {
                "action": "login",
                "lgname": username,
                "lgpassword": password,
                "lgtoken": token,
            },
        )
        result = data.get("login", {}).get("result")
        if result != "Success":
            raise MediaWikiError(f"login failed: {result}")

    def page_exists(self, title: str) -> bool:
        page = self._query_page(title)
        return not page.get("missing") and not page.get("invalid")

    def get_page_wikitext(self, title: str) -> tuple[str, int, str] | None:
        page = self._query_page(title, prop="revisions", rvprop="content|ids", rvslots="main")
        if page.get("missing"):
            return None
        normalized_title = page.get("title", title)
        revisions = page.get("revisions") or []
        if not revisions:
            raise MediaWikiError(f"no revisions for {title}")
        rev = revisions[0]
        text = rev["slots"]["main"]["content"]
        return text, int(rev["revid"]), normalized_title

    def first_heading(self, title: str) -> str | None:
        page = self._query_page(title, prop="info", inprop="displaytitle")
        if page.get("missing"):
            return None
        display = TAG_RE.sub("", str(page.get("displaytitle") or "")).strip()
        return display or None

    def url_for(self, title: str) -> str:
        return self.article_path.replace("$1", quote(title.replace(" ", "_"), safe=":/"))

    def site_info(self) -> dict[str, Any]:
        data = self._request("GET", {"action": "query", "meta": "siteinfo", "siprop": "general"})
        return data["query"]["general"]
