from __future__ import annotations

import logging
from dataclasses import dataclass

log = logging.getLogger("langmap.domains")


def _strip_port(host: str) -> str:
    if host.startswith("["):
        return host.split("]", 1)[0] + "]"
    return host.rsplit(":", 1)[0] if host.count(":") == 1 else host


def is_request_domain_valid(domain: str, request_host: str) -> bool:
    return _strip_port(request_host).lower().endswith(domain.lower())


@dataclass(frozen=True)
class DomainTable:
    pairs: tuple[tuple[str, str], ...] = ()

    def domain_for(self, lang: str | None) -> str | None:
        for code, domain in self.pairs:
            if code == lang:
                return domain
        if self.pairs:
            return self.pairs[0][1]
        return None

    def redirect_for(
        self, lang: str | None, page_url: str, request_host: str, host_prefix: str
    ) -> str | None:
        domain = self.domain_for(lang)
        if not domain or is_request_domain_valid(domain, request_host):
            return None
        target = f"{host_prefix}{domain}{page_url}"
        log.info("host %s does not serve lang=%s; redirecting to %s", request_host, lang, target)
        return target
