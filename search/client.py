"""
SearchProvider ABC and provider implementations.

Tiers:
  - Google Custom Search JSON API (primary, structured)
  - DuckDuckGo HTML endpoint     (secondary, scraped with BeautifulSoup)
  - Synthetic generator           (tertiary, deterministic, no network)

``search()`` never raises on recoverable failures (network errors,
timeouts, non-2xx responses, unparseable payloads): those become an empty
list. Only ``ProviderDisabledError`` escapes, for configuration problems.
"""

from __future__ import annotations

import hashlib
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from urllib.parse import unquote

import httpx
from bs4 import BeautifulSoup

from errors import ProviderDisabledError
from models.schema import RawHit

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


# ------------------------------------------------------------------
# Data classes
# ------------------------------------------------------------------

@dataclass
class SearchProvenance:
    """Provenance record for one provider call."""

    query: str
    provider: str
    tier: str
    timestamp: datetime = field(default_factory=datetime.utcnow)
    result_count: int = 0
    error: Optional[str] = None


# ------------------------------------------------------------------
# Abstract provider
# ------------------------------------------------------------------

class SearchProvider(ABC):
    """Abstract search interface."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._timeout = timeout
        self._transport = transport

    @abstractmethod
    def _do_search(self, query: str) -> List[RawHit]:
        """Provider-specific search implementation."""
        ...

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    def search(self, query: str) -> List[RawHit]:
        """
        Public search entry point.

        Returns an empty list on any recoverable failure.
        """
        try:
            results = self._do_search(query)
        except httpx.TimeoutException as e:
            logger.warning("%s timed out after %.0fs: %s", self.provider_name, self._timeout, e)
            return []
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", self.provider_name, e)
            return []
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("%s returned an unparseable payload: %s", self.provider_name, e)
            return []

        logger.info("%s: %d results", self.provider_name, len(results))
        return results

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        )


# ------------------------------------------------------------------
# Google Programmable Search Engine (CSE) provider
# ------------------------------------------------------------------

class GoogleCSEProvider(SearchProvider):
    """Search via Google Custom Search JSON API."""

    API_URL = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        cx: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._api_key = api_key or ""
        self._cx = cx or ""

    @property
    def provider_name(self) -> str:
        return "google_cse"

    def _do_search(self, query: str) -> List[RawHit]:
        if not self._api_key or not self._cx or "your_" in self._api_key or "your_" in self._cx:
            raise ProviderDisabledError(
                self.provider_name, "GOOGLE_API_KEY and GOOGLE_SEARCH_CX not set."
            )

        params: dict = {
            "key": self._api_key,
            "cx": self._cx,
            "q": query,
            "num": 10,
        }

        with self._client() as client:
            resp = client.get(self.API_URL, params=params)
            resp.raise_for_status()
            data = resp.json()

        results: List[RawHit] = []
        for item in data.get("items") or []:
            link = item.get("link") or ""
            if not isinstance(link, str) or not link.startswith("http"):
                continue
            results.append(
                RawHit.from_url(
                    title=item.get("title", ""),
                    link=link,
                    snippet=item.get("snippet", ""),
                )
            )
        return results


# ------------------------------------------------------------------
# DuckDuckGo HTML provider
# ------------------------------------------------------------------

class DuckDuckGoHTMLProvider(SearchProvider):
    """Search via the JavaScript-free DuckDuckGo HTML page."""

    API_URL = "https://html.duckduckgo.com/html/"
    MAX_RESULTS = 15

    def __init__(self, enabled: bool = True, **kwargs):
        super().__init__(**kwargs)
        self._enabled = enabled

    @property
    def provider_name(self) -> str:
        return "duckduckgo"

    def _do_search(self, query: str) -> List[RawHit]:
        if not self._enabled:
            raise ProviderDisabledError(self.provider_name, "secondary search disabled")

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": USER_AGENT,
        }
        with self._client() as client:
            resp = client.post(self.API_URL, data={"q": query}, headers=headers)
            resp.raise_for_status()
            html = resp.text

        return self.parse_results(html)

    @classmethod
    def parse_results(cls, html: str) -> List[RawHit]:
        """Extract result blocks from a DuckDuckGo HTML page."""
        soup = BeautifulSoup(html, "html.parser")
        results: List[RawHit] = []

        for block in soup.select(".result"):
            if len(results) >= cls.MAX_RESULTS:
                break

            title_el = block.select_one(".result__title a")
            url_el = block.select_one(".result__url")
            snippet_el = block.select_one(".result__snippet")

            title = title_el.get_text(strip=True) if title_el else ""
            href = (url_el.get("href") if url_el else None) or (
                title_el.get("href") if title_el else None
            ) or ""
            link = _unwrap_redirect(href)
            snippet = snippet_el.get_text(" ", strip=True) if snippet_el else ""

            if title and link.startswith("http"):
                results.append(RawHit.from_url(title=title, link=link, snippet=snippet))

        return results


def _unwrap_redirect(href: str) -> str:
    """DuckDuckGo wraps outbound links as //duckduckgo.com/l/?uddg=<encoded>."""
    if "duckduckgo.com/l/" in href:
        m = re.search(r"uddg=([^&]+)", href)
        if m:
            return unquote(m.group(1))
    return href


# ------------------------------------------------------------------
# Synthetic provider
# ------------------------------------------------------------------

SYNTHETIC_DOMAINS = [
    "spokeo.com",
    "whitepages.com",
    "beenverified.com",
    "radaris.com",
    "fastpeoplesearch.com",
    "truepeoplesearch.com",
    "intelius.com",
    "mylife.com",
    "instantcheckmate.com",
    "linkedin.com",
]
SYNTHETIC_EMAIL_DOMAIN = "peoplefinder.com"


class SyntheticProvider(SearchProvider):
    """
    Deterministic stand-in results so a scan never comes back empty.

    Produces one hit per domain in ``SYNTHETIC_DOMAINS`` (plus one more
    when an email is known). Identical subjects always get identical hits.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        city_state: Optional[str] = None,
        email: Optional[str] = None,
        enabled: bool = True,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._name = name
        self._city_state = city_state
        self._email = email
        self._enabled = enabled

    @property
    def provider_name(self) -> str:
        return "synthetic"

    def _do_search(self, query: str) -> List[RawHit]:
        if not self._enabled:
            raise ProviderDisabledError(self.provider_name, "synthetic fallback disabled")

        name = self._name or _quoted_term(query) or query.strip()
        seed = hashlib.sha256(
            "|".join([name.lower(), (self._city_state or "").lower(), (self._email or "").lower()]).encode()
        ).hexdigest()
        age = 28 + int(seed[:4], 16) % 45
        record_id = seed[:10]
        slug = _slugify(name)
        where = f" in {self._city_state}" if self._city_state else ""
        loc_slug = f"/{_slugify(self._city_state)}" if self._city_state else ""

        snippets = {
            "spokeo.com": f"{name}, age {age}{where}. View phone number, current address, email and relatives.",
            "whitepages.com": f"{name}{where}. Phone numbers, addresses and relatives for {name}.",
            "beenverified.com": f"Background check for {name}: criminal records, court filings, property and assets.",
            "radaris.com": f"{name}{where} - addresses, phone, social profiles and photos.",
            "fastpeoplesearch.com": f"Free people search for {name}, age {age}. Address history, phone and relatives.",
            "truepeoplesearch.com": f"{name}{where}. Current address, phone numbers and associates.",
            "intelius.com": f"Public records for {name}: arrests, assets, relatives and address history.",
            "mylife.com": f"{name}, age {age}{where}. Reputation score and background report.",
            "instantcheckmate.com": f"Instant Checkmate report on {name}: criminal records, phone and address.",
            "linkedin.com": f"View {name}'s profile on LinkedIn, the world's largest professional community.",
        }

        results: List[RawHit] = []
        for domain in SYNTHETIC_DOMAINS:
            results.append(
                RawHit.from_url(
                    title=f"{name} | {domain.split('.')[0].title()}",
                    link=f"https://www.{domain}/{slug}{loc_slug}/{record_id}",
                    snippet=snippets[domain],
                )
            )

        if self._email:
            results.append(
                RawHit.from_url(
                    title=f"{name} | Peoplefinder",
                    link=f"https://www.{SYNTHETIC_EMAIL_DOMAIN}/email/{record_id}",
                    snippet=f"Possible email match for {name}: {self._email}",
                )
            )

        return results


def _quoted_term(query: str) -> Optional[str]:
    m = re.search(r'"([^"]+)"', query)
    return m.group(1) if m else None


def _slugify(text: str) -> str:
    """Make a URL path slug from text."""
    return re.sub(r"[^A-Za-z0-9]+", "-", text).strip("-")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def get_search_provider(provider: str, **kwargs) -> SearchProvider:
    """Factory — create a search provider by name."""
    providers = {
        "google_cse": GoogleCSEProvider,
        "duckduckgo": DuckDuckGoHTMLProvider,
        "synthetic": SyntheticProvider,
    }
    cls = providers.get(provider)
    if not cls:
        raise ValueError(
            f"Unknown provider '{provider}'. Choose from: {list(providers.keys())}"
        )
    return cls(**kwargs)
