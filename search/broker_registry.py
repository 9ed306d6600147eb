"""
Broker Registry — known data-broker domains and their risk metadata.

Keys are bare domains (no "www."). A URL resolves to the first entry whose
key appears inside its hostname, so "sub.spokeo.com" and "www.spokeo.com"
both land on spokeo.com.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from models.enums import BrokerCategory, RemovalDifficulty, Severity
from models.schema import BrokerInfo, host_from_url


# ------------------------------------------------------------------
# Built-in broker table
# ------------------------------------------------------------------

DEFAULT_BROKERS: Dict[str, BrokerInfo] = {
    "spokeo.com": BrokerInfo(
        display_name="Spokeo",
        category=BrokerCategory.PEOPLE_SEARCH,
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.EASY,
        removal_url="https://www.spokeo.com/optout",
        data_types=("name", "address", "phone", "email", "relatives", "age"),
        weight=15,
    ),
    "whitepages.com": BrokerInfo(
        display_name="Whitepages",
        category=BrokerCategory.PEOPLE_SEARCH,
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.MEDIUM,
        removal_url="https://www.whitepages.com/suppression-requests",
        data_types=("name", "address", "phone", "relatives"),
        weight=15,
    ),
    "beenverified.com": BrokerInfo(
        display_name="BeenVerified",
        category=BrokerCategory.BACKGROUND_CHECK,
        severity=Severity.CRITICAL,
        removal_difficulty=RemovalDifficulty.MEDIUM,
        removal_url="https://www.beenverified.com/f/optout/search",
        data_types=("name", "address", "phone", "criminal", "assets"),
        weight=20,
    ),
    "radaris.com": BrokerInfo(
        display_name="Radaris",
        category=BrokerCategory.PEOPLE_SEARCH,
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.HARD,
        removal_url="https://radaris.com/control/privacy",
        data_types=("name", "address", "phone", "social", "photos"),
        weight=18,
    ),
    "fastpeoplesearch.com": BrokerInfo(
        display_name="Fast People Search",
        category=BrokerCategory.PEOPLE_SEARCH,
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.EASY,
        removal_url="https://www.fastpeoplesearch.com/removal",
        data_types=("name", "address", "phone", "relatives"),
        weight=12,
    ),
    "truepeoplesearch.com": BrokerInfo(
        display_name="True People Search",
        category=BrokerCategory.PEOPLE_SEARCH,
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.EASY,
        removal_url="https://www.truepeoplesearch.com/removal",
        data_types=("name", "address", "phone", "relatives"),
        weight=12,
    ),
    "linkedin.com": BrokerInfo(
        display_name="LinkedIn",
        category=BrokerCategory.SOCIAL_PROFESSIONAL,
        severity=Severity.MEDIUM,
        removal_difficulty=RemovalDifficulty.EASY,
        removal_url="https://www.linkedin.com/help/linkedin/answer/a1342443",
        data_types=("name", "employment", "education", "skills"),
        weight=8,
    ),
    "facebook.com": BrokerInfo(
        display_name="Facebook",
        category=BrokerCategory.SOCIAL,
        severity=Severity.MEDIUM,
        removal_difficulty=RemovalDifficulty.EASY,
        removal_url="https://www.facebook.com/help/delete_account",
        data_types=("name", "photos", "friends", "posts"),
        weight=10,
    ),
    "intelius.com": BrokerInfo(
        display_name="Intelius",
        category=BrokerCategory.BACKGROUND_CHECK,
        severity=Severity.CRITICAL,
        removal_difficulty=RemovalDifficulty.HARD,
        removal_url="https://www.intelius.com/opt-out",
        data_types=("name", "address", "phone", "criminal", "assets", "relatives"),
        weight=20,
    ),
    "mylife.com": BrokerInfo(
        display_name="MyLife",
        category=BrokerCategory.REPUTATION,
        severity=Severity.CRITICAL,
        removal_difficulty=RemovalDifficulty.HARD,
        removal_url="https://www.mylife.com/ccpa/index.pubview",
        data_types=("name", "address", "reputation-score", "background"),
        weight=22,
    ),
    "instantcheckmate.com": BrokerInfo(
        display_name="Instant Checkmate",
        category=BrokerCategory.BACKGROUND_CHECK,
        severity=Severity.CRITICAL,
        removal_difficulty=RemovalDifficulty.MEDIUM,
        removal_url="https://www.instantcheckmate.com/opt-out/",
        data_types=("name", "address", "phone", "criminal", "assets"),
        weight=18,
    ),
    "peoplefinder.com": BrokerInfo(
        display_name="PeopleFinder",
        category=BrokerCategory.PEOPLE_SEARCH,
        severity=Severity.HIGH,
        removal_difficulty=RemovalDifficulty.MEDIUM,
        removal_url="https://www.peoplefinder.com/optout.php",
        data_types=("name", "address", "phone", "relatives"),
        weight=12,
    ),
}

DIFFICULTY_INSTRUCTIONS: Dict[RemovalDifficulty, str] = {
    RemovalDifficulty.EASY: (
        "This site has a simple opt-out process that typically takes 5-10 minutes."
    ),
    RemovalDifficulty.MEDIUM: (
        "This site requires verification steps. Expect the process to take 15-30 minutes."
    ),
    RemovalDifficulty.HARD: (
        "This site has a complex removal process. You may need to submit multiple "
        "requests or verify your identity."
    ),
}

GENERIC_REMOVAL_INSTRUCTIONS = (
    "Visit the site and look for a privacy policy or opt-out page. Most sites are "
    "required to honor removal requests under CCPA and GDPR."
)


class BrokerRegistry:
    """
    Read-only lookup table from broker domain to BrokerInfo.

    Pass a custom mapping to substitute a test registry; ``default()``
    returns the built-in table.
    """

    def __init__(self, brokers: Mapping[str, BrokerInfo]):
        normalized: Dict[str, BrokerInfo] = {}
        for domain, info in brokers.items():
            key = domain.lower().strip()
            if key.startswith("www."):
                key = key[4:]
            normalized[key] = info
        self._brokers = MappingProxyType(normalized)

    @classmethod
    def default(cls) -> BrokerRegistry:
        return cls(DEFAULT_BROKERS)

    @property
    def domains(self) -> List[str]:
        """Registry keys in lookup order."""
        return list(self._brokers)

    def get(self, domain: str) -> Optional[BrokerInfo]:
        return self._brokers.get(domain)

    def lookup(self, url: str) -> Optional[BrokerInfo]:
        """Resolve a URL to its broker entry, or None when unknown or unparseable."""
        host = host_from_url(url)
        if not host:
            return None
        for domain, info in self._brokers.items():
            if domain in host:
                return info
        return None

    def removal_instructions(self, url: str) -> str:
        """Difficulty-specific opt-out guidance for a URL's site."""
        info = self.lookup(url)
        if info is None:
            return GENERIC_REMOVAL_INSTRUCTIONS
        return (
            f"{DIFFICULTY_INSTRUCTIONS[info.removal_difficulty]} "
            f"Visit {info.removal_url} to begin the removal process."
        )

    def __contains__(self, url: str) -> bool:
        return self.lookup(url) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._brokers)

    def __len__(self) -> int:
        return len(self._brokers)
