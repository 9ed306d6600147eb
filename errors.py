"""
Exceptions raised by the exposure pipeline.

Provider failures are absorbed inside the providers; only the two
exceptions below ever leave a component.
"""


class ExposureScanError(Exception):
    """Base class for pipeline errors."""


class InvalidSubjectError(ExposureScanError, ValueError):
    """The subject to scan is missing a required field (the full name)."""


class ProviderDisabledError(ExposureScanError):
    """A search provider is unconfigured or switched off."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider}: {reason}")
