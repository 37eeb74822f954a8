"""
Provider error taxonomy.

Configuration errors are raised before any network call; upstream errors wrap
non-success responses and explicit error payloads; capability errors mark an
operation the resolved backend does not support.
"""


class ProviderError(Exception):
    """Base class for every provider failure."""


class ProviderConfigurationError(ProviderError):
    """Required credential or setting is missing."""


class UnknownProviderError(ProviderConfigurationError):
    """Configured provider name is not in the registry."""

    def __init__(self, family: str, name: str, known):
        self.family = family
        self.name = name
        super().__init__(
            f"Unknown {family} provider: {name!r} (expected one of: {', '.join(sorted(known))})"
        )


class ProviderUpstreamError(ProviderError):
    """Remote call failed or returned an explicit error."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class ProviderCapabilityError(ProviderError):
    """Backend has no counterpart for the requested operation."""
