"""Exception hierarchy for the attested price feed.

All core and service-layer exceptions live here to avoid circular imports
between the encoding, signing, cache and service packages.
"""


class FeedError(Exception):
    """Base exception for all price feed errors."""


class InvalidNumericFormat(FeedError, ValueError):
    """Raised when a price string is not a well-formed decimal numeral."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Not a well-formed decimal numeral: {raw!r}")
        self.raw = raw


class MissingCredential(FeedError):
    """Raised at startup when the signing key is absent or unusable."""


class QuoteFetchError(FeedError):
    """Raised when an upstream quote source fails or returns a malformed body."""


class RefreshFailed(FeedError):
    """Raised when a cache refresh (fetch or sign) fails.

    The previous cache entry, if any, is left untouched.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Refresh failed: {cause!r}")
        self.cause = cause


class FeedUnavailable(FeedError):
    """Raised to request handlers when no fresh attestation can be produced."""

    def __init__(self, feed_id: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Feed {feed_id!r} unavailable")
        self.feed_id = feed_id
        self.cause = cause


class UnknownFeed(FeedError, KeyError):
    """Raised when a feed id is not configured."""

    def __init__(self, feed_id: str) -> None:
        super().__init__(feed_id)
        self.feed_id = feed_id

    def __str__(self) -> str:
        return f"Unknown feed: {self.feed_id!r}"


class InvalidMintRequest(FeedError, ValueError):
    """Raised when mint-authorization parameters are missing or malformed."""


class AuthorizationDenied(FeedError):
    """Raised when the KYC registry does not verify an address."""
