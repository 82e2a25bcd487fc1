"""Custom exception hierarchy for the over.gg scraper.

Exception tree:
    OverggScraperError
    +-- ConfigurationError   (selector table invalid or pattern fails to compile)
    +-- ExtractionError      (structural anchor missing from the page)
    +-- FetchError           (transport failure, retriable)
        +-- NonSuccessStatus (response status was not 2xx)
"""

from typing import Optional


class OverggScraperError(Exception):
    """Base exception for all over.gg scraper errors."""

    pass


class ConfigurationError(OverggScraperError):
    """The selector configuration could not be loaded or compiled.

    Raised eagerly at load time. Never retried.
    """

    def __init__(self, message: str, *, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class ExtractionError(OverggScraperError):
    """The structural anchor of a match list could not be located.

    Carries the requested match type and, when available, the HTML of the
    container being inspected so the failure can be diagnosed.
    """

    def __init__(
        self,
        message: str,
        *,
        match_type=None,
        html: Optional[str] = None,
    ):
        self.match_type = match_type
        self.html = html
        super().__init__(message)


class FetchError(OverggScraperError):
    """The page could not be fetched (connection error, timeout).

    This is a retriable error.
    """

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class NonSuccessStatus(FetchError):
    """The server answered with a status code outside the 2xx range.

    Distinct from FetchError so callers can tell a reachable site that
    refused the request from a transport failure. Not retried.
    """

    def __init__(self, status_code: int, *, url: Optional[str] = None):
        super().__init__(
            f"The status code of a received response was {status_code} "
            f"and not success.",
            url=url,
            status_code=status_code,
        )
