"""Exception hierarchy for website2pdf.

Fatal errors (:class:`ConfigurationError`, :class:`BrowserLaunchError`) abort
the run before any PDF is printed. The others are scoped to one sitemap or one
URL and end up in the outcome report.
"""


class Website2PdfError(Exception):
    """Base exception for website2pdf."""


class ConfigurationError(Website2PdfError):
    """Raised when the configuration is invalid or the website is unreachable."""


class SitemapFetchError(Website2PdfError):
    """Raised when a sitemap document cannot be downloaded or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Unable to fetch sitemap {url}: {reason}")
        self.url = url
        self.reason = reason


class BrowserLaunchError(Website2PdfError):
    """Raised when the rendering browser cannot be started."""


class NavigationError(Website2PdfError):
    """Raised when a page cannot be loaded in the browser."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Navigation to {url} failed: {reason}")
        self.url = url


class RenderError(Website2PdfError):
    """Raised when a loaded page cannot be printed to PDF."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Printing {url} failed: {reason}")
        self.url = url
