"""Exceptions raised by crawlopts."""


class CrawlOptsError(Exception):
    """Base error for crawlopts."""

    pass


class CookieFileError(CrawlOptsError):
    """A cookie file could not be read."""

    pass
