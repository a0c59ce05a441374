"""Errors raised while building a weather report."""


class WeatherReportError(RuntimeError):
    """Base error for report building."""


class UpstreamFetchError(WeatherReportError):
    """Raised when an observation provider cannot be reached."""

    def __init__(self, source: str, url: str, reason: str):
        super().__init__(f"{source} fetch from {url} failed: {reason}")
        self.source = source
        self.url = url
        self.reason = reason


class ReportPersistenceError(WeatherReportError):
    """Raised when the report store cannot commit a report."""
