"""
Result sinks: consumers of the single Found / NotFound result of a search.
"""
import logging
import webbrowser
from typing import List, Optional, Protocol

from .core.error import ErrorType, PageVideoError
from .models.schema import ResolvedResult, is_found

NOT_FOUND_TITLE = "Video not found"
NOT_FOUND_MESSAGE = "No related explanatory video was found."

logger = logging.getLogger("pagevideo.sinks")


class ResultSink(Protocol):
    def found(self, url: str, result: ResolvedResult) -> None:
        ...

    def not_found(self, result: ResolvedResult) -> None:
        ...


def deliver_result(result: ResolvedResult, sink: ResultSink) -> None:
    """Hand a resolved result to the sink's found / not_found branch."""
    if is_found(result):
        sink.found(result["url"], result)
    else:
        sink.not_found(result)


class SingleDeliverySink:
    """
    Wraps a sink and refuses a second delivery for the same search.
    """

    def __init__(self, inner: ResultSink) -> None:
        self.inner = inner
        self.delivered = False

    def _claim(self) -> None:
        if self.delivered:
            raise PageVideoError(
                "Result already delivered for this search",
                ErrorType.LOGIC_ERROR,
            )
        self.delivered = True

    def found(self, url: str, result: ResolvedResult) -> None:
        self._claim()
        self.inner.found(url, result)

    def not_found(self, result: ResolvedResult) -> None:
        self._claim()
        self.inner.not_found(result)


class LoggingResultSink:
    def __init__(self, logger_: Optional[logging.Logger] = None) -> None:
        self.logger = logger_ or logger

    def found(self, url: str, result: ResolvedResult) -> None:
        self.logger.info("Video found for %r: %s", result.get("keyword"), url)

    def not_found(self, result: ResolvedResult) -> None:
        self.logger.info(
            "%s: %s (%s)", NOT_FOUND_TITLE, NOT_FOUND_MESSAGE, result.get("diagnostic") or "no_match",
        )


class BrowserPlaybackSink(LoggingResultSink):
    """Play the resolved video by handing its URL to the system browser."""

    def found(self, url: str, result: ResolvedResult) -> None:
        super().found(url, result)
        if not webbrowser.open(url):
            self.logger.warning("No browser available to play %s", url)


class CollectingSink:
    def __init__(self) -> None:
        self.results: List[ResolvedResult] = []

    def found(self, url: str, result: ResolvedResult) -> None:
        self.results.append(result)

    def not_found(self, result: ResolvedResult) -> None:
        self.results.append(result)
