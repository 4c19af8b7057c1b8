"""Search-level errors. Per-page failures never surface as exceptions."""


class WebSearchError(Exception):
    """Base class for errors that cross the retrieval boundary."""


class NoResultsError(WebSearchError):
    """The search returned zero usable result pages."""

    def __init__(self, query: str = ""):
        self.query = query
        super().__init__("No web results found.")


class FetchFailedError(WebSearchError):
    """The search results page itself could not be retrieved or decoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Web search failed: {reason}")


NoResults = NoResultsError
FetchFailed = FetchFailedError
