from typing import List, Optional, Sequence


class HarvestError(Exception):
    """Base class for every error the extraction pipeline raises."""


class FetchError(HarvestError):
    def __init__(self, message: str, *, source: str = "", url: str = ""):
        super().__init__(message)
        self.source = source
        self.url = url


class FetchTimeout(FetchError):
    pass


class FetchBlocked(FetchError):
    def __init__(self, message: str, *, source: str = "", url: str = "", status_code: Optional[int] = None):
        super().__init__(message, source=source, url=url)
        self.status_code = status_code


class FetchExhausted(HarvestError):
    def __init__(self, url: str, attempts: Sequence[FetchError]):
        self.url = url
        self.attempts: List[FetchError] = list(attempts)
        tried = ", ".join(a.source or "?" for a in self.attempts) or "none"
        super().__init__(f"All fetch attempts failed for {url} (tried: {tried})")


class ExtractionIncomplete(HarvestError):
    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(f"Extraction incomplete, missing: {', '.join(self.missing)}")


class ExtractionFailed(HarvestError):
    GUIDANCE = (
        "Try a different product URL, check that the link opens in a browser, "
        "or use a direct product page link rather than search results."
    )

    def __init__(self, reason: str, *, url: str = ""):
        self.reason = reason
        self.url = url
        super().__init__(f"{reason} {self.GUIDANCE}")


class TokenError(HarvestError):
    pass
