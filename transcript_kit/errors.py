from __future__ import annotations


class TranscriptKitError(Exception):
    pass


class InvalidURLError(TranscriptKitError):
    pass


class InvalidVideoIDError(TranscriptKitError):
    pass


class NetworkError(TranscriptKitError):
    def __init__(self, cause: BaseException, *, url: str | None = None) -> None:
        message = f"Network request failed: {cause}"
        if url is not None:
            message = f"Network request failed for {url}: {cause}"
        super().__init__(message)
        self.cause = cause
        self.url = url


class InvalidHTMLFormatError(TranscriptKitError):
    pass


class InvalidXMLFormatError(TranscriptKitError):
    pass


class NoCaptionDataError(TranscriptKitError):
    pass


class NoTranscriptDataError(TranscriptKitError):
    pass


class NoVideoInfoError(TranscriptKitError):
    pass


class ActivityParseError(TranscriptKitError):
    def __init__(self, block: str, reason: str) -> None:
        super().__init__(reason)
        self.block = block
        self.reason = reason
