"""Exceptions raised while syncing competitions."""

from __future__ import annotations


class WomSyncError(Exception):
    """Base class for every error this package raises."""


class TransportError(WomSyncError):
    """The ranking service could not be reached or answered with an error status."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"{message} [url={url} status={status_code}]")
        self.url = url
        self.status_code = status_code


class MalformedResponseError(WomSyncError):
    """The response body could not be decoded into the expected shape."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} [url={url}]")
        self.url = url


class SelectionAbortedError(WomSyncError):
    """Selecting the competition for one event kind failed; nothing was written for it."""

    def __init__(self, kind: str, competition_id: int | None = None, message: str = "selection aborted") -> None:
        super().__init__(f"{message} [kind={kind} competition_id={competition_id}]")
        self.kind = kind
        self.competition_id = competition_id
