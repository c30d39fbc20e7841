# classes/wiseoldman.py
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from wom_sync.errors import MalformedResponseError, TransportError

from .competition import CompetitionDetail, CompetitionSummary

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.wiseoldman.net/v2"
SITE_BASE_URL = "https://wiseoldman.net"
DEFAULT_TIMEOUT = (5.0, 20.0)

_PAYLOAD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


class WiseOldMan:
    """
    Thin HTTP client for the Wise Old Man API. Owns a requests.Session unless one
    is provided. No retries: a failed request raises and the caller decides.
    """

    def __init__(
        self,
        group_id: int,
        *,
        api_base_url: str = API_BASE_URL,
        site_base_url: str = SITE_BASE_URL,
        timeout: float | tuple[float, float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.group_id = group_id
        self.api_base_url = api_base_url.rstrip("/")
        self.site_base_url = site_base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # -----------------------
    # Public HTTP operations
    # -----------------------

    def fetch_competition_list(self) -> list[CompetitionSummary]:
        """
        Fetch every competition of the group. Entries that cannot be parsed are
        skipped and logged.
        """
        url = f"{self.api_base_url}/groups/{self.group_id}/competitions"
        payload = self._get_json(url)
        if not isinstance(payload, list):
            raise MalformedResponseError(url, f"expected a JSON array, got {type(payload).__name__}")

        competitions: list[CompetitionSummary] = []
        for item in payload:
            try:
                competitions.append(CompetitionSummary.from_payload(item))
            except _PAYLOAD_ERRORS as err:
                competition_id = item.get("id") if isinstance(item, dict) else None
                logger.warning("skipping unparseable competition id=%s: %s", competition_id, err)
        logger.debug("fetched %d competitions for group %s", len(competitions), self.group_id)
        return competitions

    def fetch_competition_detail(self, competition_id: int) -> CompetitionDetail:
        """
        Fetch one competition including its participations.
        """
        url = f"{self.api_base_url}/competitions/{competition_id}"
        payload = self._get_json(url)
        if not isinstance(payload, dict):
            raise MalformedResponseError(url, f"expected a JSON object, got {type(payload).__name__}")
        try:
            return CompetitionDetail.from_payload(payload)
        except _PAYLOAD_ERRORS as err:
            raise MalformedResponseError(url, f"unexpected competition shape: {err}") from err

    def competition_url(self, competition_id: int) -> str:
        """Public page for a competition, as linked from the UI."""
        return f"{self.site_base_url}/competitions/{competition_id}"

    # -----------------------
    # Utilities
    # -----------------------

    def _get_json(self, url: str) -> Any:
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.HTTPError as err:
            status = err.response.status_code if err.response is not None else None
            raise TransportError(url, "HTTP error", status_code=status) from err
        except requests.RequestException as err:
            raise TransportError(url, f"request failed: {err}") from err

        logger.debug("GET %s status=%s", url, r.status_code)
        try:
            return r.json()
        except ValueError as err:
            raise MalformedResponseError(url, "response body is not valid JSON") from err
