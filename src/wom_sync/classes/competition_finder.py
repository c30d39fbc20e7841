"""Pick which competition each event kind should show."""

from __future__ import annotations

import datetime
import logging

from wom_sync.errors import SelectionAbortedError

from .competition import CompetitionData, CompetitionDetail, CompetitionSummary
from .competition_parser import rank_leaderboard, split_into_teams
from .event_kind import HUNT, EventKind
from .wiseoldman import WiseOldMan

logger = logging.getLogger(__name__)


class CompetitionFinder:
    def __init__(self, client: WiseOldMan) -> None:
        self.client = client

    def find_active(
        self,
        kind: type[EventKind],
        competitions: list[CompetitionSummary],
        now: datetime.datetime,
    ) -> CompetitionData | None:
        """
        Return the first competition in list order that is running now and whose
        title matches the kind, with its detail fetched. None if nothing is running.
        """
        for summary in competitions:
            if summary.is_active(now) and kind.matches_title(summary.title):
                logger.debug("active %s competition: %s [id: %d]", kind.name, summary.title, summary.id)
                return self.fetch_competition_data(kind, summary)
        return None

    def find_last_completed(
        self,
        kind: type[EventKind],
        competitions: list[CompetitionSummary],
        now: datetime.datetime,
    ) -> CompetitionData | None:
        """
        Return the title-matching competition that ended most recently, or None.
        HUNT is tracked by id and never falls back.
        """
        if kind is HUNT:
            return None

        most_recent: CompetitionSummary | None = None
        for summary in competitions:
            if not kind.matches_title(summary.title) or not summary.has_ended(now):
                continue
            if most_recent is None or summary.ends_at > most_recent.ends_at:
                most_recent = summary

        if most_recent is None:
            return None
        logger.debug("last completed %s competition: %s [id: %d]", kind.name, most_recent.title, most_recent.id)
        return self.fetch_competition_data(kind, most_recent)

    def find_hunt(self, competition_id: int) -> CompetitionData:
        try:
            detail = self.client.fetch_competition_detail(competition_id)
            return self.to_competition_data(HUNT, detail)
        except Exception as err:
            raise SelectionAbortedError(HUNT.name, competition_id, f"hunt sync failed: {err}") from err

    def select(
        self,
        kind: type[EventKind],
        competitions: list[CompetitionSummary],
        now: datetime.datetime,
    ) -> tuple[CompetitionData | None, bool]:
        """
        Active competition first, then the last completed one. Returns the data and
        whether it is active. Any failure aborts the selection for this kind.
        """
        try:
            data = self.find_active(kind, competitions, now)
            if data is not None:
                return data, True
            return self.find_last_completed(kind, competitions, now), False
        except SelectionAbortedError:
            raise
        except Exception as err:
            raise SelectionAbortedError(kind.name, None, f"selection failed: {err}") from err

    def fetch_competition_data(self, kind: type[EventKind], summary: CompetitionSummary) -> CompetitionData:
        try:
            detail = self.client.fetch_competition_detail(summary.id)
            # keep the window the selection was made on
            return self.to_competition_data(kind, detail, starts_at=summary.starts_at, ends_at=summary.ends_at)
        except Exception as err:
            raise SelectionAbortedError(kind.name, summary.id, f"detail sync failed: {err}") from err

    @staticmethod
    def to_competition_data(
        kind: type[EventKind],
        detail: CompetitionDetail,
        *,
        starts_at: datetime.datetime | None = None,
        ends_at: datetime.datetime | None = None,
    ) -> CompetitionData:
        leaderboard = None
        teams = None
        if kind is HUNT:
            teams = split_into_teams(detail)
        else:
            leaderboard = rank_leaderboard(detail)
        return CompetitionData(
            competition_id=detail.id,
            title=detail.title,
            starts_at=starts_at or detail.starts_at,
            ends_at=ends_at or detail.ends_at,
            leaderboard=leaderboard,
            teams=teams,
        )
