"""Turn a competition detail payload into leaderboards and a two-team split."""

from __future__ import annotations

import logging
import math

from .colors import DEFAULT_COLOR, color_for
from .competition import CompetitionDetail, Participant, RankedEntry, Team, TeamSplit

logger = logging.getLogger(__name__)

TOP_PARTICIPANTS_COUNT = 10
PLACEHOLDER_TEAM_NAMES = ("Team 1", "Team 2")


def _top(entries: list[RankedEntry], limit: int) -> list[RankedEntry]:
    # sorted() is stable, so ties keep payload order
    return sorted(entries, key=lambda entry: entry.score, reverse=True)[:limit]


def rank_leaderboard(detail: CompetitionDetail, limit: int = TOP_PARTICIPANTS_COUNT) -> list[RankedEntry]:
    """Top participants by whole-number gain, highest first."""
    entries = [
        RankedEntry(p.username or p.display_name, int(p.gained))
        for p in detail.participants
    ]
    return _top(entries, limit)


def team_names(participants: list[Participant]) -> list[str]:
    """Distinct non-empty team names in the order they first appear."""
    seen: dict[str, None] = {}
    for participant in participants:
        if participant.team_name:
            seen.setdefault(participant.team_name, None)
    return list(seen)


def _placeholder_split() -> TeamSplit:
    name_1, name_2 = PLACEHOLDER_TEAM_NAMES
    return TeamSplit(Team(name_1, DEFAULT_COLOR), Team(name_2, DEFAULT_COLOR))


def _build_team(name: str, members: list[Participant], limit: int) -> Team:
    entries = [RankedEntry(p.display_name or p.username, float(p.gained)) for p in members]
    total = sum(entry.score for entry in entries)
    return Team(
        name=name,
        color=color_for(name),
        leaderboard=_top(entries, limit),
        # half rounds up
        total_score=int(math.floor(total + 0.5)),
    )


def split_into_teams(detail: CompetitionDetail, limit: int = TOP_PARTICIPANTS_COUNT) -> TeamSplit:
    """
    Partition participants into the first two teams seen. Each team gets its top
    ``limit`` leaderboard, while its total counts every member.
    """
    names = team_names(detail.participants)
    if len(names) < 2:
        logger.debug("competition %s has %d team(s); using placeholder teams", detail.id, len(names))
        return _placeholder_split()
    if len(names) > 2:
        logger.warning(
            "competition %s has %d teams; only %s and %s are tracked",
            detail.id,
            len(names),
            names[0],
            names[1],
        )

    name_1, name_2 = names[0], names[1]
    members_1 = [p for p in detail.participants if p.team_name == name_1]
    members_2 = [p for p in detail.participants if p.team_name == name_2]
    return TeamSplit(_build_team(name_1, members_1, limit), _build_team(name_2, members_2, limit))
