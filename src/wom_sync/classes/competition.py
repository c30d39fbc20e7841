"""Objects representing Wise Old Man competitions and the records derived from them."""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from typing import Any


def parse_instant(value: Any) -> datetime.datetime:
    """Parse an ISO-8601 instant (``...Z`` or with offset) into an aware UTC datetime."""
    if isinstance(value, datetime.datetime):
        parsed = value
    else:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Not an ISO-8601 instant: {value!r}")
        parsed = datetime.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def format_instant(value: datetime.datetime) -> str:
    value = value.astimezone(datetime.timezone.utc)
    return value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def in_window(starts_at: datetime.datetime, ends_at: datetime.datetime, now: datetime.datetime) -> bool:
    return starts_at <= now < ends_at


@dataclass(frozen=True)
class CompetitionSummary:
    """One entry of the group competitions listing."""

    id: int
    title: str
    starts_at: datetime.datetime
    ends_at: datetime.datetime

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> CompetitionSummary:
        title = payload["title"]
        if not isinstance(title, str):
            raise TypeError(f"title must be a string, got {type(title).__name__}")
        return cls(
            id=int(payload["id"]),
            title=title,
            starts_at=parse_instant(payload["startsAt"]),
            ends_at=parse_instant(payload["endsAt"]),
        )

    def is_active(self, now: datetime.datetime) -> bool:
        return in_window(self.starts_at, self.ends_at, now)

    def has_ended(self, now: datetime.datetime) -> bool:
        return self.ends_at <= now


@dataclass(frozen=True)
class Participant:
    username: str = ""
    display_name: str = ""
    team_name: str = ""
    gained: float = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Participant:
        if not isinstance(payload, dict):
            raise TypeError(f"participation must be an object, got {type(payload).__name__}")
        player = payload.get("player") or {}
        progress = payload.get("progress") or {}
        gained = progress.get("gained")
        gained = float(gained) if gained is not None else 0
        if not math.isfinite(gained):
            raise ValueError(f"gained must be a finite number, got {gained}")
        return cls(
            username=str(player.get("username") or ""),
            display_name=str(player.get("displayName") or ""),
            team_name=str(payload.get("teamName") or ""),
            gained=gained,
        )


@dataclass(frozen=True)
class CompetitionDetail(CompetitionSummary):
    """A competition as returned by the detail endpoint, participants included."""

    participants: list[Participant] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> CompetitionDetail:
        summary = CompetitionSummary.from_payload(payload)
        participations = payload.get("participations") or []
        if not isinstance(participations, list):
            raise TypeError("participations must be an array")
        return cls(
            id=summary.id,
            title=summary.title,
            starts_at=summary.starts_at,
            ends_at=summary.ends_at,
            participants=[Participant.from_payload(p) for p in participations],
        )


@dataclass(frozen=True)
class RankedEntry:
    name: str
    score: float


@dataclass(frozen=True)
class Team:
    name: str
    color: str
    leaderboard: list[RankedEntry] = field(default_factory=list)
    total_score: int = 0


@dataclass(frozen=True)
class TeamSplit:
    team_1: Team
    team_2: Team

    @property
    def teams(self) -> tuple[Team, Team]:
        return (self.team_1, self.team_2)


@dataclass(frozen=True)
class CompetitionData:
    """Everything persisted for one event kind after a sync cycle."""

    competition_id: int
    title: str
    starts_at: datetime.datetime
    ends_at: datetime.datetime
    leaderboard: list[RankedEntry] | None = None
    teams: TeamSplit | None = None

    def is_active(self, now: datetime.datetime) -> bool:
        return in_window(self.starts_at, self.ends_at, now)

    def has_ended(self, now: datetime.datetime) -> bool:
        return self.ends_at <= now
