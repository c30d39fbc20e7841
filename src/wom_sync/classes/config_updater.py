"""Persist selected competitions into the config store, writing only what changed."""

from __future__ import annotations

import json
import logging

from .competition import CompetitionData, RankedEntry, TeamSplit, format_instant
from .config_store import ConfigStore
from .event_kind import BOTM, HUNT, SOTW, EventKind

logger = logging.getLogger(__name__)


def leaderboard_to_json(leaderboard: list[RankedEntry], score_field: str, *, decimals: int | None = None) -> str:
    rows = []
    for entry in leaderboard:
        score = round(entry.score, decimals) if decimals is not None else entry.score
        rows.append({"username": entry.name, score_field: score})
    return json.dumps(rows, separators=(",", ":"))


class ConfigUpdater:
    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    def write_if_changed(self, key: str, value: str) -> bool:
        """Write value under key unless the store already holds exactly that value."""
        current = self.store.get(key)
        if current == value:
            return False
        self.store.set(key, value)
        logger.debug("updated %s", key)
        return True

    def get_config(self, key: str, default: str | None = None) -> str | None:
        value = self.store.get(key)
        return value if value else default

    def set_inactive(self, kind: type[EventKind]) -> None:
        """Flip only the active flag; title, times and leaderboards stay as last written."""
        self.write_if_changed(kind.key("Active"), "false")

    def update_event(
        self,
        kind: type[EventKind],
        data: CompetitionData,
        is_active: bool,
        wom_url: str,
    ) -> None:
        self.write_if_changed(kind.key("Title"), data.title)
        self.write_if_changed(kind.key("Active"), "true" if is_active else "false")
        self.write_if_changed(kind.key("_start_time"), format_instant(data.starts_at))
        self.write_if_changed(kind.key("_end_time"), format_instant(data.ends_at))
        self.write_if_changed(kind.key("_wom_link"), wom_url)

        if kind is BOTM:
            self.write_if_changed("botmWomUrl", wom_url)
        if kind is HUNT:
            self.write_if_changed("hunt_wom_url", wom_url)
            if data.teams is not None:
                self._save_teams(data.teams)
            return
        if kind in (SOTW, BOTM) and data.leaderboard is not None:
            self._save_leaderboard(kind, data.leaderboard, is_active)

    def _save_leaderboard(self, kind: type[EventKind], leaderboard: list[RankedEntry], is_active: bool) -> None:
        self.write_if_changed(kind.key("Leaderboard"), leaderboard_to_json(leaderboard, kind.score_field))
        if not is_active and leaderboard:
            self.write_if_changed(kind.key("_winner"), leaderboard[0].name)

    def _save_teams(self, teams: TeamSplit) -> None:
        for number, team in enumerate(teams.teams, start=1):
            prefix = f"hunt_team_{number}"
            self.write_if_changed(f"{prefix}_name", team.name)
            self.write_if_changed(f"{prefix}_color", team.color)
            self.write_if_changed(f"{prefix}_score", str(team.total_score))
            self.write_if_changed(
                f"{prefix}_leaderboard",
                leaderboard_to_json(team.leaderboard, HUNT.score_field, decimals=2),
            )
