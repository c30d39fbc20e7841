"""Tracked competition categories and how they are recognised."""

import re


class EventKind:
    """Base configuration for a tracked clan competition category."""

    name: str = ""
    keyword: str = ""
    config_prefix: str = ""

    # key used for the score of each entry in persisted leaderboard JSON
    score_field: str = "score"

    _title_pattern: re.Pattern | None = None

    @classmethod
    def get_title_pattern(cls) -> re.Pattern | None:
        """Return the compiled word-boundary pattern for the keyword."""
        if not cls.keyword:
            return None
        if cls._title_pattern is None:
            cls._title_pattern = re.compile(rf"\b{re.escape(cls.keyword)}\b", re.IGNORECASE)
        return cls._title_pattern

    @classmethod
    def matches_title(cls, title: str | None) -> bool:
        pattern = cls.get_title_pattern()
        if pattern is None or not title:
            return False
        return pattern.search(title) is not None

    @classmethod
    def key(cls, suffix: str) -> str:
        return f"{cls.config_prefix}{suffix}"


class SotwEvent(EventKind):
    """Skill of the week."""

    name = "SOTW"
    keyword = "sotw"
    config_prefix = "sotw"
    score_field = "xp"


class BotmEvent(EventKind):
    """Boss of the month."""

    name = "BOTM"
    keyword = "botm"
    config_prefix = "botm"
    score_field = "score"


class HuntEvent(EventKind):
    """The Hunt: a two-team event fetched by competition id, never by title."""

    name = "HUNT"
    config_prefix = "hunt"
    score_field = "ehb"


SOTW = SotwEvent
BOTM = BotmEvent
HUNT = HuntEvent

TITLE_MATCHED_KINDS: tuple[type[EventKind], ...] = (SOTW, BOTM)
