import datetime

import pytest

from wom_sync.classes.competition import CompetitionDetail, CompetitionSummary, Participant
from wom_sync.classes.competition_finder import CompetitionFinder
from wom_sync.classes.event_kind import BOTM, HUNT, SOTW
from wom_sync.errors import MalformedResponseError, SelectionAbortedError, TransportError

UTC = datetime.timezone.utc
NOW = datetime.datetime(2026, 3, 10, 12, tzinfo=UTC)


def _at(days):
    return NOW + datetime.timedelta(days=days)


def _summary(competition_id, title, start_days, end_days):
    return CompetitionSummary(competition_id, title, _at(start_days), _at(end_days))


class FakeClient:
    def __init__(self, details=None, errors=None):
        self.details = details or {}
        self.errors = errors or {}
        self.requested = []

    def fetch_competition_detail(self, competition_id):
        self.requested.append(competition_id)
        if competition_id in self.errors:
            raise self.errors[competition_id]
        if competition_id in self.details:
            return self.details[competition_id]
        return CompetitionDetail(
            id=competition_id,
            title=f"detail {competition_id}",
            starts_at=_at(-1),
            ends_at=_at(1),
            participants=[Participant(username="p1", gained=10), Participant(username="p2", gained=20)],
        )


def test_find_active_returns_first_title_match_in_window():
    competitions = [
        _summary(1, "sotwish marathon", -1, 1),
        _summary(2, "SOTW upcoming", 1, 3),
        _summary(3, "SOTW Round 3", -2, 2),
        _summary(4, "SOTW Round 4", -1, 5),
    ]
    client = FakeClient()

    data = CompetitionFinder(client).find_active(SOTW, competitions, NOW)

    assert data.competition_id == 3
    assert client.requested == [3]
    assert [entry.name for entry in data.leaderboard] == ["p2", "p1"]
    assert data.teams is None


def test_find_active_window_is_start_inclusive_end_exclusive():
    starting_now = CompetitionSummary(1, "BOTM", NOW, _at(1))
    ending_now = CompetitionSummary(2, "BOTM", _at(-1), NOW)
    finder = CompetitionFinder(FakeClient())

    assert finder.find_active(BOTM, [ending_now, starting_now], NOW).competition_id == 1
    assert finder.find_active(BOTM, [ending_now], NOW) is None


def test_find_active_keeps_listing_window():
    client = FakeClient()

    data = CompetitionFinder(client).find_active(SOTW, [_summary(5, "SOTW", -3, 4)], NOW)

    assert (data.starts_at, data.ends_at) == (_at(-3), _at(4))
    assert data.title == "detail 5"


def test_find_last_completed_picks_latest_end():
    competitions = [
        _summary(1, "SOTW 1", -20, -10),
        _summary(2, "SOTW 2", -15, -5),
        _summary(3, "BOTM 9", -8, -1),
        _summary(4, "SOTW future", 2, 9),
    ]
    client = FakeClient()

    data = CompetitionFinder(client).find_last_completed(SOTW, competitions, NOW)

    assert data.competition_id == 2
    assert client.requested == [2]


def test_find_last_completed_counts_end_equal_to_now():
    competitions = [_summary(1, "BOTM 1", -9, -3), CompetitionSummary(2, "BOTM 2", _at(-2), NOW)]

    data = CompetitionFinder(FakeClient()).find_last_completed(BOTM, competitions, NOW)

    assert data.competition_id == 2


def test_find_last_completed_none_and_hunt():
    client = FakeClient()
    finder = CompetitionFinder(client)

    assert finder.find_last_completed(SOTW, [_summary(1, "BOTM 1", -9, -3)], NOW) is None
    assert finder.find_last_completed(HUNT, [_summary(1, "The Hunt", -9, -3)], NOW) is None
    assert client.requested == []


def test_select_prefers_active_then_falls_back():
    finder = CompetitionFinder(FakeClient())
    past = _summary(1, "SOTW 1", -9, -3)
    current = _summary(2, "SOTW 2", -1, 3)

    data, is_active = finder.select(SOTW, [past, current], NOW)
    assert (data.competition_id, is_active) == (2, True)

    data, is_active = finder.select(SOTW, [past], NOW)
    assert (data.competition_id, is_active) == (1, False)

    assert finder.select(SOTW, [], NOW) == (None, False)


@pytest.mark.parametrize(
    "error",
    [TransportError("u", "down"), MalformedResponseError("u", "bad"), RuntimeError("boom")],
)
def test_select_aborts_on_detail_failure(error):
    client = FakeClient(errors={2: error})
    competitions = [_summary(1, "SOTW 1", -9, -3), _summary(2, "SOTW 2", -1, 3)]

    with pytest.raises(SelectionAbortedError) as exc_info:
        CompetitionFinder(client).select(SOTW, competitions, NOW)

    assert exc_info.value.kind == "SOTW"
    assert exc_info.value.competition_id == 2
    assert exc_info.value.__cause__ is error
    # no fallback to the completed competition once the active one failed
    assert client.requested == [2]


def test_select_aborts_on_bad_list_entry():
    competitions = [_summary(1, "SOTW 1", -9, -3), object()]

    with pytest.raises(SelectionAbortedError) as exc_info:
        CompetitionFinder(FakeClient()).select(SOTW, competitions, NOW)

    assert exc_info.value.competition_id is None


def test_find_hunt_splits_teams():
    detail = CompetitionDetail(
        id=100262,
        title="The Hunt",
        starts_at=_at(-5),
        ends_at=_at(-1),
        participants=[
            Participant(display_name="A", team_name="Team Gold", gained=4.5),
            Participant(display_name="B", team_name="Team Silver", gained=1.0),
        ],
    )
    client = FakeClient(details={100262: detail})

    data = CompetitionFinder(client).find_hunt(100262)

    assert data.title == "The Hunt"
    assert data.leaderboard is None
    assert data.teams.team_1.name == "Team Gold"
    assert data.teams.team_2.color == "#C0C0C0"
    assert not data.is_active(NOW)
    assert data.has_ended(NOW)


def test_find_hunt_aborts_with_kind_and_id():
    error = TransportError("u", "down")
    client = FakeClient(errors={5: error})

    with pytest.raises(SelectionAbortedError) as exc_info:
        CompetitionFinder(client).find_hunt(5)

    assert exc_info.value.kind == "HUNT"
    assert exc_info.value.competition_id == 5
    assert exc_info.value.__cause__ is error


def test_ranking_failure_keeps_competition_id():
    detail = CompetitionDetail(
        id=2,
        title="SOTW 2",
        starts_at=_at(-1),
        ends_at=_at(3),
        participants=[Participant(username="p1", gained=float("inf"))],
    )
    competitions = [_summary(2, "SOTW 2", -1, 3)]

    with pytest.raises(SelectionAbortedError) as exc_info:
        CompetitionFinder(FakeClient(details={2: detail})).select(SOTW, competitions, NOW)

    assert exc_info.value.kind == "SOTW"
    assert exc_info.value.competition_id == 2
    assert isinstance(exc_info.value.__cause__, OverflowError)
