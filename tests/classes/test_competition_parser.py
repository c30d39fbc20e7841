import datetime

from wom_sync.classes.colors import DEFAULT_COLOR
from wom_sync.classes.competition import CompetitionDetail, Participant, RankedEntry
from wom_sync.classes.competition_parser import rank_leaderboard, split_into_teams, team_names

UTC = datetime.timezone.utc


def _detail(participants):
    return CompetitionDetail(
        id=1,
        title="Test",
        starts_at=datetime.datetime(2026, 3, 1, tzinfo=UTC),
        ends_at=datetime.datetime(2026, 3, 8, tzinfo=UTC),
        participants=participants,
    )


def _member(name, team, gained):
    return Participant(username=name.lower(), display_name=name, team_name=team, gained=gained)


def test_rank_leaderboard_is_stable_descending():
    detail = _detail(
        [
            Participant(username="first5", gained=5),
            Participant(username="second5", gained=5),
            Participant(username="three", gained=3),
            Participant(username="eight", gained=8),
        ]
    )

    assert rank_leaderboard(detail) == [
        RankedEntry("eight", 8),
        RankedEntry("first5", 5),
        RankedEntry("second5", 5),
        RankedEntry("three", 3),
    ]


def test_rank_leaderboard_truncates_to_ten_and_uses_whole_numbers():
    detail = _detail([Participant(username=f"p{i}", gained=i + 0.9) for i in range(15)])

    leaderboard = rank_leaderboard(detail)

    assert len(leaderboard) == 10
    assert leaderboard[0] == RankedEntry("p14", 14)
    assert leaderboard[-1] == RankedEntry("p5", 5)
    assert all(isinstance(entry.score, int) for entry in leaderboard)


def test_rank_leaderboard_falls_back_to_display_name():
    detail = _detail([Participant(display_name="Only Display", gained=1)])

    assert rank_leaderboard(detail) == [RankedEntry("Only Display", 1)]


def test_rank_leaderboard_empty():
    assert rank_leaderboard(_detail([])) == []


def test_team_total_counts_every_member_not_just_the_leaderboard():
    members = [_member("A", "Team Red", 2.0), _member("B", "Team Red", 3.0), _member("C", "Team Red", 100.0)]
    others = [_member("Z", "Team Blue", 1.0)]

    split = split_into_teams(_detail(members + others))

    red = split.team_1
    assert red.name == "Team Red"
    assert red.color == "#FF0000"
    assert [entry.name for entry in red.leaderboard] == ["C", "B", "A"]
    assert red.total_score == 105


def test_team_total_includes_members_below_the_top_ten():
    members = [_member(f"R{i}", "Team Red", 1.0) for i in range(12)]
    members.append(_member("Blue", "Team Blue", 0.4))

    split = split_into_teams(_detail(members))

    assert len(split.team_1.leaderboard) == 10
    assert split.team_1.total_score == 12
    assert split.team_2.total_score == 0


def test_team_total_rounds_half_up():
    split = split_into_teams(_detail([_member("A", "Gold", 2.5), _member("B", "Silver", 1.25)]))

    assert split.team_1.total_score == 3
    assert split.team_2.total_score == 1
    assert split.team_1.color == "#FFD700"
    assert split.team_2.color == "#C0C0C0"


def test_teams_are_picked_in_first_seen_order():
    participants = [
        _member("A", "Blue Jays", 1),
        _member("B", "", 50),
        _member("C", "Red Wings", 2),
        _member("D", "Green Giants", 3),
    ]

    assert team_names(participants) == ["Blue Jays", "Red Wings", "Green Giants"]
    split = split_into_teams(_detail(participants))
    assert (split.team_1.name, split.team_2.name) == ("Blue Jays", "Red Wings")
    assert [entry.name for entry in split.team_2.leaderboard] == ["C"]


def test_fewer_than_two_teams_falls_back_to_placeholders():
    split = split_into_teams(_detail([_member("A", "Team Red", 10), _member("B", "", 5)]))

    assert (split.team_1.name, split.team_2.name) == ("Team 1", "Team 2")
    assert split.team_1.color == split.team_2.color == DEFAULT_COLOR
    assert split.team_1.leaderboard == [] and split.team_2.leaderboard == []
    assert split.team_1.total_score == split.team_2.total_score == 0
