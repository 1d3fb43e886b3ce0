from datetime import datetime

from sweepgen.models import (
    Match,
    MatchCompetitor,
    MatchEvent,
    MatchStage,
    Participant,
    PrizeSettings,
    Rank,
    Sweepstake,
    Team,
    Tournament,
)
from sweepgen.prizes import (
    most_goals_conceded,
    most_yellow_cards,
    quickest_own_goal,
    quickest_red_card,
    tournament_runner_up,
    tournament_winner,
)


TEAMS = {team_id: Team(id=team_id, name=f"Team {team_id}", image_url=f"{team_id}.png") for team_id in "ABCD"}


def _side(team_id: str, goals: int = 0, yellows: int = 0, own_goals=(), red_cards=()) -> MatchCompetitor:
    return MatchCompetitor(
        team=TEAMS[team_id],
        goals=goals,
        yellow_cards=yellows,
        own_goals=list(own_goals),
        red_cards=list(red_cards),
    )


def _matches(final_completed: bool = True) -> list[Match]:
    return [
        Match(
            id="A1",
            timestamp=datetime(2018, 5, 26, 14, 0),
            stage=MatchStage.GROUP,
            home=_side("C", goals=2, own_goals=[MatchEvent(player_name="Jones", minute=12)]),
            away=_side("B", yellows=3, red_cards=[MatchEvent(player_name="Kyle", minute=30)]),
            winner=TEAMS["C"],
            completed=True,
        ),
        Match(
            id="A2",
            timestamp=datetime(2018, 5, 27, 14, 0),
            stage=MatchStage.GROUP,
            home=_side("D", goals=2, yellows=3, own_goals=[MatchEvent(player_name="Smith", minute=45, offset=5)]),
            away=_side("C"),
            winner=TEAMS["D"],
            completed=True,
        ),
        Match(
            id="A3",
            timestamp=datetime(2018, 5, 27, 18, 0),
            stage=MatchStage.GROUP,
            home=_side("A", red_cards=[MatchEvent(player_name="Early", minute=1)]),
            away=_side("D", goals=5),
            completed=False,
        ),
        Match(
            id="F",
            timestamp=datetime(2018, 5, 28, 20, 0),
            stage=MatchStage.KNOCKOUT,
            home=_side("A", goals=4, yellows=2),
            away=_side("B", goals=1, own_goals=[MatchEvent(player_name="DeeDee", minute=45, offset=4)]),
            winner=TEAMS["A"],
            completed=final_completed,
        ),
    ]


def _sweepstake(final_completed: bool = True) -> Sweepstake:
    tournament = Tournament(
        id="CUP",
        name="Cup",
        image_url="cup.png",
        teams=list(TEAMS.values()),
        matches=_matches(final_completed),
    )
    return Sweepstake(
        id="office",
        name="Office",
        image_url="office.png",
        tournament=tournament,
        participants=[
            Participant(team_id="A", name="Marc Pugh"),
            Participant(team_id="B", name=""),
            Participant(team_id="C", name="Miles Dyson"),
            Participant(team_id="D", name="Sarah Connor"),
        ],
        prizes=PrizeSettings(winner=True, runner_up=True),
    )


def test_tournament_winner_and_runner_up():
    sweepstake = _sweepstake()

    winner = tournament_winner(sweepstake)
    runner_up = tournament_runner_up(sweepstake)

    assert winner.name == "Tournament Winner"
    assert winner.participant_display == "Marc Pugh (Team A)"
    assert winner.image_url == "A.png"
    assert runner_up.name == "Tournament Runner-Up"
    assert runner_up.participant_display == "Team B"


def test_outright_prizes_are_tbc_until_final_completes():
    sweepstake = _sweepstake(final_completed=False)

    assert tournament_winner(sweepstake).participant_display == "TBC"
    assert tournament_runner_up(sweepstake).participant_display == "TBC"
    assert tournament_winner(sweepstake).image_url == ""


def test_most_goals_conceded_ranks_completed_matches_only():
    prize = most_goals_conceded(_sweepstake())

    assert prize.name == "Most Goals Conceded"
    assert prize.rankings == [
        Rank(position=1, image_url="B.png", participant_display="Team B", value_text="\u26bd\ufe0f 6"),
        Rank(position=2, image_url="C.png", participant_display="Miles Dyson (Team C)", value_text="\u26bd\ufe0f 2"),
        Rank(position=3, image_url="A.png", participant_display="Marc Pugh (Team A)", value_text="\u26bd\ufe0f 1"),
    ]


def test_most_yellow_cards_ties_keep_team_order():
    prize = most_yellow_cards(_sweepstake())

    assert [(rank.position, rank.participant_display, rank.value_text) for rank in prize.rankings] == [
        (1, "Team B", "\U0001f7e8\ufe0f 3"),
        (2, "Sarah Connor (Team D)", "\U0001f7e8\ufe0f 3"),
        (3, "Marc Pugh (Team A)", "\U0001f7e8\ufe0f 2"),
    ]


def test_quickest_own_goal_orders_by_minute_then_offset():
    prize = quickest_own_goal(_sweepstake())

    assert prize.name == "Quickest Own Goal"
    assert [rank.value_text for rank in prize.rankings] == [
        "\U0001f648 12' Jones (vs Team B 26/05)",
        "\U0001f648 45'+4 DeeDee (vs Team A 28/05)",
        "\U0001f648 45'+5 Smith (vs Team C 27/05)",
    ]
    assert [rank.participant_display for rank in prize.rankings] == [
        "Miles Dyson (Team C)",
        "Team B",
        "Sarah Connor (Team D)",
    ]
    assert all(rank.position is None for rank in prize.rankings)


def test_quickest_red_card_skips_incomplete_matches():
    prize = quickest_red_card(_sweepstake())

    assert prize.rankings == [
        Rank(image_url="B.png", participant_display="Team B", value_text="\U0001f7e5 30' Kyle (vs Team C 26/05)"),
    ]


def test_prizes_without_sweepstake_are_empty_defaults():
    assert tournament_winner(None).participant_display == "TBC"
    assert tournament_runner_up(Sweepstake()).participant_display == "TBC"
    assert most_goals_conceded(None).rankings == []
    assert most_yellow_cards(Sweepstake()).name == "Most Yellow Cards"
    assert quickest_own_goal(None).rankings == []
    assert quickest_red_card(None).name == "Quickest Red Card"
