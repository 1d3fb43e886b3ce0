import pytest
from pydantic import ValidationError

from sweepgen.models import Match, MatchCompetitor, MatchEvent, Participant, Sweepstake, Team, participant_summary


def test_team_is_frozen_and_stripped():
    team = Team(id=" A ", name=" Alpha ")

    assert team.id == "A"
    assert team.name == "Alpha"
    with pytest.raises(ValidationError):
        team.name = "Beta"


def test_match_event_bounds():
    with pytest.raises(ValidationError):
        MatchEvent(player_name="Jones", minute=0)
    with pytest.raises(ValidationError):
        MatchEvent(player_name="Jones", minute=5, offset=-1)


def test_match_runner_up():
    home, away = Team(id="A"), Team(id="B")
    match = Match(id="F", home=MatchCompetitor(team=home), away=MatchCompetitor(team=away), winner=away)

    assert match.is_final
    assert match.runner_up() == home
    assert Match(id="A1").runner_up() is None


def test_participant_accepts_wire_alias():
    participant = Participant.model_validate({"team_id": "A", "participant_name": "John Connor"})

    assert participant.name == "John Connor"
    assert Sweepstake(participants=[participant]).participant_by_team_id("A") is participant


def test_participant_summary():
    team = Team(id="A", name="Alpha")

    assert participant_summary(team, Participant(team_id="A", name="John")) == "John (Alpha)"
    assert participant_summary(team, Participant(team_id="A")) == "Alpha"
    assert participant_summary(team, None) == "Alpha"
