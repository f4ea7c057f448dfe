import json

import pytest

from courtside.cli import COMMANDS, ScorekeeperSession, create_main_parser, main


@pytest.fixture
def session(individual_config, make_night):
    night = make_night(individual_config(6, 1))
    night.start()
    return ScorekeeperSession(night)


def test_show_lists_the_court_and_who_sits_out(session):
    output = session.execute("show")
    assert "Round 1: 1 match(es) in play" in output
    assert "#1 court 1" in output
    assert "Sitting out: P5, P6" in output


def test_set_score(session):
    output = session.execute("set 1 a 10")
    assert "[10] vs [6]" in output
    assert session.snapshot.active_match(1).scores == (10, 6)


def test_bad_score_reports_the_error(session):
    output = session.execute("set 1 A 40")
    assert "between 0 and 16" in output
    assert session.night.get_match(1).scores == (0, 0)


def test_bad_arguments_print_usage(session):
    assert COMMANDS["inc"]["usage"] in session.execute("inc 1 C")
    assert COMMANDS["set"]["usage"] in session.execute("set 1 A")
    assert COMMANDS["done"]["usage"] in session.execute("done one")


def test_unknown_command(session):
    assert "Unknown command: serve" in session.execute("serve")
    assert session.execute("   ") == ""


def test_done_then_next_round(session):
    session.execute("inc 1 B")
    assert "Completed #1" in session.execute("done 1")
    assert "No active match with id 1" in session.execute("done 1")

    output = session.execute("next")
    assert "Completed 0 match(es)" in output
    assert "Round 2" in output

    history = session.execute("history")
    assert "R1 #1" in history


def test_reroll_and_save(session, tmp_path):
    assert "#2 court 1" in session.execute("reroll")
    path = tmp_path / "night.json"
    assert "Saved to" in session.execute(f"save {tmp_path / 'night'}")
    assert json.loads(path.read_text())["round_number"] == 1


def test_help_and_quit(session):
    assert "Available Commands" in session.execute("help")
    assert not session.finished
    session.execute("quit")
    assert session.finished


def test_simulate_json(capsys):
    exit_code = main(
        ["simulate", "--players", "9", "--courts", "2", "--rounds", "12", "--seed", "3", "--json"]
    )

    report = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert report["rounds_played"] == 12
    assert report["violations"] == []
    assert report["max_idle_streak"] <= 1


def test_simulate_reports_starvation(capsys):
    exit_code = main(["simulate", "--players", "13", "--courts", "1", "--rounds", "8"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Never scheduled: Player-009" in output


def test_simulate_too_few_players(capsys):
    assert main(["simulate", "--players", "3", "--rounds", "2"]) == 1
    assert "Simulation failed" in capsys.readouterr().out


def test_play_requires_a_roster():
    with pytest.raises(SystemExit):
        main(["play"])


def test_parser_defaults():
    args = create_main_parser().parse_args(["simulate"])
    assert args.players == 10
    assert args.pattern == "complementary"


def test_play_with_a_missing_roster(tmp_path, capsys):
    assert main(["play", str(tmp_path / "missing.json")]) == 1
    assert "Cannot start" in capsys.readouterr().out


def test_play_with_an_invalid_roster(tmp_path, capsys):
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps({"participants": ["Ann", "Ann"]}))
    assert main(["play", str(roster)]) == 1
    assert "Duplicate participant" in capsys.readouterr().out


def test_play_with_a_roster_too_small(tmp_path, capsys):
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps({"participants": ["Ann", "Bob", "Cid"]}))
    assert main(["play", str(roster)]) == 1
    assert "Cannot start" in capsys.readouterr().out
