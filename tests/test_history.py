from datetime import datetime, timezone

import pytest

from courtside.models import HistoryLog, Match, MatchSide, MatchStatus


def _completed(match_id, round_number=1):
    return Match(
        id=match_id,
        round_number=round_number,
        court=1,
        side_a=MatchSide(("Ann", "Bob"), score=10),
        side_b=MatchSide(("Cid", "Dee"), score=6),
        status=MatchStatus.COMPLETED,
        completed_at=datetime(2025, 3, 4, 20, match_id, tzinfo=timezone.utc),
    )


def test_newest_first():
    history = HistoryLog()
    for match_id in (1, 2, 3):
        history.prepend(_completed(match_id))

    assert [m.id for m in history] == [3, 2, 1]
    assert history.latest.id == 3
    assert 2 in history
    assert len(history) == 3


def test_rejects_active_matches():
    match = _completed(1)
    match.status = MatchStatus.ACTIVE
    with pytest.raises(ValueError):
        HistoryLog().prepend(match)


def test_rejects_duplicate_ids():
    history = HistoryLog()
    history.prepend(_completed(1))
    with pytest.raises(ValueError):
        history.prepend(_completed(1))
    assert len(history) == 1


def test_for_round():
    history = HistoryLog()
    history.prepend(_completed(1, round_number=1))
    history.prepend(_completed(2, round_number=2))
    history.prepend(_completed(3, round_number=2))

    assert [m.id for m in history.for_round(2)] == [3, 2]
    assert history.for_round(5) == []


def test_restores_in_the_same_order():
    history = HistoryLog()
    for match_id in (1, 2, 3):
        history.prepend(_completed(match_id))

    restored = HistoryLog.from_dict(history.to_dict())

    assert [m.id for m in restored] == [3, 2, 1]
    assert restored.latest.completed_at == history.latest.completed_at


def test_record_row_for_the_match_log():
    record = _completed(7).to_record()

    assert record.winning_side == "A"
    assert record.to_row() == [
        "7",
        "Ann & Bob",
        "10",
        "Cid & Dee",
        "6",
        "Ann & Bob",
        "2025-03-04T20:07:00+00:00",
    ]


def test_tie_has_no_winner():
    match = _completed(1)
    match.side_a.score = 8
    match.side_b.score = 8

    record = match.to_record()

    assert record.winning_side is None
    assert record.winner_names is None
    assert record.to_row()[5] == ""


def test_sides_cannot_share_players():
    with pytest.raises(ValueError):
        Match(1, 1, 1, MatchSide(("Ann", "Bob")), MatchSide(("Bob", "Cid")))
