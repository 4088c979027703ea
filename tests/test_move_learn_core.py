from __future__ import annotations

import pytest

from ghost_battle.move_learn import DECLINE_LEARN, LearnMode, MoveLearnPanel
from ghost_battle.records import GhostType, Move, OwnedMove

_MOVES = {
    m.id: m
    for m in (
        Move(id="tackle", name="Tackle", type=GhostType.NORMAL, power=40, accuracy=100, pp=35),
        Move(id="ember", name="Ember", type=GhostType.FIRE, power=40, accuracy=100, pp=25),
        Move(id="scratch", name="Scratch", type=GhostType.NORMAL, power=40, accuracy=100, pp=35),
        Move(id="fire-spin", name="Fire Spin", type=GhostType.FIRE, power=35, accuracy=85, pp=15),
    )
}
_NEW = Move(id="flame", name="Flame", type=GhostType.FIRE, power=90, accuracy=100, pp=10)


def _owned(*ids: str) -> list[OwnedMove]:
    return [OwnedMove(move_id=i, current_pp=5, max_pp=10) for i in ids]


def _panel(moves: list[OwnedMove], out: list[int]) -> MoveLearnPanel:
    return MoveLearnPanel(
        ghost_name="Fireling",
        new_move=_NEW,
        current_moves=moves,
        move_lookup=_MOVES.get,
        on_learn_move=out.append,
    )


def test_learn_with_free_slot_uses_next_index() -> None:
    out: list[int] = []
    panel = _panel(_owned("tackle", "ember"), out)
    panel.feed("Enter")
    assert out == [2]
    assert panel.last_outcome == "learn"


def test_decline_from_confirm_stage() -> None:
    out: list[int] = []
    panel = _panel(_owned("tackle"), out)
    panel.feed("ArrowDown")
    panel.feed("Enter")
    assert out == [DECLINE_LEARN]


def test_full_slots_open_select_and_replace() -> None:
    out: list[int] = []
    panel = _panel(_owned("tackle", "ember", "scratch", "fire-spin"), out)
    assert panel.slots_full is True
    panel.feed("Enter")
    assert panel.mode is LearnMode.SELECT
    assert panel.selected_index == 0
    assert out == []

    panel.feed("ArrowUp")
    assert panel.selected_index == panel.decline_index == 4
    panel.feed(None)
    panel.feed("ArrowUp")
    panel.feed("Enter")
    assert out == [3]


def test_select_escape_returns_to_confirm_and_trailing_slot_declines() -> None:
    out: list[int] = []
    panel = _panel(_owned("tackle", "ember", "scratch", "fire-spin"), out)
    panel.feed("Enter")
    panel.feed("ArrowDown")
    panel.feed("Escape")
    assert panel.mode is LearnMode.CONFIRM
    assert panel.selected_index == 0

    panel.feed("Enter")
    panel.activate(4)
    assert out == [DECLINE_LEARN]


def test_unknown_moves_are_not_drawn_but_slot_stays_addressable() -> None:
    out: list[int] = []
    panel = _panel(_owned("tackle", "mystery", "scratch", "ember"), out)
    panel.activate(0)
    labels = [r.label for r in panel.snapshot().rows]
    assert labels == ["Tackle", "Scratch", "Ember", "Give up"]
    panel.activate(1)
    assert out == [1]


def test_confirm_cancel_is_no_op() -> None:
    out: list[int] = []
    panel = _panel(_owned("tackle"), out)
    panel.feed("Escape")
    assert panel.mode is LearnMode.CONFIRM
    assert out == []


def test_rejects_zero_slots() -> None:
    with pytest.raises(ValueError):
        MoveLearnPanel(
            ghost_name="x",
            new_move=_NEW,
            current_moves=[],
            move_lookup=_MOVES.get,
            on_learn_move=lambda _i: None,
            max_move_slots=0,
        )
