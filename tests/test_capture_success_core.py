from __future__ import annotations

import pytest

from ghost_battle.capture_success import CaptureMode, CaptureSuccessPanel
from ghost_battle.records import BaseStats, GhostType, OwnedGhost

_STATS = BaseStats(hp=30, attack=10, defense=10, speed=10)


def _ghost(ghost_id: str) -> OwnedGhost:
    return OwnedGhost(id=ghost_id, species_id="sparkwisp", level=5, current_hp=30, max_hp=30, stats=_STATS)


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def panel(self, party_size: int, *, party_limit: int = 6) -> CaptureSuccessPanel:
        return CaptureSuccessPanel(
            captured=_ghost("wild"),
            party=[_ghost(f"p{i}") for i in range(party_size)],
            species_name=lambda _s: "Sparkwisp",
            species_type=lambda _s: GhostType.ELECTRIC,
            on_add_to_party=lambda: self.calls.append(("add", None)),
            on_send_to_box=lambda: self.calls.append(("box", None)),
            on_swap_with_party=lambda i: self.calls.append(("swap", i)),
            party_limit=party_limit,
        )


def test_room_in_party_adds_on_confirm() -> None:
    rec = _Recorder()
    panel = rec.panel(3)
    assert panel.mode is CaptureMode.SUCCESS
    assert panel.selected_index is None
    panel.feed("ArrowDown")
    panel.feed("Escape")
    assert rec.calls == []
    panel.feed("Enter")
    assert rec.calls == [("add", None)]
    assert panel.fulfilled is True


def test_full_party_starts_in_choice_on_send_to_box() -> None:
    rec = _Recorder()
    panel = rec.panel(6)
    assert panel.party_full is True
    assert panel.mode is CaptureMode.CHOICE
    assert panel.selected_index == 0
    panel.feed("Enter")
    assert rec.calls == [("box", None)]


def test_choice_swap_cancel_round_trip_resets_cursor() -> None:
    rec = _Recorder()
    panel = rec.panel(6)
    panel.feed("ArrowDown")
    panel.feed("Enter")
    assert panel.mode is CaptureMode.SWAP
    assert panel.selected_index == 0

    panel.feed("ArrowUp")
    assert panel.selected_index == 6
    panel.feed("Escape")
    assert panel.mode is CaptureMode.CHOICE
    assert panel.selected_index == 0
    assert rec.calls == []


def test_swap_back_row_returns_to_choice() -> None:
    rec = _Recorder()
    panel = rec.panel(2, party_limit=2)
    panel.activate(1)
    assert panel.mode is CaptureMode.SWAP
    panel.activate(2)
    assert panel.mode is CaptureMode.CHOICE
    assert panel.selected_index == 0
    assert rec.calls == []


def test_swap_emits_party_index_once() -> None:
    rec = _Recorder()
    panel = rec.panel(6)
    panel.activate(1)
    panel.feed("ArrowDown")
    panel.feed(None)
    panel.feed("ArrowDown")
    panel.feed("Enter")
    assert rec.calls == [("swap", 2)]
    panel.feed("Escape")
    panel.activate(0)
    assert rec.calls == [("swap", 2)]


def test_choice_cancel_is_no_op() -> None:
    rec = _Recorder()
    panel = rec.panel(6)
    panel.feed("ArrowDown")
    panel.feed("Escape")
    assert panel.mode is CaptureMode.CHOICE
    assert panel.selected_index == 1


def test_snapshot_per_mode() -> None:
    rec = _Recorder()
    panel = rec.panel(6)
    assert [r.label for r in panel.snapshot().rows] == ["Send to box", "Swap with a party ghost"]
    panel.activate(1)
    snap = panel.snapshot()
    assert snap.state == "swap"
    assert len(snap.rows) == 7
    assert snap.rows[-1].label == "Back"


def test_invalid_party_limit() -> None:
    with pytest.raises(ValueError):
        _Recorder().panel(0, party_limit=0)
