"""Scripted key-token replays through the input channel, the way the shell drives panels."""

from __future__ import annotations

from ghost_battle.capture_success import CaptureSuccessPanel
from ghost_battle.dispatch import InputChannel
from ghost_battle.level_up import process_level_up
from ghost_battle.move_learn import MoveLearnPanel
from ghost_battle.records import ItemCategory
from ghost_battle.sample_data import (
    MOVES,
    SPECIES,
    inventory_lines,
    make_ghost,
    move_lookup,
    species_name,
    species_type,
)
from ghost_battle.selection_panels import build_capture_item_panel
from ghost_battle.victory import VictoryPanel, VictoryPhase


def _replay(panel, tokens: list[str]) -> int:
    channel = InputChannel()
    for token in tokens:
        channel.post(token)
    frames = 0
    while channel.pump(panel.feed) is not None:
        frames += 1
    return frames


def test_capture_item_scripted_back() -> None:
    outcomes: list[object] = []
    items = inventory_lines(ItemCategory.CAPTURE)
    assert [line.usable for line in items] == [True, True, False]

    panel = build_capture_item_panel(items, on_select_item=outcomes.append, on_back=lambda: outcomes.append("back"))
    frames = _replay(panel, ["ArrowDown", "ArrowDown", "Enter", "ArrowDown", "Enter", "Enter"])
    assert frames == 6
    assert outcomes == ["back"]


def test_full_party_capture_then_swap() -> None:
    party = [make_ghost(f"g{i}", "fireling", level=5, move_ids=("tackle",)) for i in range(6)]
    captured = make_ghost("wild", "sparkwisp", level=7, move_ids=("quick-attack",))
    outcomes: list[object] = []
    panel = CaptureSuccessPanel(
        captured=captured,
        party=party,
        species_name=species_name,
        species_type=species_type,
        on_add_to_party=lambda: outcomes.append("add"),
        on_send_to_box=lambda: outcomes.append("box"),
        on_swap_with_party=outcomes.append,
    )
    _replay(panel, ["s", "Enter", "Escape", "ArrowDown", "Enter", "ArrowUp", "ArrowUp", " "])
    assert outcomes == [5]


def test_victory_level_up_feeds_move_learning() -> None:
    species = SPECIES["fireling"]
    ghost = make_ghost("g1", "fireling", level=15, move_ids=("tackle", "ember", "fire-spin", "scratch"))
    result = process_level_up(
        old_level=7, new_level=15, base_stats=species.base_stats, learnable_moves=species.learnable_moves
    )
    learned: list[tuple[str, int]] = []
    offered: list[str] = []
    continued: list[bool] = []

    def learn(move_id: str) -> None:
        offered.append(move_id)
        prompt = MoveLearnPanel(
            ghost_name=ghost.display_name(species_name),
            new_move=MOVES[move_id],
            current_moves=ghost.moves,
            move_lookup=move_lookup,
            on_learn_move=lambda slot: learned.append((move_id, slot)),
        )
        _replay(prompt, ["Enter", "ArrowDown", "Enter"])

    panel = VictoryPanel(
        ghost_name="Fireling",
        ghost_type=species.type,
        exp_gained=300,
        leveled_up=True,
        level_up_result=result,
        previous_level=7,
        on_learn_move=learn,
        on_continue=lambda: continued.append(True),
    )
    _replay(panel, ["Enter"] * 5)
    assert panel.phase is VictoryPhase.DONE
    assert offered == ["fire-spin", "scratch"]
    assert learned == [("fire-spin", 1), ("scratch", 1)]
    assert continued == []

    _replay(panel, ["Enter", "Enter"])
    assert continued == [True]
