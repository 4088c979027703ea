from __future__ import annotations

from ghost_battle.records import (
    BaseStats,
    GhostType,
    InventoryEntry,
    InventoryLine,
    Item,
    ItemCategory,
    Move,
    MoveLine,
    OwnedGhost,
    OwnedMove,
)
from ghost_battle.selection_panels import (
    SelectableEntry,
    SelectionListPanel,
    build_capture_item_panel,
    build_ghost_swap_panel,
    build_skill_select_panel,
)

_STATS = BaseStats(hp=30, attack=10, defense=10, speed=10)


def _ball(item_id: str, quantity: int, bonus: int = 0) -> InventoryLine:
    return InventoryLine(
        item=Item(id=item_id, name=item_id.title(), category=ItemCategory.CAPTURE, effect_value=bonus),
        entry=InventoryEntry(item_id=item_id, quantity=quantity),
    )


def _ghost(ghost_id: str, hp: int) -> OwnedGhost:
    return OwnedGhost(id=ghost_id, species_id="fireling", level=5, current_hp=hp, max_hp=30, stats=_STATS)


def _press(panel: SelectionListPanel, *tokens: str) -> None:
    # Clear between presses so repeated keys register.
    for token in tokens:
        panel.feed(token)
        panel.feed(None)


def test_capture_item_scenario_skips_empty_item_and_goes_back() -> None:
    selected: list[str] = []
    backs: list[bool] = []
    panel = build_capture_item_panel(
        [_ball("ghost-ball", 3), _ball("super-ball", 1, 50), _ball("hyper-ball", 0, 100)],
        on_select_item=selected.append,
        on_back=lambda: backs.append(True),
    )

    _press(panel, "ArrowDown", "ArrowDown")
    assert panel.selected_index == 2
    _press(panel, "Enter")
    assert selected == []
    assert backs == []
    assert panel.fulfilled is False

    _press(panel, "ArrowDown")
    assert panel.selected_index == panel.back_index == 3
    _press(panel, "Enter")
    assert backs == [True]
    assert selected == []
    assert panel.outcomes == ["back"]


def test_capture_item_select_emits_item_id() -> None:
    selected: list[str] = []
    panel = build_capture_item_panel(
        [_ball("ghost-ball", 3), _ball("super-ball", 1, 50)],
        on_select_item=selected.append,
        on_back=lambda: None,
    )
    _press(panel, "s", " ")
    assert selected == ["super-ball"]
    snap = panel.snapshot()
    assert snap.fulfilled is True
    assert snap.rows[1].detail == "+50%  x1"


def test_escape_goes_back_from_any_entry() -> None:
    backs: list[bool] = []
    panel = build_capture_item_panel(
        [_ball("ghost-ball", 3)], on_select_item=lambda _i: None, on_back=lambda: backs.append(True)
    )
    _press(panel, "Escape")
    assert backs == [True]


def test_empty_list_has_only_back_slot() -> None:
    backs: list[bool] = []
    panel = build_capture_item_panel([], on_select_item=lambda _i: None, on_back=lambda: backs.append(True))
    _press(panel, "ArrowDown", "ArrowUp")
    assert panel.selected_index == 0
    snap = panel.snapshot()
    assert [r.label for r in snap.rows] == ["Back"]
    assert "No capture items." in snap.lines
    _press(panel, "Enter")
    assert backs == [True]


def test_initial_index_is_clamped() -> None:
    panel = build_capture_item_panel(
        [_ball("ghost-ball", 3)], on_select_item=lambda _i: None, on_back=lambda: None, initial_index=7
    )
    assert panel.selected_index == 1


def test_pointer_on_disabled_entry_does_not_move_cursor() -> None:
    selected: list[str] = []
    panel = build_capture_item_panel(
        [_ball("ghost-ball", 3), _ball("hyper-ball", 0)], on_select_item=selected.append, on_back=lambda: None
    )
    panel.activate(1)
    assert panel.selected_index == 0
    assert selected == []
    panel.activate(0)
    assert selected == ["ghost-ball"]


def test_skill_select_disables_moves_without_pp() -> None:
    move = Move(id="ember", name="Ember", type=GhostType.FIRE, power=40, accuracy=100, pp=25)
    tackle = Move(id="tackle", name="Tackle", type=GhostType.NORMAL, power=40, accuracy=100, pp=35)
    chosen: list[str] = []
    panel = build_skill_select_panel(
        [
            MoveLine(move=move, owned=OwnedMove(move_id="ember", current_pp=0, max_pp=25)),
            MoveLine(move=tackle, owned=OwnedMove(move_id="tackle", current_pp=3, max_pp=35)),
        ],
        on_select_move=chosen.append,
        on_back=lambda: None,
    )
    assert [r.enabled for r in panel.snapshot().rows] == [False, True, True]
    _press(panel, "Enter")
    assert chosen == []
    _press(panel, "ArrowDown", "Enter")
    assert chosen == ["tackle"]


def test_ghost_swap_rejects_active_and_fainted_and_emits_index() -> None:
    chosen: list[int] = []
    panel = build_ghost_swap_panel(
        [_ghost("a", 30), _ghost("b", 0), _ghost("c", 12)],
        active_index=0,
        species_name=lambda _s: "Fireling",
        species_type=lambda _s: GhostType.FIRE,
        on_select_ghost=chosen.append,
        on_back=lambda: None,
    )
    rows = panel.snapshot().rows
    assert [r.enabled for r in rows] == [False, False, True, True]
    assert rows[0].detail.endswith("(in battle)")
    assert rows[1].detail.endswith("(fainted)")

    panel.activate(0)
    panel.activate(1)
    assert chosen == []
    _press(panel, "ArrowUp", "ArrowUp", "Enter")
    assert chosen == [2]


def test_generic_list_wraps_over_back_slot() -> None:
    panel = SelectionListPanel(
        [SelectableEntry(key="a", label="A"), SelectableEntry(key="b", label="B")],
        on_select=lambda _k: None,
        on_back=lambda: None,
    )
    _press(panel, "ArrowUp")
    assert panel.selected_index == 2
    _press(panel, "ArrowDown")
    assert panel.selected_index == 0
