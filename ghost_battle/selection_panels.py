"""Indexed selection list panels: capture item, battle item, move and swap.

Every list carries a synthetic "Back" slot after its entries. Up/down wrap
over entries plus the back slot; confirming a disabled entry does nothing;
Escape always goes back.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .panel_core import ModalPanel, ModeSpec, PanelRow, PanelSnapshot
from .records import GhostType, InventoryLine, MoveLine, OwnedGhost


class ListMode(str, Enum):
    LIST = "list"


@dataclass(frozen=True, slots=True)
class SelectableEntry:
    key: str | int
    label: str
    enabled: bool = True
    detail: str = ""
    payload: object | None = None


class SelectionListPanel(ModalPanel[ListMode]):
    back_label = "Back"

    def __init__(
        self,
        entries: Sequence[SelectableEntry],
        *,
        on_select: Callable[[Any], None],
        on_back: Callable[[], None],
        initial_index: int = 0,
        name: str = "selection_list",
        title: str = "Select",
        empty_message: str = "Nothing to choose.",
    ) -> None:
        self._entries = tuple(entries)
        self._on_select = on_select
        self._on_back = on_back
        self.name = name
        self._title = title
        self._empty_message = empty_message
        super().__init__(
            modes={
                ListMode.LIST: ModeSpec(
                    size=lambda: len(self._entries) + 1,
                    on_confirm=self._confirm,
                    on_cancel=self._back,
                    is_enabled=self._entry_enabled,
                ),
            },
            initial_mode=ListMode.LIST,
            initial_index=initial_index,
        )

    @property
    def entries(self) -> tuple[SelectableEntry, ...]:
        return self._entries

    @property
    def back_index(self) -> int:
        return len(self._entries)

    def _entry_enabled(self, index: int) -> bool:
        if index == self.back_index:
            return True
        return self._entries[index].enabled

    def _confirm(self, index: int) -> None:
        if index == self.back_index:
            self._back()
            return
        self._emit("select", self._on_select, self._entries[index].key)

    def _back(self) -> None:
        self._emit("back", self._on_back)

    def snapshot(self) -> PanelSnapshot:
        selected = self._cursor.index
        rows = [
            PanelRow(
                index=i,
                label=entry.label,
                detail=entry.detail,
                enabled=entry.enabled,
                selected=i == selected,
            )
            for i, entry in enumerate(self._entries)
        ]
        rows.append(PanelRow(index=self.back_index, label=self.back_label, selected=selected == self.back_index))
        lines = (self._title,) if self._entries else (self._title, self._empty_message)
        return PanelSnapshot(
            title=self._title,
            state=self._mode.value,
            lines=lines,
            rows=tuple(rows),
            selected_index=selected,
            input_hint="Up/Down: Move  Enter/Space: Choose  Esc: Back",
            fulfilled=self._fulfilled,
        )


def build_capture_item_panel(
    items: Sequence[InventoryLine],
    *,
    on_select_item: Callable[[str], None],
    on_back: Callable[[], None],
    initial_index: int = 0,
) -> SelectionListPanel:
    entries = [
        SelectableEntry(
            key=line.entry.item_id,
            label=line.item.name,
            enabled=line.usable,
            detail=f"+{line.item.effect_value}%  x{line.entry.quantity}",
            payload=line,
        )
        for line in items
    ]
    return SelectionListPanel(
        entries,
        on_select=on_select_item,
        on_back=on_back,
        initial_index=initial_index,
        name="capture_item",
        title="Choose a capture item",
        empty_message="No capture items.",
    )


def build_item_select_panel(
    items: Sequence[InventoryLine],
    *,
    on_select_item: Callable[[str], None],
    on_back: Callable[[], None],
    initial_index: int = 0,
) -> SelectionListPanel:
    entries = [
        SelectableEntry(
            key=line.entry.item_id,
            label=line.item.name,
            enabled=line.usable,
            detail=f"[{line.item.category.value}]  x{line.entry.quantity}",
            payload=line,
        )
        for line in items
    ]
    return SelectionListPanel(
        entries,
        on_select=on_select_item,
        on_back=on_back,
        initial_index=initial_index,
        name="item_select",
        title="Choose an item",
        empty_message="No items.",
    )


def build_skill_select_panel(
    moves: Sequence[MoveLine],
    *,
    on_select_move: Callable[[str], None],
    on_back: Callable[[], None],
    initial_index: int = 0,
) -> SelectionListPanel:
    entries = [
        SelectableEntry(
            key=line.owned.move_id,
            label=line.move.name,
            enabled=line.usable,
            detail=f"[{line.move.type.value}]  PP {line.owned.current_pp}/{line.owned.max_pp}",
            payload=line,
        )
        for line in moves
    ]
    return SelectionListPanel(
        entries,
        on_select=on_select_move,
        on_back=on_back,
        initial_index=initial_index,
        name="skill_select",
        title="Choose a move",
        empty_message="No moves.",
    )


def build_ghost_swap_panel(
    party: Sequence[OwnedGhost],
    *,
    active_index: int,
    species_name: Callable[[str], str],
    species_type: Callable[[str], GhostType],
    on_select_ghost: Callable[[int], None],
    on_back: Callable[[], None],
    initial_index: int = 0,
) -> SelectionListPanel:
    """Fainted ghosts and the ghost already in battle cannot be chosen."""

    entries = []
    for i, ghost in enumerate(party):
        status = ""
        if i == active_index:
            status = "  (in battle)"
        elif ghost.fainted:
            status = "  (fainted)"
        entries.append(
            SelectableEntry(
                key=i,
                label=ghost.display_name(species_name),
                enabled=not ghost.fainted and i != active_index,
                detail=(
                    f"[{species_type(ghost.species_id).value}]  Lv.{ghost.level}  "
                    f"HP {ghost.current_hp}/{ghost.max_hp}{status}"
                ),
                payload=ghost,
            )
        )
    return SelectionListPanel(
        entries,
        on_select=on_select_ghost,
        on_back=on_back,
        initial_index=initial_index,
        name="ghost_swap",
        title="Choose a ghost to send out",
    )
