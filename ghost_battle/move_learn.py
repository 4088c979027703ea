from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

from .config import DEFAULT_MAX_MOVE_SLOTS
from .panel_core import ModalPanel, ModeSpec, PanelRow, PanelSnapshot
from .records import Move, OwnedMove

DECLINE_LEARN = -1

CONFIRM_LEARN = 0
CONFIRM_DECLINE = 1


class LearnMode(str, Enum):
    CONFIRM = "confirm"
    SELECT = "select"


class MoveLearnPanel(ModalPanel[LearnMode]):
    """Offer a new move: learn it, replacing a slot if full, or decline.

    ``on_learn_move`` receives the slot index to write (the next free slot
    when there is room) or ``DECLINE_LEARN``.
    """

    name = "move_learn"

    def __init__(
        self,
        *,
        ghost_name: str,
        new_move: Move,
        current_moves: Sequence[OwnedMove],
        move_lookup: Callable[[str], Move | None],
        on_learn_move: Callable[[int], None],
        max_move_slots: int = DEFAULT_MAX_MOVE_SLOTS,
    ) -> None:
        if max_move_slots < 1:
            raise ValueError("max_move_slots must be >= 1")
        self._ghost_name = ghost_name
        self._new_move = new_move
        self._moves = tuple(current_moves)
        self._move_lookup = move_lookup
        self._on_learn_move = on_learn_move
        self._max_move_slots = int(max_move_slots)

        super().__init__(
            modes={
                LearnMode.CONFIRM: ModeSpec(size=lambda: 2, on_confirm=self._confirm),
                LearnMode.SELECT: ModeSpec(
                    size=lambda: len(self._moves) + 1,
                    on_confirm=self._select,
                    on_cancel=lambda: self._enter_mode(LearnMode.CONFIRM),
                ),
            },
            initial_mode=LearnMode.CONFIRM,
        )

    @property
    def slots_full(self) -> bool:
        return len(self._moves) >= self._max_move_slots

    @property
    def decline_index(self) -> int:
        return len(self._moves)

    def _confirm(self, index: int) -> None:
        if index == CONFIRM_DECLINE:
            self._emit("decline", self._on_learn_move, DECLINE_LEARN)
        elif self.slots_full:
            self._enter_mode(LearnMode.SELECT)
        else:
            self._emit("learn", self._on_learn_move, len(self._moves))

    def _select(self, index: int) -> None:
        if index == self.decline_index:
            self._emit("decline", self._on_learn_move, DECLINE_LEARN)
        else:
            self._emit("learn", self._on_learn_move, index)

    def _move_rows(self, selected: int) -> list[PanelRow]:
        rows = []
        for i, owned in enumerate(self._moves):
            move = self._move_lookup(owned.move_id)
            # Unknown move ids are not drawn; the slot index is still addressable.
            if move is None:
                continue
            rows.append(
                PanelRow(
                    index=i,
                    label=move.name,
                    detail=f"[{move.type.value}]  Power {move.power}  PP {owned.current_pp}/{owned.max_pp}",
                    selected=selected == i,
                )
            )
        return rows

    def snapshot(self) -> PanelSnapshot:
        selected = self._cursor.index
        move = self._new_move
        if self._mode is LearnMode.CONFIRM:
            lines: tuple[str, ...] = (
                f"{self._ghost_name} wants to learn",
                f"[{move.type.value}] {move.name}!",
            )
            if self.slots_full:
                lines = (*lines, f"But it can only know {self._max_move_slots} moves...")
            learn_label = "Forget a move to learn it" if self.slots_full else "Learn it"
            rows = (
                PanelRow(index=CONFIRM_LEARN, label=learn_label, selected=selected == CONFIRM_LEARN),
                PanelRow(index=CONFIRM_DECLINE, label="Give up", selected=selected == CONFIRM_DECLINE),
            )
        else:
            lines = (
                "Choose a move to forget",
                f"New: [{move.type.value}] {move.name}  Power {move.power}  PP {move.pp}",
            )
            select_rows = self._move_rows(selected)
            select_rows.append(
                PanelRow(index=self.decline_index, label="Give up", selected=selected == self.decline_index)
            )
            rows = tuple(select_rows)
        return PanelSnapshot(
            title="Learn Move",
            state=self._mode.value,
            lines=lines,
            rows=rows,
            selected_index=selected,
            input_hint="Up/Down: Move  Enter/Space: Choose  Esc: Back",
            fulfilled=self._fulfilled,
        )
