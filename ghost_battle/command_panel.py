from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from .panel_core import InputAction, ModalPanel, ModeSpec, PanelRow, PanelSnapshot


class BattleCommand(str, Enum):
    FIGHT = "fight"
    ITEM = "item"
    CAPTURE = "capture"
    RUN = "run"


class CommandMode(str, Enum):
    GRID = "grid"


# Row-major 2x2 grid: fight item / capture run.
COMMANDS: tuple[tuple[BattleCommand, str, str], ...] = (
    (BattleCommand.FIGHT, "Fight", "Attack with a move"),
    (BattleCommand.ITEM, "Item", "Use an item"),
    (BattleCommand.CAPTURE, "Capture", "Try to capture the ghost"),
    (BattleCommand.RUN, "Run", "Flee the battle"),
)


class CommandPanel(ModalPanel[CommandMode]):
    name = "command"

    def __init__(
        self,
        *,
        on_select_command: Callable[[BattleCommand], None],
        can_capture: bool = True,
        initial_index: int = 0,
    ) -> None:
        self._on_select_command = on_select_command
        self._can_capture = bool(can_capture)
        super().__init__(
            modes={
                CommandMode.GRID: ModeSpec(
                    size=lambda: len(COMMANDS),
                    on_confirm=self._confirm,
                    is_enabled=self._command_enabled,
                ),
            },
            initial_mode=CommandMode.GRID,
            initial_index=initial_index,
        )

    @property
    def selected_command(self) -> BattleCommand:
        return COMMANDS[self._cursor.index][0]

    def _command_enabled(self, index: int) -> bool:
        return self._can_capture or COMMANDS[index][0] is not BattleCommand.CAPTURE

    def _move(self, action: InputAction) -> bool:
        i = self._cursor.index
        if action in (InputAction.UP, InputAction.DOWN):
            self._cursor.set(i - 2 if i >= 2 else i + 2)
            return True
        if action in (InputAction.LEFT, InputAction.RIGHT):
            self._cursor.set(i + 1 if i % 2 == 0 else i - 1)
            return True
        return False

    def _confirm(self, index: int) -> None:
        self._emit("select_command", self._on_select_command, COMMANDS[index][0])

    def snapshot(self) -> PanelSnapshot:
        selected = self._cursor.index
        rows = tuple(
            PanelRow(
                index=i,
                label=label,
                detail=description,
                enabled=self._command_enabled(i),
                selected=i == selected,
            )
            for i, (_command, label, description) in enumerate(COMMANDS)
        )
        return PanelSnapshot(
            title="Command",
            state=self._mode.value,
            lines=("What will you do?",),
            rows=rows,
            selected_index=selected,
            input_hint="Arrows/WASD: Move  Enter/Space: Choose",
            fulfilled=self._fulfilled,
        )
