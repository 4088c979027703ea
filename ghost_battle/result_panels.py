"""Single-confirm panels shown after a capture attempt fails or an escape is tried."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from .panel_core import PanelRow, PanelSnapshot, PhaseSequencer, SequencedPanel


class ResultPhase(str, Enum):
    RESULT = "result"


class CaptureFailurePanel(SequencedPanel[ResultPhase]):
    name = "capture_failure"

    def __init__(self, *, ghost_name: str, item_name: str, on_continue: Callable[[], None]) -> None:
        self._ghost_name = ghost_name
        self._item_name = item_name
        self._on_continue = on_continue
        super().__init__(
            PhaseSequencer(
                (ResultPhase.RESULT,),
                on_terminal=lambda: self._emit("continue", self._on_continue),
            )
        )

    def snapshot(self) -> PanelSnapshot:
        return PanelSnapshot(
            title="Capture",
            state=self.phase.value,
            lines=(
                f"Threw the {self._item_name}!",
                "Capture failed...",
                f"{self._ghost_name} broke free!",
            ),
            rows=(PanelRow(index=0, label="Next", selected=True),),
            selected_index=0,
            input_hint="Enter/Space: Continue",
            fulfilled=self._fulfilled,
        )


class EscapeResultPanel(SequencedPanel[ResultPhase]):
    """Confirm emits ``on_success`` after a successful escape, else ``on_failure``."""

    name = "escape_result"

    def __init__(
        self,
        *,
        success: bool,
        on_success: Callable[[], None],
        on_failure: Callable[[], None],
        attempt_count: int | None = None,
    ) -> None:
        self._success = bool(success)
        self._attempt_count = attempt_count
        self._on_success = on_success
        self._on_failure = on_failure
        super().__init__(PhaseSequencer((ResultPhase.RESULT,), on_terminal=self._finish))

    @property
    def success(self) -> bool:
        return self._success

    def _finish(self) -> None:
        if self._success:
            self._emit("escape_success", self._on_success)
        else:
            self._emit("escape_failure", self._on_failure)

    def snapshot(self) -> PanelSnapshot:
        if self._success:
            lines: tuple[str, ...] = ("Got away safely!",)
            button = "Back to map"
        else:
            lines = ("Couldn't get away!",)
            if self._attempt_count is not None and self._attempt_count > 1:
                lines = (*lines, f"Escape attempts: {self._attempt_count}")
            button = "Next"
        return PanelSnapshot(
            title="Escape",
            state=self.phase.value,
            lines=lines,
            rows=(PanelRow(index=0, label=button, selected=True),),
            selected_index=0,
            input_hint="Enter/Space: Continue",
            fulfilled=self._fulfilled,
        )
