from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from .panel_core import PanelRow, PanelSnapshot, PhaseSequencer, SequencedPanel


class DefeatPhase(str, Enum):
    DEFEAT = "defeat"
    MESSAGE = "message"
    RECOVERY = "recovery"


DEFEAT_ORDER = (DefeatPhase.DEFEAT, DefeatPhase.MESSAGE, DefeatPhase.RECOVERY)


class DefeatPanel(SequencedPanel[DefeatPhase]):
    """defeat -> message -> recovery; advancing from recovery emits ``on_continue``.

    The host's continue handler restores the party and returns to the start
    position; this panel only announces it.
    """

    name = "defeat"

    def __init__(
        self,
        *,
        on_continue: Callable[[], None],
        last_ghost_name: str | None = None,
        money_lost: int | None = None,
    ) -> None:
        self._on_continue = on_continue
        self._last_ghost_name = last_ghost_name or None
        self._money_lost = money_lost
        super().__init__(
            PhaseSequencer(
                DEFEAT_ORDER,
                on_terminal=lambda: self._emit("continue", self._on_continue),
            )
        )

    @property
    def shows_money_lost(self) -> bool:
        return self._money_lost is not None and self._money_lost > 0

    def _lines(self) -> tuple[str, ...]:
        phase = self.phase
        if phase is DefeatPhase.DEFEAT:
            if self._last_ghost_name is None:
                return ("Defeat...",)
            return ("Defeat...", f"{self._last_ghost_name} can no longer fight...")
        if phase is DefeatPhase.MESSAGE:
            if not self.shows_money_lost:
                return ("Everything went dark...",)
            return ("Everything went dark...", f"Dropped {self._money_lost} gold...")
        return ("Recovered at the Ghost Center.", "The party's HP is fully restored!")

    def snapshot(self) -> PanelSnapshot:
        button = "Continue" if self.phase is DefeatPhase.RECOVERY else "Next"
        return PanelSnapshot(
            title="Defeat",
            state=self.phase.value,
            lines=self._lines(),
            rows=(PanelRow(index=0, label=button, selected=True),),
            selected_index=0,
            input_hint="Enter/Space: Continue",
            fulfilled=self._fulfilled,
        )
