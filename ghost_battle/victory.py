from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .panel_core import PanelRow, PanelSnapshot, PhaseSequencer, SequencedPanel, SubOutcomes
from .records import GhostType, LevelUpResult


class VictoryPhase(str, Enum):
    VICTORY = "victory"
    EXP = "exp"
    LEVEL_UP = "levelUp"
    STATS = "stats"
    DONE = "done"


VICTORY_ORDER = (
    VictoryPhase.VICTORY,
    VictoryPhase.EXP,
    VictoryPhase.LEVEL_UP,
    VictoryPhase.STATS,
    VictoryPhase.DONE,
)


@dataclass(frozen=True, slots=True)
class ExpPayload:
    ghost_name: str
    ghost_type: GhostType
    exp_gained: int


@dataclass(frozen=True, slots=True)
class LevelUpPayload:
    ghost_name: str
    ghost_type: GhostType
    previous_level: int
    new_level: int
    result: LevelUpResult


@dataclass(frozen=True, slots=True)
class StatsPayload:
    new_max_hp: int
    attack: int
    defense: int
    speed: int
    pending_move_ids: tuple[str, ...]


class VictoryPanel(SequencedPanel[VictoryPhase]):
    """victory -> exp -> levelUp -> stats -> done, skipping to done without a level-up.

    While in ``stats`` each advance offers one newly learnable move through
    ``on_learn_move``; the advance that offers the last one also moves to
    ``done``. Advancing from ``done`` emits ``on_continue``.
    """

    name = "victory"

    def __init__(
        self,
        *,
        ghost_name: str,
        ghost_type: GhostType,
        exp_gained: int,
        leveled_up: bool,
        previous_level: int,
        on_continue: Callable[[], None],
        level_up_result: LevelUpResult | None = None,
        on_learn_move: Callable[[str], None] | None = None,
    ) -> None:
        self._ghost_name = ghost_name
        self._ghost_type = ghost_type
        self._exp_gained = int(exp_gained)
        self._leveled_up = bool(leveled_up)
        self._previous_level = int(previous_level)
        self._result = level_up_result
        self._on_continue = on_continue
        self._on_learn_move = on_learn_move

        learnable: tuple[str, ...] = ()
        if level_up_result is not None and on_learn_move is not None:
            learnable = tuple(level_up_result.learnable_move_ids)
        self._learnable = learnable

        super().__init__(
            PhaseSequencer(
                VICTORY_ORDER,
                on_terminal=lambda: self._emit("continue", self._on_continue),
                forks={VictoryPhase.EXP: self._after_exp},
                sub_outcomes={VictoryPhase.STATS: SubOutcomes(items=learnable, emit=self._offer_move)},
            )
        )

    def _after_exp(self) -> VictoryPhase:
        if self._leveled_up and self._result is not None:
            return VictoryPhase.LEVEL_UP
        return VictoryPhase.DONE

    def _offer_move(self, move_id: object) -> None:
        if self._on_learn_move is None:
            return
        self._emit("learn_move", self._on_learn_move, str(move_id), terminal=False)

    def payload(self) -> ExpPayload | LevelUpPayload | StatsPayload | None:
        phase = self.phase
        if phase is VictoryPhase.EXP:
            return ExpPayload(self._ghost_name, self._ghost_type, self._exp_gained)
        if phase is VictoryPhase.LEVEL_UP and self._result is not None:
            return LevelUpPayload(
                ghost_name=self._ghost_name,
                ghost_type=self._ghost_type,
                previous_level=self._previous_level,
                new_level=self._result.new_level,
                result=self._result,
            )
        if phase is VictoryPhase.STATS and self._result is not None:
            stats = self._result.new_stats
            return StatsPayload(
                new_max_hp=self._result.new_max_hp,
                attack=stats.attack,
                defense=stats.defense,
                speed=stats.speed,
                pending_move_ids=self._learnable[self._sequencer.sub_index:],
            )
        return None

    def _lines(self) -> tuple[str, ...]:
        payload = self.payload()
        if isinstance(payload, ExpPayload):
            return (f"[{payload.ghost_type.value}] {payload.ghost_name}", f"Gained {payload.exp_gained} EXP!")
        if isinstance(payload, LevelUpPayload):
            return (
                "Level up!",
                f"[{payload.ghost_type.value}] {payload.ghost_name}",
                f"Lv.{payload.previous_level} -> Lv.{payload.new_level}",
            )
        if isinstance(payload, StatsPayload):
            return (
                "Stats rose!",
                f"HP: {payload.new_max_hp}",
                f"Attack: {payload.attack}",
                f"Defense: {payload.defense}",
                f"Speed: {payload.speed}",
            )
        if self.phase is VictoryPhase.VICTORY:
            return ("Victory!", "The wild ghost was defeated!")
        return ("Battle over.",)

    def snapshot(self) -> PanelSnapshot:
        button = "Back to map" if self.phase is VictoryPhase.DONE else "Next"
        return PanelSnapshot(
            title="Victory",
            state=self.phase.value,
            lines=self._lines(),
            rows=(PanelRow(index=0, label=button, selected=True),),
            selected_index=0,
            input_hint="Enter/Space: Continue",
            fulfilled=self._fulfilled,
            payload=self.payload(),
        )
