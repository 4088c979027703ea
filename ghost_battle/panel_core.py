from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .dispatch import KeyDispatcher

logger = logging.getLogger(__name__)


class InputAction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    CONFIRM = "confirm"
    CANCEL = "cancel"


KEY_ALIASES: dict[str, InputAction] = {
    "ArrowUp": InputAction.UP,
    "w": InputAction.UP,
    "W": InputAction.UP,
    "ArrowDown": InputAction.DOWN,
    "s": InputAction.DOWN,
    "S": InputAction.DOWN,
    "ArrowLeft": InputAction.LEFT,
    "a": InputAction.LEFT,
    "A": InputAction.LEFT,
    "ArrowRight": InputAction.RIGHT,
    "d": InputAction.RIGHT,
    "D": InputAction.RIGHT,
    "Enter": InputAction.CONFIRM,
    " ": InputAction.CONFIRM,
    "Escape": InputAction.CANCEL,
}


def action_for_key(token: str) -> InputAction | None:
    """Map a key token to its canonical action (case-sensitive)."""

    return KEY_ALIASES.get(token)


class SelectionCursor:
    """Highlighted index into a list whose last slot is usually "back"."""

    def __init__(self, length: int, *, initial: int = 0) -> None:
        if length < 1:
            raise ValueError("cursor length must be >= 1")
        self._length = int(length)
        self._index = max(0, min(int(initial), self._length - 1))

    @property
    def index(self) -> int:
        return self._index

    @property
    def length(self) -> int:
        return self._length

    @property
    def last_index(self) -> int:
        return self._length - 1

    def move(self, delta: int) -> int:
        self._index = (self._index + int(delta)) % self._length
        return self._index

    def set(self, index: int) -> None:
        if not (0 <= index < self._length):
            raise ValueError(f"cursor index {index} out of range [0, {self._length - 1}]")
        self._index = int(index)

    def reset(self, index: int = 0) -> None:
        self._index = max(0, min(int(index), self._length - 1))


@dataclass(frozen=True, slots=True)
class PanelRow:
    index: int
    label: str
    detail: str = ""
    enabled: bool = True
    selected: bool = False


@dataclass(frozen=True, slots=True)
class PanelSnapshot:
    """View model for the UI (pure data)."""

    title: str
    state: str
    lines: tuple[str, ...]
    rows: tuple[PanelRow, ...]
    selected_index: int | None
    input_hint: str
    fulfilled: bool = False
    payload: object | None = None


class PanelEngine:
    """Base for every panel: token dispatch, action mapping, outcome emission.

    A panel is fulfilled once it emits a terminal outcome; later input is
    ignored until the host unmounts it.
    """

    name = "panel"

    def __init__(self) -> None:
        self._dispatcher = KeyDispatcher()
        self._outcomes: list[str] = []
        self._fulfilled = False

    @property
    def fulfilled(self) -> bool:
        return self._fulfilled

    @property
    def outcomes(self) -> list[str]:
        return list(self._outcomes)

    @property
    def last_outcome(self) -> str | None:
        return self._outcomes[-1] if self._outcomes else None

    def feed(self, token: str | None) -> bool:
        """Accept the host's current key token; distinct values are handled once."""

        return self._dispatcher.feed(token, self.handle_key)

    def handle_key(self, token: str) -> None:
        action = action_for_key(token)
        if action is None:
            logger.debug("%s: ignored key %r", self.name, token)
            return
        self.handle_action(action)

    def handle_action(self, action: InputAction) -> None:
        if self._fulfilled:
            logger.debug("%s: input after terminal outcome ignored (%s)", self.name, action.value)
            return
        self._on_action(action)

    def activate(self, index: int) -> None:
        """Pointer activation of a row or button."""

        if self._fulfilled:
            logger.debug("%s: activation after terminal outcome ignored", self.name)
            return
        self._on_activate(int(index))

    def snapshot(self) -> PanelSnapshot:
        raise NotImplementedError

    def _on_action(self, action: InputAction) -> None:
        raise NotImplementedError

    def _on_activate(self, index: int) -> None:
        raise NotImplementedError

    def _emit(
        self,
        outcome: str,
        callback: Callable[..., None],
        *args: object,
        terminal: bool = True,
    ) -> None:
        logger.debug("%s: emit %s%r", self.name, outcome, args)
        self._outcomes.append(outcome)
        if terminal:
            self._fulfilled = True
        callback(*args)


M = TypeVar("M", bound=Enum)
P = TypeVar("P", bound=Enum)


@dataclass(frozen=True, slots=True)
class ModeSpec:
    """One row of a modal panel's transition table.

    ``size`` is the cursor length (entries plus any trailing back slot),
    ``on_confirm`` receives the cursor index, ``is_enabled`` filters which
    indices may be confirmed. A missing ``on_cancel`` makes cancel a no-op.
    """

    size: Callable[[], int]
    on_confirm: Callable[[int], None]
    on_cancel: Callable[[], None] | None = None
    is_enabled: Callable[[int], bool] | None = None
    has_cursor: bool = True


class ModalPanel(PanelEngine, Generic[M]):
    """Generic cursor engine driven by a table of modes.

    Up/down wrap the cursor of the active mode; confirm and cancel dispatch to
    the mode's handlers. Entering a mode resets its cursor to 0.
    """

    def __init__(
        self,
        *,
        modes: Mapping[M, ModeSpec],
        initial_mode: M,
        initial_index: int = 0,
    ) -> None:
        super().__init__()
        if initial_mode not in modes:
            raise ValueError(f"initial mode {initial_mode!r} has no transition table entry")
        self._modes = dict(modes)
        self._mode: M = initial_mode
        self._cursor = SelectionCursor(self._modes[initial_mode].size(), initial=initial_index)

    @property
    def mode(self) -> M:
        return self._mode

    @property
    def selected_index(self) -> int | None:
        if not self._modes[self._mode].has_cursor:
            return None
        return self._cursor.index

    def _enter_mode(self, mode: M) -> None:
        logger.debug("%s: mode %s -> %s", self.name, self._mode.value, mode.value)
        self._mode = mode
        self._cursor = SelectionCursor(self._modes[mode].size())

    def _is_enabled(self, index: int) -> bool:
        check = self._modes[self._mode].is_enabled
        return True if check is None else bool(check(index))

    def _move(self, action: InputAction) -> bool:
        if action is InputAction.UP:
            self._cursor.move(-1)
            return True
        if action is InputAction.DOWN:
            self._cursor.move(1)
            return True
        return False

    def _on_action(self, action: InputAction) -> None:
        spec = self._modes[self._mode]
        if action is InputAction.CONFIRM:
            index = self._cursor.index
            if not self._is_enabled(index):
                logger.debug("%s: confirm on disabled entry %d ignored", self.name, index)
                return
            spec.on_confirm(index)
        elif action is InputAction.CANCEL:
            if spec.on_cancel is None:
                logger.debug("%s: cancel has no effect in mode %s", self.name, self._mode.value)
                return
            spec.on_cancel()
        elif not self._move(action):
            logger.debug("%s: action %s has no effect", self.name, action.value)

    def _on_activate(self, index: int) -> None:
        spec = self._modes[self._mode]
        if not (0 <= index < self._cursor.length):
            logger.debug("%s: activation index %d out of range", self.name, index)
            return
        if not self._is_enabled(index):
            logger.debug("%s: activation of disabled entry %d ignored", self.name, index)
            return
        self._cursor.set(index)
        spec.on_confirm(index)


@dataclass(frozen=True, slots=True)
class SubOutcomes:
    """Sub-outcomes emitted one per advance while a phase is active."""

    items: tuple[object, ...]
    emit: Callable[[object], None]


class PhaseSequencer(Generic[P]):
    """Forward-only phase progression with optional forks and sub-outcome lists.

    - ``forks`` maps a phase to a function choosing the next phase; it is
      called once, when leaving that phase.
    - ``sub_outcomes`` maps a phase to a list emitted one element per advance;
      the advance that emits the last element also leaves the phase.
    - Advancing from the last phase in ``order`` calls ``on_terminal``.
    """

    def __init__(
        self,
        order: Sequence[P],
        *,
        on_terminal: Callable[[], None],
        forks: Mapping[P, Callable[[], P]] | None = None,
        sub_outcomes: Mapping[P, SubOutcomes] | None = None,
    ) -> None:
        if not order:
            raise ValueError("phase order must not be empty")
        if len(set(order)) != len(order):
            raise ValueError("phase order must not repeat a phase")
        self._order = tuple(order)
        self._rank = {phase: i for i, phase in enumerate(self._order)}
        self._forks = dict(forks or {})
        self._sub_outcomes = dict(sub_outcomes or {})
        for phase in (*self._forks, *self._sub_outcomes):
            if phase not in self._rank:
                raise ValueError(f"phase {phase!r} is not part of the order")
        self._on_terminal = on_terminal
        self._phase: P = self._order[0]
        self._sub_index = 0
        self._finished = False

    @property
    def phase(self) -> P:
        return self._phase

    @property
    def rank(self) -> int:
        return self._rank[self._phase]

    @property
    def sub_index(self) -> int:
        return self._sub_index

    @property
    def finished(self) -> bool:
        return self._finished

    def rank_of(self, phase: P) -> int:
        return self._rank[phase]

    def advance(self) -> None:
        if self._finished:
            return
        phase = self._phase

        subs = self._sub_outcomes.get(phase)
        if subs is not None and self._sub_index < len(subs.items):
            item = subs.items[self._sub_index]
            self._sub_index += 1
            subs.emit(item)
            if self._sub_index < len(subs.items):
                return

        position = self._rank[phase]
        if position == len(self._order) - 1:
            self._finished = True
            self._on_terminal()
            return

        fork = self._forks.get(phase)
        nxt = self._order[position + 1] if fork is None else fork()
        if self._rank[nxt] <= position:
            raise ValueError(f"phase {nxt!r} does not follow {phase!r}")
        logger.debug("phase %s -> %s", phase.value, nxt.value)
        self._phase = nxt
        self._sub_index = 0


class SequencedPanel(PanelEngine, Generic[P]):
    """Panel whose only input is "advance" (confirm key, space, or its button)."""

    def __init__(self, sequencer: PhaseSequencer[P]) -> None:
        super().__init__()
        self._sequencer = sequencer

    @property
    def phase(self) -> P:
        return self._sequencer.phase

    def advance(self) -> None:
        if self._fulfilled:
            logger.debug("%s: advance after terminal outcome ignored", self.name)
            return
        self._sequencer.advance()

    def _on_action(self, action: InputAction) -> None:
        if action is InputAction.CONFIRM:
            self._sequencer.advance()
        else:
            logger.debug("%s: action %s has no effect", self.name, action.value)

    def _on_activate(self, index: int) -> None:
        # The advance button is the only row.
        if index != 0:
            logger.debug("%s: activation index %d out of range", self.name, index)
            return
        self._sequencer.advance()
