from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

from .config import DEFAULT_PARTY_LIMIT
from .panel_core import ModalPanel, ModeSpec, PanelRow, PanelSnapshot
from .records import GhostType, OwnedGhost


class CaptureMode(str, Enum):
    SUCCESS = "success"
    CHOICE = "choice"
    SWAP = "swap"


CHOICE_SEND_TO_BOX = 0
CHOICE_SWAP = 1


class CaptureSuccessPanel(ModalPanel[CaptureMode]):
    """Place a freshly captured ghost.

    With room in the party the panel starts in ``success`` and a single
    confirm adds the ghost. With a full party it starts in ``choice``:
    send the ghost to the box, or open ``swap`` to replace a party member.
    Cancel (or the Back row) in ``swap`` returns to ``choice``.
    """

    name = "capture_success"

    def __init__(
        self,
        *,
        captured: OwnedGhost,
        party: Sequence[OwnedGhost],
        species_name: Callable[[str], str],
        species_type: Callable[[str], GhostType],
        on_add_to_party: Callable[[], None],
        on_send_to_box: Callable[[], None],
        on_swap_with_party: Callable[[int], None],
        party_limit: int = DEFAULT_PARTY_LIMIT,
    ) -> None:
        if party_limit < 1:
            raise ValueError("party_limit must be >= 1")
        self._captured = captured
        self._party = tuple(party)
        self._species_name = species_name
        self._species_type = species_type
        self._on_add_to_party = on_add_to_party
        self._on_send_to_box = on_send_to_box
        self._on_swap_with_party = on_swap_with_party
        self._party_limit = int(party_limit)

        super().__init__(
            modes={
                CaptureMode.SUCCESS: ModeSpec(
                    size=lambda: 1,
                    on_confirm=lambda _i: self._emit("add_to_party", self._on_add_to_party),
                    has_cursor=False,
                ),
                CaptureMode.CHOICE: ModeSpec(size=lambda: 2, on_confirm=self._confirm_choice),
                CaptureMode.SWAP: ModeSpec(
                    size=lambda: len(self._party) + 1,
                    on_confirm=self._confirm_swap,
                    on_cancel=lambda: self._enter_mode(CaptureMode.CHOICE),
                ),
            },
            initial_mode=CaptureMode.CHOICE if self.party_full else CaptureMode.SUCCESS,
        )

    @property
    def party_full(self) -> bool:
        return len(self._party) >= self._party_limit

    @property
    def captured_name(self) -> str:
        return self._captured.display_name(self._species_name)

    def _confirm_choice(self, index: int) -> None:
        if index == CHOICE_SEND_TO_BOX:
            self._emit("send_to_box", self._on_send_to_box)
        else:
            self._enter_mode(CaptureMode.SWAP)

    def _confirm_swap(self, index: int) -> None:
        if index == len(self._party):
            self._enter_mode(CaptureMode.CHOICE)
            return
        self._emit("swap_with_party", self._on_swap_with_party, index)

    def _header(self) -> tuple[str, ...]:
        kind = self._species_type(self._captured.species_id).value
        return ("Captured!", f"[{kind}] {self.captured_name}  Lv.{self._captured.level}")

    def snapshot(self) -> PanelSnapshot:
        mode = self._mode
        selected = self.selected_index
        if mode is CaptureMode.SUCCESS:
            lines = (*self._header(), "joined the party!")
            rows: tuple[PanelRow, ...] = (PanelRow(index=0, label="OK", selected=True),)
        elif mode is CaptureMode.CHOICE:
            lines = (*self._header(), "Your party is full.")
            rows = (
                PanelRow(index=0, label="Send to box", selected=selected == 0),
                PanelRow(index=1, label="Swap with a party ghost", selected=selected == 1),
            )
        else:
            lines = ("Choose a ghost to swap out",)
            swap_rows = [
                PanelRow(
                    index=i,
                    label=ghost.display_name(self._species_name),
                    detail=(
                        f"[{self._species_type(ghost.species_id).value}]  Lv.{ghost.level}  "
                        f"HP {ghost.current_hp}/{ghost.max_hp}"
                    ),
                    selected=selected == i,
                )
                for i, ghost in enumerate(self._party)
            ]
            swap_rows.append(PanelRow(index=len(self._party), label="Back", selected=selected == len(self._party)))
            rows = tuple(swap_rows)
        return PanelSnapshot(
            title="Capture",
            state=mode.value,
            lines=lines,
            rows=rows,
            selected_index=selected,
            input_hint="Up/Down: Move  Enter/Space: Choose  Esc: Back",
            fulfilled=self._fulfilled,
        )
