"""Pygame host shell for the ghost battle panels.

The shell owns the window, the screen stack and input translation: pygame
keyboard, joystick and mouse events become key tokens and pointer
activations. All panel state and outcome rules live in the core modules
(``panel_core`` and the panel modules); this layer only renders snapshots
and reports outcomes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import pygame

from .capture_success import CaptureSuccessPanel
from .command_panel import BattleCommand, CommandPanel
from .config import BattleConfig, load_config
from .defeat import DefeatPanel
from .dispatch import InputChannel
from .level_up import process_level_up
from .move_learn import DECLINE_LEARN, MoveLearnPanel
from .panel_core import PanelSnapshot
from .records import ItemCategory
from .result_panels import CaptureFailurePanel, EscapeResultPanel
from .sample_data import (
    MOVES,
    SPECIES,
    inventory_lines,
    make_ghost,
    move_lines,
    move_lookup,
    species_name,
    species_type,
)
from .selection_panels import (
    build_capture_item_panel,
    build_ghost_swap_panel,
    build_item_select_panel,
    build_skill_select_panel,
)
from .victory import VictoryPanel

logger = logging.getLogger(__name__)


class Screen(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def render(self, surface: pygame.Surface) -> None: ...


class BattlePanel(Protocol):
    @property
    def fulfilled(self) -> bool: ...
    def feed(self, token: str | None) -> bool: ...
    def activate(self, index: int) -> None: ...
    def snapshot(self) -> PanelSnapshot: ...


@dataclass(frozen=True, slots=True)
class MenuItem:
    label: str
    action: Callable[[], None]


WINDOW_SIZE = (960, 540)
TARGET_FPS = 60

_KEY_TOKENS: dict[int, str] = {
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_RETURN: "Enter",
    pygame.K_KP_ENTER: "Enter",
    pygame.K_SPACE: " ",
    pygame.K_ESCAPE: "Escape",
}

_LETTER_TOKENS = frozenset("wWsSaAdD")


def key_token(event: pygame.event.Event) -> str | None:
    """Translate a pygame input event into a key token, if it maps to one."""

    if event.type == pygame.KEYDOWN:
        unicode = getattr(event, "unicode", "")
        if unicode in _LETTER_TOKENS:
            return unicode
        return _KEY_TOKENS.get(event.key)
    if event.type == pygame.JOYHATMOTION:
        # D-pad / hat navigation (works on many sticks).
        _, y = event.value
        if y == 1:
            return "ArrowUp"
        if y == -1:
            return "ArrowDown"
        return None
    if event.type == pygame.JOYBUTTONDOWN:
        # Common mapping: 0 = select, 1 = back/cancel.
        if event.button == 0:
            return "Enter"
        if event.button == 1:
            return "Escape"
    return None


class App:
    def __init__(self, surface: pygame.Surface, font: pygame.font.Font, *, config: BattleConfig) -> None:
        self._surface = surface
        self._font = font
        self._config = config
        self._screens: list[Screen] = []
        self._running = True
        self._status = ""

    @property
    def running(self) -> bool:
        return self._running

    @property
    def font(self) -> pygame.font.Font:
        return self._font

    @property
    def config(self) -> BattleConfig:
        return self._config

    @property
    def status(self) -> str:
        return self._status

    def report(self, message: str) -> None:
        logger.info("outcome: %s", message)
        self._status = message

    def push(self, screen: Screen) -> None:
        self._screens.append(screen)

    def pop(self) -> None:
        # Never pop the last/root screen; root handles its own quit/back behavior.
        if len(self._screens) > 1:
            self._screens.pop()

    def remove(self, screen: Screen) -> None:
        if len(self._screens) > 1 and screen in self._screens:
            self._screens.remove(screen)

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return
        if not self._screens:
            return
        self._screens[-1].handle_event(event)

    def render(self) -> None:
        if not self._screens:
            return
        self._screens[-1].render(self._surface)


def _fit_label(font: pygame.font.Font, label: str, max_width: int) -> str:
    if max_width <= 0:
        return ""
    if font.size(label)[0] <= max_width:
        return label
    clipped = label
    while clipped and font.size(f"{clipped}...")[0] > max_width:
        clipped = clipped[:-1]
    return f"{clipped}..." if clipped else "..."


class MenuScreen:
    def __init__(self, app: App, title: str, items: list[MenuItem], *, is_root: bool = False) -> None:
        self._app = app
        self._title = title
        self._items = items
        self._selected = 0
        self._is_root = is_root
        self._title_font = pygame.font.Font(None, 42)
        self._item_font = pygame.font.Font(None, 28)
        self._hint_font = pygame.font.Font(None, 22)

    def handle_event(self, event: pygame.event.Event) -> None:
        token = key_token(event)
        if token in ("ArrowUp", "w", "W"):
            self._move(-1)
        elif token in ("ArrowDown", "s", "S"):
            self._move(1)
        elif token in ("Enter", " "):
            self._activate()
        elif token == "Escape":
            self._back()

    def _move(self, delta: int) -> None:
        if not self._items:
            return
        self._selected = (self._selected + delta) % len(self._items)

    def _activate(self) -> None:
        if not self._items:
            return
        self._items[self._selected].action()

    def _back(self) -> None:
        if self._is_root:
            self._app.quit()
        else:
            self._app.pop()

    def render(self, surface: pygame.Surface) -> None:
        w, h = surface.get_size()
        surface.fill((3, 9, 78))
        title = self._title_font.render(self._title, True, (238, 245, 255))
        surface.blit(title, title.get_rect(midtop=(w // 2, 18)))

        # Scroll so the selection stays visible on small windows.
        row_h = 26
        top = 70
        visible = max(1, (h - top - 70) // row_h)
        first = max(0, min(self._selected - visible // 2, len(self._items) - visible))
        for offset, item in enumerate(self._items[first : first + visible]):
            idx = first + offset
            row = pygame.Rect(40, top + offset * row_h, w - 80, row_h - 4)
            selected = idx == self._selected
            if selected:
                pygame.draw.rect(surface, (244, 248, 255), row)
            color = (14, 26, 74) if selected else (238, 245, 255)
            text = self._item_font.render(_fit_label(self._item_font, item.label, row.w - 20), True, color)
            surface.blit(text, (row.x + 10, row.y + (row.h - text.get_height()) // 2))

        if self._app.status:
            status = self._hint_font.render(self._app.status, True, (250, 220, 140))
            surface.blit(status, status.get_rect(midbottom=(w // 2, h - 34)))
        footer = "Enter/Space: Select  |  Esc: Back  |  D-pad + Button0/1"
        foot = self._hint_font.render(footer, True, (186, 200, 224))
        surface.blit(foot, foot.get_rect(midbottom=(w // 2, h - 10)))


class PanelScreen:
    """Hosts one battle panel; unmounts it once a terminal outcome fires.

    Key tokens are queued on an ``InputChannel`` and delivered one per frame,
    the same way a re-rendering host hands a panel its latest key prop.
    """

    def __init__(self, app: App, panel: BattlePanel) -> None:
        self._app = app
        self._panel = panel
        self._channel = InputChannel()
        self._row_rects: list[tuple[pygame.Rect, int]] = []
        self._line_font = pygame.font.Font(None, 32)
        self._row_font = pygame.font.Font(None, 28)
        self._hint_font = pygame.font.Font(None, 22)

    @property
    def panel(self) -> BattlePanel:
        return self._panel

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 1) == 1:
            for rect, index in self._row_rects:
                if rect.collidepoint(event.pos):
                    self._panel.activate(index)
                    return
            return
        token = key_token(event)
        if token is not None:
            self._channel.post(token)

    def render(self, surface: pygame.Surface) -> None:
        self._channel.pump(self._panel.feed)
        if self._panel.fulfilled:
            self._app.remove(self)
            return
        self._draw(surface, self._panel.snapshot())

    def _draw(self, surface: pygame.Surface, snap: PanelSnapshot) -> None:
        w, h = surface.get_size()
        surface.fill((10, 10, 14))
        header = self._hint_font.render(f"{snap.title.upper()}  [{snap.state}]", True, (186, 200, 224))
        surface.blit(header, (40, 20))

        y = 56
        for line in snap.lines:
            text = self._line_font.render(line, True, (235, 235, 245))
            surface.blit(text, (40, y))
            y += 34

        y += 12
        self._row_rects = []
        for row in snap.rows:
            rect = pygame.Rect(40, y, w - 80, 32)
            if row.selected:
                pygame.draw.rect(surface, (244, 248, 255), rect)
            else:
                pygame.draw.rect(surface, (62, 84, 152), rect, 1)
            if not row.enabled:
                color = (120, 120, 130)
            elif row.selected:
                color = (14, 26, 74)
            else:
                color = (235, 235, 245)
            label = self._row_font.render(_fit_label(self._row_font, row.label, rect.w // 2), True, color)
            surface.blit(label, (rect.x + 10, rect.y + (rect.h - label.get_height()) // 2))
            if row.detail:
                detail = self._row_font.render(_fit_label(self._row_font, row.detail, rect.w // 2 - 20), True, color)
                surface.blit(detail, detail.get_rect(midright=(rect.right - 10, rect.centery)))
            self._row_rects.append((rect, row.index))
            y += 38

        hint = self._hint_font.render(snap.input_hint, True, (140, 140, 150))
        surface.blit(hint, (40, h - 34))


def _build_demo_menu(app: App) -> list[MenuItem]:
    config = app.config
    party = [
        make_ghost("g1", "fireling", level=12, move_ids=("tackle", "ember", "fire-spin", "scratch")),
        make_ghost("g2", "aquaspirit", level=9, move_ids=("tackle", "bubble"), current_hp=0),
        make_ghost("g3", "leafshade", level=10, move_ids=("tackle", "vine-whip"), nickname="Sprout"),
    ]
    full_party = party + [
        make_ghost(f"g{i}", "sparkwisp", level=5 + i, move_ids=("quick-attack",))
        for i in range(4, 4 + max(0, config.party_limit - len(party)))
    ]
    captured = make_ghost("wild", "sparkwisp", level=7, move_ids=("quick-attack",))
    active = party[0]

    def open_panel(panel: BattlePanel) -> None:
        app.push(PanelScreen(app, panel))

    def open_move_learn(move_id: str) -> None:
        move = MOVES.get(move_id)
        if move is None:
            logger.warning("no move data for %r; skipping learn prompt", move_id)
            return

        def learned(slot: int) -> None:
            if slot == DECLINE_LEARN:
                app.report(f"{species_name(active.species_id)} did not learn {move.name}")
            else:
                app.report(f"{species_name(active.species_id)} learned {move.name} in slot {slot}")

        open_panel(
            MoveLearnPanel(
                ghost_name=active.display_name(species_name),
                new_move=move,
                current_moves=active.moves,
                move_lookup=move_lookup,
                on_learn_move=learned,
                max_move_slots=config.max_move_slots,
            )
        )

    def open_command() -> None:
        def chosen(command: BattleCommand) -> None:
            app.report(f"command: {command.value}")

        open_panel(CommandPanel(on_select_command=chosen, can_capture=True))

    def open_victory(*, leveled_up: bool) -> None:
        species = SPECIES[active.species_id]
        result = process_level_up(
            old_level=7,
            new_level=active.level,
            base_stats=species.base_stats,
            learnable_moves=species.learnable_moves,
        )
        open_panel(
            VictoryPanel(
                ghost_name=active.display_name(species_name),
                ghost_type=species.type,
                exp_gained=240 if leveled_up else 35,
                leveled_up=leveled_up,
                level_up_result=result if leveled_up else None,
                previous_level=7,
                on_learn_move=open_move_learn,
                on_continue=lambda: app.report("victory: back to map"),
            )
        )

    def open_defeat() -> None:
        open_panel(
            DefeatPanel(
                last_ghost_name=active.display_name(species_name),
                money_lost=120,
                on_continue=lambda: app.report("defeat: party restored"),
            )
        )

    def open_capture_item() -> None:
        open_panel(
            build_capture_item_panel(
                inventory_lines(ItemCategory.CAPTURE),
                on_select_item=lambda item_id: app.report(f"threw {item_id}"),
                on_back=lambda: app.report("capture: back"),
            )
        )

    def open_item_select() -> None:
        open_panel(
            build_item_select_panel(
                inventory_lines(),
                on_select_item=lambda item_id: app.report(f"used {item_id}"),
                on_back=lambda: app.report("item: back"),
            )
        )

    def open_skill_select() -> None:
        open_panel(
            build_skill_select_panel(
                move_lines(active),
                on_select_move=lambda move_id: app.report(f"used move {move_id}"),
                on_back=lambda: app.report("fight: back"),
            )
        )

    def open_ghost_swap() -> None:
        open_panel(
            build_ghost_swap_panel(
                party,
                active_index=0,
                species_name=species_name,
                species_type=species_type,
                on_select_ghost=lambda index: app.report(f"sent out party slot {index}"),
                on_back=lambda: app.report("swap: back"),
            )
        )

    def open_capture_success(*, full: bool) -> None:
        open_panel(
            CaptureSuccessPanel(
                captured=captured,
                party=full_party if full else party,
                species_name=species_name,
                species_type=species_type,
                on_add_to_party=lambda: app.report("captured ghost joined the party"),
                on_send_to_box=lambda: app.report("captured ghost sent to the box"),
                on_swap_with_party=lambda index: app.report(f"captured ghost swapped with slot {index}"),
                party_limit=config.party_limit,
            )
        )

    def open_capture_failure() -> None:
        open_panel(
            CaptureFailurePanel(
                ghost_name=captured.display_name(species_name),
                item_name="Ghost Ball",
                on_continue=lambda: app.report("capture failed: enemy turn"),
            )
        )

    def open_escape(*, success: bool) -> None:
        open_panel(
            EscapeResultPanel(
                success=success,
                attempt_count=2,
                on_success=lambda: app.report("escaped: back to map"),
                on_failure=lambda: app.report("escape failed: enemy turn"),
            )
        )

    return [
        MenuItem("Command", open_command),
        MenuItem("Move Select", open_skill_select),
        MenuItem("Item Select", open_item_select),
        MenuItem("Capture Item", open_capture_item),
        MenuItem("Ghost Swap", open_ghost_swap),
        MenuItem("Victory (level up)", lambda: open_victory(leveled_up=True)),
        MenuItem("Victory", lambda: open_victory(leveled_up=False)),
        MenuItem("Defeat", open_defeat),
        MenuItem("Capture Success", lambda: open_capture_success(full=False)),
        MenuItem("Capture Success (party full)", lambda: open_capture_success(full=True)),
        MenuItem("Capture Failure", open_capture_failure),
        MenuItem("Escape (success)", lambda: open_escape(success=True)),
        MenuItem("Escape (failure)", lambda: open_escape(success=False)),
        MenuItem("Move Learn", lambda: open_move_learn("thunder-shock")),
        MenuItem("Quit", app.quit),
    ]


def _init_joysticks() -> None:
    pygame.joystick.init()
    for i in range(pygame.joystick.get_count()):
        try:
            pygame.joystick.Joystick(i).init()
        except pygame.error as exc:
            logger.warning("joystick %d unavailable: %s", i, exc)


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: BattleConfig | None = None,
) -> int:
    config = load_config() if config is None else config
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    _init_joysticks()

    pygame.display.set_caption("Ghost Battle Panels")
    surface = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)

    font = pygame.font.Font(None, 36)
    clock = pygame.time.Clock()

    app = App(surface=surface, font=font, config=config)
    app.push(MenuScreen(app, "Battle Panels", _build_demo_menu(app), is_root=True))

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(TARGET_FPS)
    finally:
        pygame.quit()

    return 0
