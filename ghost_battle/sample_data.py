"""Demo master data for the host shell, in the game's JSON record shape."""

from __future__ import annotations

from .level_up import calculate_stats
from .records import (
    GhostSpecies,
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

_SPECIES_DATA = [
    {
        "id": "fireling",
        "name": "Fireling",
        "type": "fire",
        "baseStats": {"hp": 45, "attack": 60, "defense": 40, "speed": 70},
        "learnableMoves": [
            {"level": 1, "moveId": "tackle"},
            {"level": 1, "moveId": "ember"},
            {"level": 8, "moveId": "fire-spin"},
            {"level": 15, "moveId": "scratch"},
        ],
        "rarity": "common",
    },
    {
        "id": "aquaspirit",
        "name": "Aquaspirit",
        "type": "water",
        "baseStats": {"hp": 55, "attack": 50, "defense": 55, "speed": 55},
        "learnableMoves": [
            {"level": 1, "moveId": "tackle"},
            {"level": 1, "moveId": "bubble"},
            {"level": 7, "moveId": "water-gun"},
            {"level": 14, "moveId": "scratch"},
        ],
        "rarity": "common",
    },
    {
        "id": "leafshade",
        "name": "Leafshade",
        "type": "grass",
        "baseStats": {"hp": 50, "attack": 55, "defense": 60, "speed": 45},
        "learnableMoves": [
            {"level": 1, "moveId": "tackle"},
            {"level": 6, "moveId": "vine-whip"},
            {"level": 12, "moveId": "quick-attack"},
        ],
        "rarity": "common",
    },
    {
        "id": "sparkwisp",
        "name": "Sparkwisp",
        "type": "electric",
        "baseStats": {"hp": 40, "attack": 55, "defense": 35, "speed": 90},
        "learnableMoves": [
            {"level": 1, "moveId": "quick-attack"},
            {"level": 9, "moveId": "thunder-shock"},
        ],
        "rarity": "uncommon",
    },
]

_MOVE_DATA = [
    {"id": "tackle", "name": "Tackle", "type": "normal", "power": 40, "accuracy": 100, "pp": 35},
    {"id": "scratch", "name": "Scratch", "type": "normal", "power": 40, "accuracy": 100, "pp": 35},
    {"id": "quick-attack", "name": "Quick Attack", "type": "normal", "power": 40, "accuracy": 100, "pp": 30},
    {"id": "ember", "name": "Ember", "type": "fire", "power": 40, "accuracy": 100, "pp": 25},
    {"id": "fire-spin", "name": "Fire Spin", "type": "fire", "power": 35, "accuracy": 85, "pp": 15},
    {"id": "water-gun", "name": "Water Gun", "type": "water", "power": 40, "accuracy": 100, "pp": 25},
    {"id": "bubble", "name": "Bubble", "type": "water", "power": 40, "accuracy": 100, "pp": 30},
    {"id": "vine-whip", "name": "Vine Whip", "type": "grass", "power": 45, "accuracy": 100, "pp": 25},
    {"id": "thunder-shock", "name": "Thunder Shock", "type": "electric", "power": 40, "accuracy": 100, "pp": 30},
]

_ITEM_DATA = [
    {"id": "potion", "name": "Potion", "category": "healing", "effectValue": 30, "price": 300},
    {"id": "super-potion", "name": "Super Potion", "category": "healing", "effectValue": 60, "price": 700},
    {"id": "ghost-ball", "name": "Ghost Ball", "category": "capture", "effectValue": 0, "price": 200},
    {"id": "super-ball", "name": "Super Ball", "category": "capture", "effectValue": 50, "price": 600},
    {"id": "hyper-ball", "name": "Hyper Ball", "category": "capture", "effectValue": 100, "price": 1200},
]

_INVENTORY_DATA = [
    {"itemId": "potion", "quantity": 3},
    {"itemId": "super-potion", "quantity": 0},
    {"itemId": "ghost-ball", "quantity": 5},
    {"itemId": "super-ball", "quantity": 1},
    {"itemId": "hyper-ball", "quantity": 0},
]

SPECIES: dict[str, GhostSpecies] = {d["id"]: GhostSpecies.from_dict(d) for d in _SPECIES_DATA}
MOVES: dict[str, Move] = {d["id"]: Move.from_dict(d) for d in _MOVE_DATA}
ITEMS: dict[str, Item] = {d["id"]: Item.from_dict(d) for d in _ITEM_DATA}


def species_name(species_id: str) -> str:
    species = SPECIES.get(species_id)
    return species_id if species is None else species.name


def species_type(species_id: str) -> GhostType:
    species = SPECIES.get(species_id)
    return GhostType.NORMAL if species is None else species.type


def move_lookup(move_id: str) -> Move | None:
    return MOVES.get(move_id)


def make_ghost(
    ghost_id: str,
    species_id: str,
    *,
    level: int,
    move_ids: tuple[str, ...] = (),
    current_hp: int | None = None,
    nickname: str | None = None,
) -> OwnedGhost:
    stats = calculate_stats(SPECIES[species_id].base_stats, level)
    moves = tuple(OwnedMove(move_id=m, current_pp=MOVES[m].pp, max_pp=MOVES[m].pp) for m in move_ids)
    return OwnedGhost(
        id=ghost_id,
        species_id=species_id,
        nickname=nickname,
        level=level,
        current_hp=stats.hp if current_hp is None else current_hp,
        max_hp=stats.hp,
        stats=stats,
        moves=moves,
    )


def inventory_lines(category: ItemCategory | None = None) -> list[InventoryLine]:
    lines = []
    for raw in _INVENTORY_DATA:
        entry = InventoryEntry.from_dict(raw)
        item = ITEMS.get(entry.item_id)
        if item is None:
            continue
        if category is not None and item.category is not category:
            continue
        lines.append(InventoryLine(item=item, entry=entry))
    return lines


def move_lines(ghost: OwnedGhost) -> list[MoveLine]:
    lines = []
    for owned in ghost.moves:
        move = MOVES.get(owned.move_id)
        if move is not None:
            lines.append(MoveLine(move=move, owned=owned))
    return lines
