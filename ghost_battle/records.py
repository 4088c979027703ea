"""Plain descriptor records consumed by the battle panels.

The records mirror the game's shared data files (camelCase JSON). Panels
never fetch or persist them; the host builds them and passes them in.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum


class GhostType(str, Enum):
    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    GHOST = "ghost"
    NORMAL = "normal"


class ItemCategory(str, Enum):
    HEALING = "healing"
    CAPTURE = "capture"
    OTHER = "other"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


def _require(data: Mapping[str, object], key: str) -> object:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    return data[key]


def _int(data: Mapping[str, object], key: str, *, minimum: int | None = None) -> int:
    raw = _require(data, key)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"field {key!r} must be an integer, got {raw!r}")
    if minimum is not None and raw < minimum:
        raise ValueError(f"field {key!r} must be >= {minimum}, got {raw}")
    return int(raw)


def _str(data: Mapping[str, object], key: str) -> str:
    raw = _require(data, key)
    if not isinstance(raw, str) or raw == "":
        raise ValueError(f"field {key!r} must be a non-empty string, got {raw!r}")
    return raw


def _opt_str(data: Mapping[str, object], key: str) -> str | None:
    raw = data.get(key)
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValueError(f"field {key!r} must be a string, got {raw!r}")
    return raw


def _enum(enum_cls: type[Enum], data: Mapping[str, object], key: str):
    raw = _require(data, key)
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValueError(f"field {key!r} has unknown value {raw!r}") from None


def _mapping(raw: object, what: str) -> Mapping[str, object]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"{what} must be an object, got {type(raw).__name__}")
    return raw


@dataclass(frozen=True, slots=True)
class BaseStats:
    hp: int
    attack: int
    defense: int
    speed: int

    @classmethod
    def from_dict(cls, data: object) -> "BaseStats":
        d = _mapping(data, "stats")
        return cls(
            hp=_int(d, "hp", minimum=1),
            attack=_int(d, "attack", minimum=1),
            defense=_int(d, "defense", minimum=1),
            speed=_int(d, "speed", minimum=1),
        )


@dataclass(frozen=True, slots=True)
class Move:
    id: str
    name: str
    type: GhostType
    power: int
    accuracy: int
    pp: int
    description: str | None = None

    @classmethod
    def from_dict(cls, data: object) -> "Move":
        d = _mapping(data, "move")
        return cls(
            id=_str(d, "id"),
            name=_str(d, "name"),
            type=_enum(GhostType, d, "type"),
            power=_int(d, "power", minimum=0),
            accuracy=_int(d, "accuracy", minimum=0),
            pp=_int(d, "pp", minimum=1),
            description=_opt_str(d, "description"),
        )


@dataclass(frozen=True, slots=True)
class LearnableMove:
    level: int
    move_id: str


@dataclass(frozen=True, slots=True)
class GhostSpecies:
    id: str
    name: str
    type: GhostType
    base_stats: BaseStats
    learnable_moves: tuple[LearnableMove, ...]
    rarity: Rarity = Rarity.COMMON
    description: str | None = None

    @classmethod
    def from_dict(cls, data: object) -> "GhostSpecies":
        d = _mapping(data, "species")
        raw_moves = d.get("learnableMoves", [])
        if not isinstance(raw_moves, list):
            raise ValueError("field 'learnableMoves' must be a list")
        learnable = tuple(
            LearnableMove(
                level=_int(_mapping(m, "learnable move"), "level", minimum=1),
                move_id=_str(_mapping(m, "learnable move"), "moveId"),
            )
            for m in raw_moves
        )
        return cls(
            id=_str(d, "id"),
            name=_str(d, "name"),
            type=_enum(GhostType, d, "type"),
            base_stats=BaseStats.from_dict(_require(d, "baseStats")),
            learnable_moves=learnable,
            rarity=_enum(Rarity, d, "rarity") if "rarity" in d else Rarity.COMMON,
            description=_opt_str(d, "description"),
        )


@dataclass(frozen=True, slots=True)
class OwnedMove:
    move_id: str
    current_pp: int
    max_pp: int

    @classmethod
    def from_dict(cls, data: object) -> "OwnedMove":
        d = _mapping(data, "owned move")
        return cls(
            move_id=_str(d, "moveId"),
            current_pp=_int(d, "currentPP", minimum=0),
            max_pp=_int(d, "maxPP", minimum=1),
        )


@dataclass(frozen=True, slots=True)
class OwnedGhost:
    id: str
    species_id: str
    level: int
    current_hp: int
    max_hp: int
    stats: BaseStats
    moves: tuple[OwnedMove, ...] = ()
    experience: int = 0
    nickname: str | None = None

    @property
    def fainted(self) -> bool:
        return self.current_hp <= 0

    def display_name(self, species_name: Callable[[str], str]) -> str:
        return self.nickname or species_name(self.species_id)

    def hp_percent(self) -> int:
        if self.max_hp <= 0:
            return 0
        return int(round(self.current_hp * 100 / self.max_hp))

    @classmethod
    def from_dict(cls, data: object) -> "OwnedGhost":
        d = _mapping(data, "ghost")
        raw_moves = d.get("moves", [])
        if not isinstance(raw_moves, list):
            raise ValueError("field 'moves' must be a list")
        return cls(
            id=_str(d, "id"),
            species_id=_str(d, "speciesId"),
            nickname=_opt_str(d, "nickname") or None,
            level=_int(d, "level", minimum=1),
            experience=_int(d, "experience", minimum=0) if "experience" in d else 0,
            current_hp=_int(d, "currentHp", minimum=0),
            max_hp=_int(d, "maxHp", minimum=1),
            stats=BaseStats.from_dict(_require(d, "stats")),
            moves=tuple(OwnedMove.from_dict(m) for m in raw_moves),
        )


@dataclass(frozen=True, slots=True)
class Item:
    id: str
    name: str
    category: ItemCategory
    effect_value: int
    price: int = 0
    description: str | None = None

    @classmethod
    def from_dict(cls, data: object) -> "Item":
        d = _mapping(data, "item")
        return cls(
            id=_str(d, "id"),
            name=_str(d, "name"),
            category=_enum(ItemCategory, d, "category"),
            effect_value=_int(d, "effectValue", minimum=0),
            price=_int(d, "price", minimum=0) if "price" in d else 0,
            description=_opt_str(d, "description"),
        )


@dataclass(frozen=True, slots=True)
class InventoryEntry:
    item_id: str
    quantity: int

    @classmethod
    def from_dict(cls, data: object) -> "InventoryEntry":
        d = _mapping(data, "inventory entry")
        return cls(item_id=_str(d, "itemId"), quantity=_int(d, "quantity", minimum=0))


@dataclass(frozen=True, slots=True)
class LevelUpResult:
    new_level: int
    new_stats: BaseStats
    new_max_hp: int
    learnable_move_ids: tuple[str, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class InventoryLine:
    """An item definition paired with how many the player owns."""

    item: Item
    entry: InventoryEntry

    @property
    def usable(self) -> bool:
        return self.entry.quantity > 0


@dataclass(frozen=True, slots=True)
class MoveLine:
    """A move definition paired with the ghost's PP for it."""

    move: Move
    owned: OwnedMove

    @property
    def usable(self) -> bool:
        return self.owned.current_pp > 0
