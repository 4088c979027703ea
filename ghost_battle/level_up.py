from __future__ import annotations

from collections.abc import Iterable

from .records import BaseStats, LearnableMove, LevelUpResult


def calculate_stat(base: int, level: int) -> int:
    return (2 * base * level) // 100 + 5


def calculate_max_hp(base_hp: int, level: int) -> int:
    return (2 * base_hp * level) // 100 + level + 10


def calculate_stats(base_stats: BaseStats, level: int) -> BaseStats:
    if level < 1:
        raise ValueError("level must be >= 1")
    return BaseStats(
        hp=calculate_max_hp(base_stats.hp, level),
        attack=calculate_stat(base_stats.attack, level),
        defense=calculate_stat(base_stats.defense, level),
        speed=calculate_stat(base_stats.speed, level),
    )


def new_learnable_moves(
    learnable_moves: Iterable[LearnableMove],
    *,
    from_level: int,
    to_level: int,
) -> tuple[str, ...]:
    """Move ids unlocked in (from_level, to_level], lowest level first."""

    unlocked = [m for m in learnable_moves if from_level < m.level <= to_level]
    unlocked.sort(key=lambda m: m.level)
    return tuple(m.move_id for m in unlocked)


def process_level_up(
    *,
    old_level: int,
    new_level: int,
    base_stats: BaseStats,
    learnable_moves: Iterable[LearnableMove],
) -> LevelUpResult:
    if new_level < old_level:
        raise ValueError("new_level must be >= old_level")
    return LevelUpResult(
        new_level=new_level,
        new_stats=calculate_stats(base_stats, new_level),
        new_max_hp=calculate_max_hp(base_stats.hp, new_level),
        learnable_move_ids=new_learnable_moves(learnable_moves, from_level=old_level, to_level=new_level),
    )
