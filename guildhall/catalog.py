"""Skill and weapon definitions loaded for the game world."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class SkillType(IntEnum):
    ATTACK = 0
    HEAL = 1
    ATTACK_BUFF = 2
    SPEED_BUFF = 3


@dataclass
class Skill:
    """A skill a weapon can cast."""

    type: SkillType
    value: float
    duration: float
    code: int
    cool_time: float
    weapon_code: int

    def __post_init__(self) -> None:
        self.type = SkillType(self.type)


@dataclass
class Weapon:
    """A weapon and its attack speed."""

    code: int
    attack_speed: float


@dataclass
class SkillBook:
    """All known skills keyed by skill code."""

    skills: dict[int, Skill] = field(default_factory=dict)

    def clear(self) -> None:
        self.skills.clear()


@dataclass
class WeaponBook:
    """All known weapons keyed by weapon code."""

    weapons: dict[int, Weapon] = field(default_factory=dict)

    def clear(self) -> None:
        self.weapons.clear()