"""
Shared enums and tuning tables.

Everything here is a closed set: roles, jobs, world result codes, body parts
and structure types. Engine modules keep their own private thresholds next to
the code that uses them; only values that more than one layer needs live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple


# ---------------------------------------------------------------------------
# Roles and jobs
# ---------------------------------------------------------------------------

class Role(Enum):
    """Worker kinds. The value doubles as the name prefix of spawned workers."""
    GATHERER = "Gatherer"
    BUILDER  = "Builder"
    UPGRADER = "Upgrader"

    @classmethod
    def from_name(cls, name: str) -> Optional["Role"]:
        """
        Classify a legacy worker by its name prefix (case-insensitive).

        Returns None unless exactly one role matches.
        """
        lowered = name.lower()
        matches = [r for r in cls if lowered.startswith(r.value.lower())]
        return matches[0] if len(matches) == 1 else None


class Job(Enum):
    FREE     = ""
    HARVEST  = "Harvest"
    RECHARGE = "Recharge"
    BUILD    = "Build"
    UPGRADE  = "Upgrade"
    DIE      = "Die"


# ---------------------------------------------------------------------------
# World result codes
# ---------------------------------------------------------------------------

class ResultCode(Enum):
    """Outcome of any world verb (actions, movement, spawning)."""
    OK                   = auto()
    NOT_IN_RANGE         = auto()
    NOT_ENOUGH_RESOURCES = auto()   # source tapped, store empty, spawn can't afford
    FULL                 = auto()   # destination has no free capacity
    INVALID_TARGET       = auto()
    NO_BODYPART          = auto()
    NOT_OWNER            = auto()
    TIRED                = auto()
    NO_PATH              = auto()
    NAME_EXISTS          = auto()
    BUSY                 = auto()


# ---------------------------------------------------------------------------
# Bodies and structures
# ---------------------------------------------------------------------------

class BodyPart(Enum):
    WORK  = "work"
    CARRY = "carry"
    MOVE  = "move"


BODYPART_COST: Dict[BodyPart, int] = {
    BodyPart.WORK:  100,
    BodyPart.CARRY: 50,
    BodyPart.MOVE:  50,
}

CARRY_CAPACITY: int = 50        # store capacity added per CARRY part
HARVEST_POWER: int = 2          # energy per WORK part per harvest
BUILD_POWER: int = 5            # progress per WORK part per build
UPGRADE_POWER: int = 1          # progress per WORK part per upgrade
WORKER_LIFE_TIME: int = 1500
SPAWN_TIME_PER_PART: int = 3

RESOURCE_ENERGY: str = "energy"


class StructureType(Enum):
    SPAWN     = "spawn"
    EXTENSION = "extension"
    TOWER     = "tower"
    CONTAINER = "container"
    STORAGE   = "storage"
    LINK      = "link"
    ROAD      = "road"


# Sinks whose fullness disqualifies them as a remembered deposit target.
CAPACITY_BOUNDED_SINKS: frozenset = frozenset({
    StructureType.SPAWN,
    StructureType.EXTENSION,
    StructureType.TOWER,
})


class FindKind(Enum):
    """Object families the world can search by path cost."""
    DROPPED_RESOURCES     = auto()
    STRUCTURES            = auto()
    MY_STRUCTURES         = auto()
    SOURCES_ACTIVE        = auto()
    MY_CONSTRUCTION_SITES = auto()


# ---------------------------------------------------------------------------
# Role catalogue
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RoleInfo:
    """
    Creation recipe for a role.

    body          : parts the spawn builds the worker from
    target_amount : headcount the spawn manager keeps alive
    palette       : base colour for path visualisation
    """
    role: Role
    body: Tuple[BodyPart, ...]
    target_amount: int
    palette: str

    @property
    def cost(self) -> int:
        return sum(BODYPART_COST[p] for p in self.body)


_STANDARD_BODY = (BodyPart.WORK, BodyPart.CARRY, BodyPart.MOVE, BodyPart.MOVE)

ROLE_INFO: Dict[Role, RoleInfo] = {
    Role.GATHERER: RoleInfo(Role.GATHERER, _STANDARD_BODY, target_amount=3, palette="#800080"),
    Role.BUILDER:  RoleInfo(Role.BUILDER,  _STANDARD_BODY, target_amount=1, palette="#000080"),
    Role.UPGRADER: RoleInfo(Role.UPGRADER, _STANDARD_BODY, target_amount=1, palette="#008000"),
}
