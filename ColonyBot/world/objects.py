"""
World objects: everything a worker can see, target or be.

All positions are ``sc2.position.Point2`` on an integer grid. Ranges use
chessboard distance (diagonal steps cost the same as straight ones), which is
how action ranges and adjacency are measured everywhere in the engine.

Targets are read-only to the decision engine: only the world mutates them in
response to an action verb.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sc2.position import Point2

from ColonyBot.constants import (
    CAPACITY_BOUNDED_SINKS,
    CARRY_CAPACITY,
    RESOURCE_ENERGY,
    BodyPart,
    Role,
    StructureType,
)


def get_range(a: Point2, b: Point2) -> int:
    """Chessboard distance between two grid positions."""
    return int(max(abs(a.x - b.x), abs(a.y - b.y)))


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

@dataclass
class Store:
    """
    A bounded resource container.

    capacity is shared by all resource types; contents maps resource type to
    amount and never holds zero entries.
    """
    capacity: int
    contents: Dict[str, int] = field(default_factory=dict)

    def used_capacity(self, resource: Optional[str] = None) -> int:
        if resource is None:
            return sum(self.contents.values())
        return self.contents.get(resource, 0)

    def free_capacity(self) -> int:
        return self.capacity - self.used_capacity()

    @property
    def energy(self) -> int:
        return self.contents.get(RESOURCE_ENERGY, 0)

    def add(self, resource: str, amount: int) -> int:
        """Add up to *amount*; return what actually fit."""
        moved = max(0, min(amount, self.free_capacity()))
        if moved:
            self.contents[resource] = self.contents.get(resource, 0) + moved
        return moved

    def remove(self, resource: str, amount: int) -> int:
        """Remove up to *amount*; return what was actually taken."""
        moved = max(0, min(amount, self.contents.get(resource, 0)))
        if moved:
            left = self.contents[resource] - moved
            if left:
                self.contents[resource] = left
            else:
                del self.contents[resource]
        return moved


# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class GameObject:
    id: str
    pos: Point2
    room: str


@dataclass(eq=False)
class Source(GameObject):
    energy: int = 3000
    energy_capacity: int = 3000
    ticks_to_regeneration: int = 300

    @property
    def is_active(self) -> bool:
        return self.energy > 0


@dataclass(eq=False)
class Structure(GameObject):
    structure_type: StructureType = StructureType.CONTAINER
    my: bool = True
    store: Optional[Store] = None
    spawning: Optional[str] = None          # name of the worker being spawned

    @property
    def is_capacity_bounded_sink(self) -> bool:
        return self.structure_type in CAPACITY_BOUNDED_SINKS


@dataclass(eq=False)
class DroppedResource(GameObject):
    resource_type: str = RESOURCE_ENERGY
    amount: int = 0


@dataclass(eq=False)
class ConstructionSite(GameObject):
    structure_type: StructureType = StructureType.EXTENSION
    my: bool = True
    progress: int = 0
    progress_total: int = 3000


@dataclass(eq=False)
class Controller(GameObject):
    my: bool = True
    level: int = 1
    progress: int = 0


# ---------------------------------------------------------------------------
# Worker
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class Worker:
    """
    A mobile agent.

    Owned by the world; the decision engine reads it and only ever writes the
    behavioural fields ``spent_turn`` and ``saying``.
    """
    name: str
    pos: Point2
    room: str
    body: List[BodyPart]
    role: Optional[Role] = None
    store: Optional[Store] = None
    ticks_to_live: Optional[int] = None     # None while spawning
    spawning: bool = False
    fatigue: int = 0
    spent_turn: bool = False
    saying: Optional[str] = None

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = Store(capacity=CARRY_CAPACITY * self.count_parts(BodyPart.CARRY))

    @property
    def id(self) -> str:
        return self.name

    def count_parts(self, part: BodyPart) -> int:
        return sum(1 for p in self.body if p is part)

    def has_part(self, part: BodyPart) -> bool:
        return part in self.body

    @property
    def is_full(self) -> bool:
        return self.store.free_capacity() == 0

    def __str__(self) -> str:
        return f"[worker {self.name}]"
