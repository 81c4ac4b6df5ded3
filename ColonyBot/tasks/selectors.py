"""
Target selectors: where should this worker go for its next unit of work?

Every selector is a pure read: it queries the world and returns an object (or
None), it never writes memory. The executor that called it persists the id.

Tiers
-----
Each selector walks a fixed list of tiers and returns the first tier that
yields anything. Inside a tier the world picks the cheapest object to walk to;
across tiers the order always wins, however far away the winner is.

Resource source (gather):
    1. dropped energy                 (only with pickup_dropped)
    2. container, or storage          (storage only with from_storage),
       holding more than CONTAINER_MIN_ENERGY
    3. active source                  (only with from_sources)

Deposit sink (recharge):
    0. the remembered structure, rejected outright if it is a full
       spawn / extension / tower
    1. spawn or extension with free capacity
    2. tower with free capacity

Build target:
    0. the remembered site, if it still exists
    1. own construction site

An excluded id is never returned by any tier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ColonyBot.constants import RESOURCE_ENERGY, FindKind, StructureType
from ColonyBot.world.objects import ConstructionSite, DroppedResource, GameObject, Structure

if TYPE_CHECKING:
    from ColonyBot.world.interface import WorldView
    from ColonyBot.world.objects import Worker

# Containers at or below this much stored energy are not worth walking to.
CONTAINER_MIN_ENERGY: int = 100

_CONTAINER_TYPES = frozenset({StructureType.CONTAINER})
_STORAGE_TYPES = frozenset({StructureType.CONTAINER, StructureType.STORAGE})
_SPAWN_TYPES = frozenset({StructureType.SPAWN, StructureType.EXTENSION})


@dataclass(frozen=True)
class GatherOptions:
    """Which resource tiers a gather attempt may draw from."""
    pickup_dropped: bool = False
    from_storage: bool = False
    from_sources: bool = True


def _not_excluded(exclude_id: Optional[str]):
    return lambda obj: exclude_id is None or obj.id != exclude_id


def find_resource_source(
    world: "WorldView",
    worker: "Worker",
    options: GatherOptions,
    exclude_id: Optional[str] = None,
) -> Optional[GameObject]:
    allowed = _not_excluded(exclude_id)

    if options.pickup_dropped:
        dropped = world.find_closest_by_path(
            worker.pos,
            FindKind.DROPPED_RESOURCES,
            lambda d: (isinstance(d, DroppedResource)
                       and d.resource_type == RESOURCE_ENERGY
                       and allowed(d)),
        )
        if dropped is not None:
            return dropped

    container_types = _STORAGE_TYPES if options.from_storage else _CONTAINER_TYPES
    container = world.find_closest_by_path(
        worker.pos,
        FindKind.STRUCTURES,
        lambda s: (isinstance(s, Structure)
                   and s.structure_type in container_types
                   and s.store is not None
                   and s.store.used_capacity() > CONTAINER_MIN_ENERGY
                   and allowed(s)),
    )
    if container is not None:
        return container

    if options.from_sources:
        return world.find_closest_by_path(worker.pos, FindKind.SOURCES_ACTIVE, allowed)
    return None


def find_deposit_sink(
    world: "WorldView",
    worker: "Worker",
    specific_id: Optional[str] = None,
    exclude_id: Optional[str] = None,
) -> Optional[GameObject]:
    if specific_id is not None and specific_id != exclude_id:
        remembered = world.get_object_by_id(specific_id)
        if remembered is not None:
            if (isinstance(remembered, Structure)
                    and remembered.is_capacity_bounded_sink
                    and remembered.store is not None
                    and remembered.store.free_capacity() == 0):
                return None
            return remembered

    allowed = _not_excluded(exclude_id)

    def has_room(s: GameObject) -> bool:
        return isinstance(s, Structure) and s.store is not None and s.store.free_capacity() > 0

    sink = world.find_closest_by_path(
        worker.pos,
        FindKind.MY_STRUCTURES,
        lambda s: has_room(s) and s.structure_type in _SPAWN_TYPES and allowed(s),
    )
    if sink is not None:
        return sink

    return world.find_closest_by_path(
        worker.pos,
        FindKind.STRUCTURES,
        lambda s: has_room(s) and s.structure_type is StructureType.TOWER and allowed(s),
    )


def find_build_target(
    world: "WorldView",
    worker: "Worker",
    specific_id: Optional[str] = None,
    exclude_id: Optional[str] = None,
) -> Optional[GameObject]:
    if specific_id is not None and specific_id != exclude_id:
        site = world.get_object_by_id(specific_id)
        if not isinstance(site, ConstructionSite):
            return None
        return site

    return world.find_closest_by_path(
        worker.pos,
        FindKind.MY_CONSTRUCTION_SITES,
        _not_excluded(exclude_id),
    )
