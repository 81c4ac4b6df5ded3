"""
SpawnManager: keeps each role at its target headcount.

Once per tick, for every idle spawn, roles are visited in ROLE_INFO order.
The first role below its headcount gets a spawn request if the region can
afford the body; if it cannot, the manager stops for this tick rather than
letting a cheaper role jump the queue.

Names
-----
Workers are named ``<Role>_<tick>``. Two spawns in one tick would collide, so
the allocator probes ``_1`` … ``_5`` suffixes before giving up.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Collection, Dict, Mapping, Optional

from ColonyBot.constants import ROLE_INFO, ResultCode, Role, RoleInfo, StructureType
from ColonyBot.logger import get_logger

if TYPE_CHECKING:
    from ColonyBot.world.interface import WorldView
    from ColonyBot.world.objects import Structure

log = get_logger()

# Suffixes probed after the bare name is taken.
_NAME_RETRIES: int = 5


def allocate_name(role: Role, tick: int, taken: Collection[str]) -> Optional[str]:
    """First free name for *role* at *tick*, or None once every probe collides."""
    for retry in range(_NAME_RETRIES + 1):
        suffix = f"_{retry}" if retry else ""
        name = f"{role.value}_{tick}{suffix}"
        if name not in taken:
            log.debug("[Spawn] name available: %s", name, tick=tick)
            return name
        log.debug("[Spawn] name unavailable: %s", name, tick=tick)
    log.warning("[Spawn] no free name for %s after %d retries", role.value, _NAME_RETRIES, tick=tick)
    return None


class SpawnManager:
    """
    Intended usage
    --------------
    Engine holds one instance and calls ``spawn_if_needed(world, spawn)`` for
    every owned spawn once per tick. Headcounts default to ROLE_INFO and can
    be overridden per run.
    """

    def __init__(self, target_amounts: Optional[Mapping[Role, int]] = None) -> None:
        self.target_amounts: Dict[Role, int] = {
            role: info.target_amount for role, info in ROLE_INFO.items()
        }
        if target_amounts:
            self.target_amounts.update(target_amounts)

    def count_role(self, world: "WorldView", role: Role) -> int:
        return sum(
            1 for w in world.workers.values()
            if (w.role or Role.from_name(w.name)) is role
        )

    def spawn_if_needed(self, world: "WorldView", spawn: "Structure") -> Optional[str]:
        """Request at most one worker from *spawn*. Returns the new worker's name."""
        if spawn.spawning:
            return None

        for role, info in ROLE_INFO.items():
            current = self.count_role(world, role)
            wanted = self.target_amounts.get(role, 0)
            if current >= wanted:
                log.debug("[Spawn] Not spawning anything for %s; amount %d/%d",
                          role.value, current, wanted, tick=world.time)
                continue

            available = self._energy_available(world, spawn.room)
            if available < info.cost:
                log.debug("[Spawn] Not enough energy to spawn worker for role %s; cost %d/%d",
                          role.value, info.cost, available, tick=world.time)
                return None

            log.debug("[Spawn] Attempting worker spawn for role %s; cost %d/%d",
                      role.value, info.cost, available, tick=world.time)
            return self.spawn_with_role(world, spawn, info)
        return None

    def spawn_with_role(self, world: "WorldView", spawn: "Structure", info: RoleInfo) -> Optional[str]:
        name = allocate_name(info.role, world.time, world.workers.keys())
        if name is None:
            return None

        status = world.spawn_worker(spawn, info.body, name, info.role, dry_run=True)
        if status is not ResultCode.OK:
            log.debug("[Spawn] dry run for %s refused: %s", name, status.name, tick=world.time)
            return None

        status = world.spawn_worker(spawn, info.body, name, info.role)
        if status is not ResultCode.OK:
            log.warning("Spawn unexpectedly failed with error %s for worker: %s",
                        status.name, name, tick=world.time)
            return None

        log.colony_event(
            "SPAWN",
            f"{name} body=[{', '.join(p.value for p in info.body)}]",
            tick=world.time,
        )
        return name

    @staticmethod
    def _energy_available(world: "WorldView", room: str) -> int:
        return sum(
            s.store.energy
            for kind in (StructureType.SPAWN, StructureType.EXTENSION)
            for s in world.structures_in(room, kind)
            if s.my and s.store is not None
        )
