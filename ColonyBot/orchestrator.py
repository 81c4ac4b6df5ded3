"""
WorkerOrchestrator: one pass over every worker, once per tick.

For each worker, in the world's stable iteration order:

    1. skip it while it is still being spawned
    2. terminal check: one tick of life left → drop everything carried,
       forget its memory, skip it
    3. normalise memory: home region, needs-energy phase flag
    4. hand it to its role policy (continuation first, then the policy list)

The world snapshot and the memory store are passed in for the tick; the
orchestrator keeps nothing between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ColonyBot.logger import get_logger
from ColonyBot.roles.policy_registry import PolicyRegistry, policy_registry
from ColonyBot.tasks.task import TaskContext

if TYPE_CHECKING:
    from ColonyBot.memory import MemoryStore, WorkerMemory
    from ColonyBot.world.interface import WorldView
    from ColonyBot.world.objects import Worker

log = get_logger()


@dataclass
class TickReport:
    """What happened to the colony's workers this tick (for logs and tests)."""
    tick: int
    acted: int = 0
    idle: int = 0
    spawning: int = 0
    died: int = 0
    unclassified: int = 0


class WorkerOrchestrator:

    def __init__(self, registry: Optional[PolicyRegistry] = None) -> None:
        self.registry = registry if registry is not None else policy_registry

    def do_work(self, world: "WorldView", memory: "MemoryStore") -> TickReport:
        report = TickReport(tick=world.time)

        for worker in list(world.workers.values()):
            if worker.spawning:
                report.spawning += 1
                continue

            worker.spent_turn = False

            if self.prepare_worker(worker, world, memory):
                report.died += 1
                continue

            policy = self.registry.for_worker(worker)
            if policy is None:
                report.unclassified += 1
                continue

            ctx = TaskContext(worker=worker, memory=memory.get(worker.name),
                              world=world, palette=policy.palette)
            if policy.work(ctx):
                report.acted += 1
            else:
                report.idle += 1

        log.debug("Tick %d: %d acted, %d idle, %d spawning, %d died",
                  report.tick, report.acted, report.idle, report.spawning, report.died,
                  tick=report.tick)
        return report

    # ------------------------------------------------------------------
    # Per-worker preconditions
    # ------------------------------------------------------------------

    def prepare_worker(self, worker: "Worker", world: "WorldView", memory: "MemoryStore") -> bool:
        """
        Check lifetime and tidy memory to match the worker's current state.

        Returns True if the worker is dying and must not be processed further.
        """
        if worker.ticks_to_live is not None and worker.ticks_to_live <= 1:
            self._release(worker, world, memory)
            return True

        self.normalise_memory(worker, memory.get(worker.name))
        return False

    @staticmethod
    def normalise_memory(worker: "Worker", mem: "WorkerMemory") -> None:
        if not mem.home_room:
            mem.home_room = worker.room

        # Spending energy but tapped out: go get more.
        if not mem.needs_resource and worker.store.energy == 0:
            mem.needs_resource = True
            mem.current_resource_id = None
            mem.current_deposit_id = None
            return

        # Getting energy but filled up: only the resource slot is released.
        if mem.needs_resource and worker.is_full:
            mem.needs_resource = False
            mem.current_resource_id = None

    @staticmethod
    def _release(worker: "Worker", world: "WorldView", memory: "MemoryStore") -> None:
        world.say(worker, "Dying -- dropping resources")
        carried = dict(worker.store.contents)
        for resource in carried:
            world.drop(worker, resource)
        memory.delete(worker.name)
        worker.spent_turn = True
        log.worker(worker, "Dying -- dropping resources", tick=world.time)
        log.colony_event(
            "DEATH",
            f"{worker.name} dropped {sum(carried.values())} "
            f"({', '.join(f'{v} {k}' for k, v in carried.items()) or 'nothing'})",
            tick=world.time,
        )
