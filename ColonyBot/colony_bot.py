"""
ColonyBot - main engine class.

The per-tick loop:
- forget memory of workers that no longer exist
- let every idle spawn top up role headcounts
- run every worker once (continuation, then role policy)
"""

from __future__ import annotations

from typing import Mapping, Optional

from ColonyBot.constants import Role
from ColonyBot.logger import get_logger
from ColonyBot.memory import MemoryStore
from ColonyBot.orchestrator import TickReport, WorkerOrchestrator
from ColonyBot.roles.policy_registry import PolicyRegistry, policy_registry, register_default_policies
from ColonyBot.spawning import SpawnManager
from ColonyBot.world.interface import WorldView

log = get_logger()


class ColonyBot:
    """
    Owns the memory store and the managers; the world is handed in per tick.
    """

    def __init__(
        self,
        memory: Optional[MemoryStore] = None,
        registry: Optional[PolicyRegistry] = None,
        target_amounts: Optional[Mapping[Role, int]] = None,
        spawning_enabled: bool = True,
    ) -> None:
        self.memory = memory if memory is not None else MemoryStore()
        if registry is None:
            registry = register_default_policies(policy_registry)
        self.registry = registry

        self.orchestrator = WorkerOrchestrator(self.registry)
        self.spawn_manager = SpawnManager(target_amounts)
        self.spawning_enabled = spawning_enabled
        self.last_report: Optional[TickReport] = None

        log.info("Registered role policies:\n%s", self.registry.summary())

    def on_step(self, world: WorldView) -> TickReport:
        """Run one tick against *world*."""
        self.memory.cleanup(world.workers.keys(), tick=world.time)
        log.debug("Current game tick is %d", world.time, tick=world.time)

        if self.spawning_enabled:
            for spawn in world.spawns.values():
                self.spawn_manager.spawn_if_needed(world, spawn)

        self.last_report = self.orchestrator.do_work(world, self.memory)
        return self.last_report
