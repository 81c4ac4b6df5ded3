"""
RolePolicy: a role's behaviour as data.

A policy is two ordered lists of task steps: one for a worker that still
needs energy, one for a worker that is carrying it. The first step that takes
the tick wins; the rest are not tried.

    continuation → (needs energy ? when_empty : when_loaded) → first True wins

The policy also names the resource tiers its role may gather from, so a
resumed gather never draws from a tier the role is denied.

There is no per-role subclass. Adding a role means adding a table entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from ColonyBot.constants import ROLE_INFO, Role
from ColonyBot.tasks.continuation import continue_task
from ColonyBot.tasks.executors import build_task, gather_task, recharge_task, upgrade_task
from ColonyBot.tasks.selectors import GatherOptions
from ColonyBot.tasks.task import Task, TaskContext


@dataclass(frozen=True)
class PolicyStep:
    """One task call with its fixed keyword arguments."""
    task: Task
    kwargs: Mapping[str, Any] = field(default_factory=dict)

    def run(self, ctx: TaskContext) -> bool:
        return self.task.execute(ctx, **self.kwargs)

    def __str__(self) -> str:
        return self.task.name


@dataclass(frozen=True)
class RolePolicy:
    role: Role
    gather_options: GatherOptions
    when_empty: Tuple[PolicyStep, ...]
    when_loaded: Tuple[PolicyStep, ...]

    @property
    def palette(self) -> str:
        return ROLE_INFO[self.role].palette

    def work(self, ctx: TaskContext) -> bool:
        """Run one tick of this role for one worker. True if the tick was taken."""
        if ctx.worker.spent_turn:
            return False

        ctx.gather_options = self.gather_options
        if continue_task(ctx):
            return True

        steps = self.when_empty if ctx.memory.needs_resource else self.when_loaded
        for step in steps:
            if step.run(ctx):
                return True
        return False


# ---------------------------------------------------------------------------
# Policy table
# ---------------------------------------------------------------------------

_HARVEST_FROM = GatherOptions()
_ACQUIRE_FROM = GatherOptions(pickup_dropped=True, from_storage=True, from_sources=False)
_SCAVENGE_FROM = GatherOptions(pickup_dropped=True, from_storage=True, from_sources=True)

_HARVEST = PolicyStep(gather_task, {"options": _HARVEST_FROM})
_ACQUIRE = PolicyStep(gather_task, {"options": _ACQUIRE_FROM})
_SCAVENGE = PolicyStep(gather_task, {"options": _SCAVENGE_FROM})
_RECHARGE = PolicyStep(recharge_task)
_BUILD = PolicyStep(build_task)
_UPGRADE = PolicyStep(upgrade_task)


GATHERER_POLICY = RolePolicy(
    role=Role.GATHERER,
    gather_options=_HARVEST_FROM,
    when_empty=(_HARVEST,),
    when_loaded=(_RECHARGE, _BUILD, _UPGRADE),
)

BUILDER_POLICY = RolePolicy(
    role=Role.BUILDER,
    gather_options=_ACQUIRE_FROM,
    when_empty=(_ACQUIRE,),
    when_loaded=(_BUILD, _UPGRADE, _RECHARGE),
)

UPGRADER_POLICY = RolePolicy(
    role=Role.UPGRADER,
    gather_options=_SCAVENGE_FROM,
    when_empty=(_SCAVENGE,),
    when_loaded=(_UPGRADE, _BUILD, _RECHARGE),
)

DEFAULT_POLICIES: Tuple[RolePolicy, ...] = (GATHERER_POLICY, BUILDER_POLICY, UPGRADER_POLICY)
