"""
Task: the atomic unit of what a worker *does* on a tick.

Design principles
-----------------
- A Task is the final translation layer between a policy decision and a
  world verb. Policies decide order; tasks resolve a target and act on it.
- Tasks are stateless. Everything that must survive the tick lives in the
  worker's WorkerMemory; everything else flows in via TaskContext.
- execute() returns True when the task has taken (or is waiting on) the
  worker's action for this tick and the caller must stop its cascade. False
  means "nothing to do here, try the next task".

TaskContext
-----------
The per-worker, per-tick blackboard. The orchestrator builds one for each
worker it processes and the same object flows through continuation, the role
policy, the executors and the travel adapter.

    orchestrator → world, memory, tick, palette
    role policy  → gather_options
    executor     → reads context, issues the world verb, updates memory
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ColonyBot.constants import Job
from ColonyBot.logger import get_logger

if TYPE_CHECKING:
    from ColonyBot.memory import WorkerMemory
    from ColonyBot.tasks.selectors import GatherOptions
    from ColonyBot.world.interface import WorldView
    from ColonyBot.world.objects import Worker

log = get_logger()


@dataclass
class TaskContext:
    worker: "Worker"
    memory: "WorkerMemory"
    world: "WorldView"
    palette: str = "#ffffff"
    # Tiers the role may gather from; also used when resuming a gather.
    gather_options: Optional["GatherOptions"] = None

    @property
    def tick(self) -> int:
        return self.world.time

    def spend_turn(self) -> None:
        self.worker.spent_turn = True

    def say(self, message: str) -> None:
        self.world.say(self.worker, message)


def self_terminate(ctx: TaskContext, message: str = "") -> None:
    """
    Retire a worker that can never complete its task again (missing body part).

    The tick counts as spent so nothing else is attempted for it.
    """
    msg = (f"{message} - " if message else "") + "Suiciding.."
    ctx.say(msg)
    log.worker(ctx.worker, msg, tick=ctx.tick)
    ctx.spend_turn()
    ctx.world.suicide(ctx.worker)


class Task(ABC):
    """
    One concrete thing a worker can do.

    Subclass and implement:
      - JOB       - which job colour / label this task reports under
      - execute() - resolve a target, act or travel, update memory
    """

    JOB: Job = Job.FREE

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def execute(self, ctx: TaskContext, **kwargs) -> bool:
        """Return True if the worker's tick is taken by this task."""

    def __repr__(self) -> str:
        return f"<{self.name}>"
