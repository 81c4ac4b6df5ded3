"""
ColonyBot.tasks: what a worker can do on a tick.

Public API
----------
    from ColonyBot.tasks import Task, TaskContext
    from ColonyBot.tasks import gather_task, recharge_task, build_task, upgrade_task
    from ColonyBot.tasks.continuation import continue_task
    from ColonyBot.tasks.selectors import GatherOptions
"""

from ColonyBot.tasks.task import Task, TaskContext, self_terminate
from ColonyBot.tasks.selectors import GatherOptions
from ColonyBot.tasks.travel import BLOCKED_ESCALATION_THRESHOLD, TravelOutcome, travel_to
from ColonyBot.tasks.executors import (
    HARVEST_OPTIONS,
    BuildTask,
    GatherTask,
    RechargeTask,
    UpgradeTask,
    build_task,
    gather_task,
    recharge_task,
    upgrade_task,
)
from ColonyBot.tasks.continuation import continue_task

__all__ = [
    "Task",
    "TaskContext",
    "self_terminate",
    "GatherOptions",
    "BLOCKED_ESCALATION_THRESHOLD",
    "TravelOutcome",
    "travel_to",
    "HARVEST_OPTIONS",
    "BuildTask",
    "GatherTask",
    "RechargeTask",
    "UpgradeTask",
    "build_task",
    "gather_task",
    "recharge_task",
    "upgrade_task",
    "continue_task",
]
