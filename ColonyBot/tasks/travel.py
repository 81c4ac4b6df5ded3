"""
Travel: wraps the world's movement primitive.

The world only answers "did this step work". Travel turns that answer into
something an executor can act on, and keeps the worker's blocked counter:

    OK          → counter reset, tick spent             → MOVED
    TIRED       → tick spent (the move is still queued) → MOVED
    NO_PATH     → counter + 1                           → BLOCKED
                  counter reached the threshold         → ESCALATE
    NO_BODYPART → worker retires itself                 → FATAL
    anything else                                       → FAILED

A worker that already acted this tick is not moved at all (BUSY).
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional

from sc2.position import Point2

from ColonyBot.colors import color_for_action
from ColonyBot.constants import Job, ResultCode
from ColonyBot.tasks.task import TaskContext, self_terminate
from ColonyBot.world.interface import VisualHint

# Consecutive NO_PATH results before the caller should give up on a target.
BLOCKED_ESCALATION_THRESHOLD: int = 5


class TravelOutcome(Enum):
    MOVED    = auto()
    BUSY     = auto()
    BLOCKED  = auto()
    ESCALATE = auto()
    FATAL    = auto()
    FAILED   = auto()


def travel_to(ctx: TaskContext, target: Point2, job: Job, color: Optional[str] = None) -> TravelOutcome:
    worker, memory = ctx.worker, ctx.memory
    if worker.spent_turn:
        return TravelOutcome.BUSY

    hint = VisualHint(stroke=color or color_for_action(ctx.palette, job))
    status = ctx.world.move_to(worker, target, hint)

    if status is ResultCode.NO_PATH:
        memory.blocked_count += 1
        ctx.say(f"No path ({memory.blocked_count})")
        if memory.blocked_count >= BLOCKED_ESCALATION_THRESHOLD:
            return TravelOutcome.ESCALATE
        return TravelOutcome.BLOCKED

    if status in (ResultCode.OK, ResultCode.TIRED):
        if status is ResultCode.OK:
            memory.blocked_count = 0
        ctx.spend_turn()
        return TravelOutcome.MOVED

    if status is ResultCode.NO_BODYPART:
        self_terminate(ctx, "No bodypart for moving")
        return TravelOutcome.FATAL

    return TravelOutcome.FAILED
