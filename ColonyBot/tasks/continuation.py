"""
Continuation: finish what you started.

Runs for every worker, every tick, before its role policy is consulted. Each
remembered target is retried only while its precondition still holds; a slot
whose retry fails (or whose precondition no longer holds) is cleared so the
policy picks something fresh.

Order is fixed and independent of role:

    1. resource  - while the store is not full, drawing only from the
                   tiers the role allows
    2. build     - while carrying energy
    3. deposit   - while carrying energy

A worker resuming an old build while its policy would now rather deposit is
expected: it finishes the job it walked to before changing its mind.
"""

from __future__ import annotations

from ColonyBot.tasks.executors import HARVEST_OPTIONS, build_task, gather_task, recharge_task
from ColonyBot.tasks.task import TaskContext


def continue_task(ctx: TaskContext) -> bool:
    """Return True if a remembered task took the worker's tick."""
    worker, memory = ctx.worker, ctx.memory

    if memory.current_resource_id:
        if not worker.is_full and gather_task.execute(ctx, ctx.gather_options or HARVEST_OPTIONS):
            return True
        memory.current_resource_id = None

    if memory.current_build_id:
        if worker.store.energy != 0 and build_task.execute(ctx, specific_id=memory.current_build_id):
            return True
        memory.current_build_id = None

    if memory.current_deposit_id:
        if worker.store.energy != 0 and recharge_task.execute(ctx, specific_id=memory.current_deposit_id):
            return True
        memory.current_deposit_id = None

    return False
