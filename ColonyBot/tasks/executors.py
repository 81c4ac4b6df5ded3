"""
Task executors: gather, recharge, build, upgrade.

Every executor follows the same three steps:

  1. Resolve a target: the remembered / caller-supplied id, or a fresh pick
     from the selectors. The chosen id is written to memory *before* acting
     so a worker that has to walk first resumes the same target next tick.
  2. Act on it. In range and OK → the tick is spent.
  3. React to the result code:
       NOT_IN_RANGE         walk toward it (see travel.py)
       NOT_ENOUGH_RESOURCES the target is tapped; gather picks another once
       FULL / INVALID_TARGET the remembered id is stale; forget it
       NO_BODYPART          the worker can never do this; it retires itself
       NOT_OWNER            (upgrade) the worker is lost; log it, do nothing

Reselection is single-shot: a retry is always made with allow_retry=False
and the failing id excluded, so two dead targets can never ping-pong.
"""

from __future__ import annotations

from typing import Optional

from ColonyBot.constants import RESOURCE_ENERGY, Job, ResultCode
from ColonyBot.logger import get_logger
from ColonyBot.tasks.selectors import (
    GatherOptions,
    find_build_target,
    find_deposit_sink,
    find_resource_source,
)
from ColonyBot.tasks.task import Task, TaskContext, self_terminate
from ColonyBot.tasks.travel import TravelOutcome, travel_to
from ColonyBot.world.objects import DroppedResource, GameObject, Source, Structure

log = get_logger()


# Raw-node harvesting: containers and active sources, nothing dropped, no storage.
HARVEST_OPTIONS = GatherOptions()


# ---------------------------------------------------------------------------
# GatherTask
# ---------------------------------------------------------------------------

class GatherTask(Task):
    """
    Fill the worker's store from the best available resource.

    The remembered resource id always wins over a fresh search, which is what
    lets a worker walk to a far source over several ticks. If the remembered
    target is gone the search runs in the same call.
    """

    JOB = Job.HARVEST

    def execute(
        self,
        ctx: TaskContext,
        options: GatherOptions = HARVEST_OPTIONS,
        exclude_id: Optional[str] = None,
        allow_retry: bool = True,
    ) -> bool:
        worker, memory, world = ctx.worker, ctx.memory, ctx.world
        if worker.spent_turn:
            return False

        source: Optional[GameObject] = None
        if memory.current_resource_id:
            if exclude_id is not None and memory.current_resource_id == exclude_id:
                memory.current_resource_id = None
            else:
                source = world.get_object_by_id(memory.current_resource_id)

        if source is None:
            source = find_resource_source(world, worker, options, exclude_id)

        if source is None:
            ctx.say("No sources found")
            log.worker(worker, "No sources found", tick=ctx.tick)
            return False

        memory.current_resource_id = source.id
        status = self._take(ctx, source)

        if worker.is_full:
            memory.needs_resource = False

        if status is ResultCode.OK:
            memory.blocked_count = 0
            ctx.spend_turn()
            return True

        if status is ResultCode.NOT_IN_RANGE:
            outcome = travel_to(ctx, source.pos, self.JOB)
            if outcome in (TravelOutcome.MOVED, TravelOutcome.FATAL):
                return True
            if outcome is TravelOutcome.ESCALATE and allow_retry:
                log.worker(worker, "Blocked - Finding different resource", tick=ctx.tick)
                memory.current_resource_id = None
                memory.blocked_count = 0
                return self.execute(ctx, options, exclude_id=source.id, allow_retry=False)
            return False

        if status is ResultCode.NOT_ENOUGH_RESOURCES:
            memory.current_resource_id = None
            if not allow_retry:
                return False
            log.worker(worker, "Resource tapped - Finding different resource", tick=ctx.tick)
            return self.execute(ctx, options, exclude_id=source.id, allow_retry=False)

        if status is ResultCode.NO_BODYPART:
            self_terminate(ctx, "No bodypart for carrying")
            return True

        memory.current_resource_id = None
        return False

    def _take(self, ctx: TaskContext, source: GameObject) -> ResultCode:
        if isinstance(source, Source):
            return ctx.world.harvest(ctx.worker, source)
        if isinstance(source, Structure):
            return ctx.world.withdraw(ctx.worker, source, RESOURCE_ENERGY)
        if isinstance(source, DroppedResource):
            return ctx.world.pickup(ctx.worker, source)
        log.error("Source %s is of an unknown type!", source.id, tick=ctx.tick)
        return ResultCode.INVALID_TARGET


# ---------------------------------------------------------------------------
# RechargeTask
# ---------------------------------------------------------------------------

class RechargeTask(Task):
    """Carry energy into spawns and extensions first, towers second."""

    JOB = Job.RECHARGE

    def execute(
        self,
        ctx: TaskContext,
        specific_id: Optional[str] = None,
        exclude_id: Optional[str] = None,
        allow_retry: bool = True,
    ) -> bool:
        worker, memory, world = ctx.worker, ctx.memory, ctx.world
        if worker.spent_turn:
            return False

        structure = find_deposit_sink(world, worker, specific_id, exclude_id)
        if structure is None:
            return False

        memory.current_deposit_id = structure.id
        status = world.transfer(worker, structure, RESOURCE_ENERGY)

        if status is ResultCode.OK:
            memory.blocked_count = 0
            ctx.spend_turn()
            return True

        if status is ResultCode.NOT_IN_RANGE:
            outcome = travel_to(ctx, structure.pos, self.JOB)
            if outcome is TravelOutcome.ESCALATE and allow_retry:
                log.worker(worker, "Blocked - Finding different structure to recharge", tick=ctx.tick)
                memory.current_deposit_id = None
                memory.blocked_count = 0
                return self.execute(ctx, exclude_id=structure.id, allow_retry=False)
            return True

        if status is ResultCode.NO_BODYPART:
            self_terminate(ctx, "No bodypart for carrying")
            return True

        memory.current_deposit_id = None
        return False


# ---------------------------------------------------------------------------
# BuildTask
# ---------------------------------------------------------------------------

class BuildTask(Task):
    """Spend carried energy on the nearest (or remembered) construction site."""

    JOB = Job.BUILD

    def execute(
        self,
        ctx: TaskContext,
        specific_id: Optional[str] = None,
        exclude_id: Optional[str] = None,
        allow_retry: bool = True,
    ) -> bool:
        worker, memory, world = ctx.worker, ctx.memory, ctx.world
        if worker.spent_turn:
            return False

        site = find_build_target(world, worker, specific_id, exclude_id)
        if site is None:
            return False

        memory.current_build_id = site.id
        status = world.build(worker, site)

        if status is ResultCode.OK:
            memory.blocked_count = 0
            ctx.spend_turn()
            return True

        if status is ResultCode.NOT_IN_RANGE:
            outcome = travel_to(ctx, site.pos, self.JOB)
            if outcome is TravelOutcome.ESCALATE and allow_retry:
                log.worker(worker, "Blocked - Finding different construction site", tick=ctx.tick)
                memory.current_build_id = None
                memory.blocked_count = 0
                return self.execute(ctx, exclude_id=site.id, allow_retry=False)
            return True

        if status is ResultCode.NO_BODYPART:
            self_terminate(ctx, "No bodypart for building")
            return True

        memory.current_build_id = None
        return False


# ---------------------------------------------------------------------------
# UpgradeTask
# ---------------------------------------------------------------------------

class UpgradeTask(Task):
    """
    Pour energy into the home region's controller.

    A worker that wandered out of its home region still upgrades the home
    controller, never the one it happens to be standing next to.
    """

    JOB = Job.UPGRADE

    def execute(self, ctx: TaskContext) -> bool:
        worker, memory, world = ctx.worker, ctx.memory, ctx.world
        if worker.spent_turn:
            return False

        room_name = memory.home_room or worker.room
        room = world.room(room_name)
        controller = room.controller if room is not None else None
        if controller is None:
            log.warning("%s cannot find its controller. Assigned to %s.",
                        worker.name, memory.home_room, tick=ctx.tick)
            return False
        if not controller.my:
            log.warning("%s attempting to upgrade at a controller not owned by us!",
                        worker.name, tick=ctx.tick)
            return False

        status = world.upgrade_controller(worker, controller)

        if status is ResultCode.OK:
            memory.blocked_count = 0
            ctx.spend_turn()
            return True

        if status is ResultCode.NOT_IN_RANGE:
            travel_to(ctx, controller.pos, self.JOB)
            return True

        if status is ResultCode.NOT_OWNER:
            log.info("%s is lost in %s", worker.name, worker.room, tick=ctx.tick)
        elif status is ResultCode.NO_BODYPART:
            self_terminate(ctx, "No bodypart for upgrading")
            return True
        return False


# ---------------------------------------------------------------------------
# Module-level singletons - tasks are stateless, share one of each
# ---------------------------------------------------------------------------

gather_task = GatherTask()
recharge_task = RechargeTask()
build_task = BuildTask()
upgrade_task = UpgradeTask()
