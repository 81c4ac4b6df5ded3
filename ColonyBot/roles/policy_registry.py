"""
PolicyRegistry: maps roles to their behaviour policy.

Usage
-----
The registry is a singleton populated at engine start. Each role has exactly
one policy; registering a role again replaces the old policy.

    policy_registry.register(GATHERER_POLICY)
    policy = policy_registry.for_worker(worker)

Classification
--------------
A worker's role is the explicit ``worker.role`` set at creation. Workers that
predate that field (memory migrated from an older colony) are classified by
name prefix, and must match exactly one role.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from ColonyBot.constants import Role
from ColonyBot.logger import get_logger
from ColonyBot.roles.policy import DEFAULT_POLICIES, RolePolicy

if TYPE_CHECKING:
    from ColonyBot.world.objects import Worker

log = get_logger()


class PolicyRegistry:
    """Thread-safety: not needed, the engine is single-threaded."""

    def __init__(self) -> None:
        self._policies: Dict[Role, RolePolicy] = {}

    def register(self, policy: RolePolicy) -> None:
        self._policies[policy.role] = policy

    def get(self, role: Role) -> Optional[RolePolicy]:
        return self._policies.get(role)

    def for_worker(self, worker: "Worker") -> Optional[RolePolicy]:
        role = worker.role or Role.from_name(worker.name)
        if role is None:
            log.warning("%s matches no single role; skipping", worker.name)
            return None
        return self._policies.get(role)

    def summary(self) -> str:
        """Human-readable registry listing (for startup logs)."""
        lines = []
        for role, policy in self._policies.items():
            empty = ", ".join(str(s) for s in policy.when_empty)
            loaded = ", ".join(str(s) for s in policy.when_loaded)
            lines.append(f"  {role.value}: empty=[{empty}] loaded=[{loaded}]")
        return "\n".join(lines) if lines else "  (empty)"


def register_default_policies(registry: Optional[PolicyRegistry] = None) -> PolicyRegistry:
    """Populate *registry* (default: the module singleton) with every built-in role."""
    registry = registry if registry is not None else policy_registry
    for policy in DEFAULT_POLICIES:
        registry.register(policy)
    return registry


# ---------------------------------------------------------------------------
# Module-level singleton - import this everywhere
# ---------------------------------------------------------------------------
policy_registry = PolicyRegistry()
