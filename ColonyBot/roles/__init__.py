"""
ColonyBot.roles: per-role behaviour policies.

Public API
----------
    from ColonyBot.roles import RolePolicy, PolicyStep
    from ColonyBot.roles import policy_registry, register_default_policies
"""

from ColonyBot.roles.policy import (
    BUILDER_POLICY,
    DEFAULT_POLICIES,
    GATHERER_POLICY,
    UPGRADER_POLICY,
    PolicyStep,
    RolePolicy,
)
from ColonyBot.roles.policy_registry import PolicyRegistry, policy_registry, register_default_policies

__all__ = [
    "BUILDER_POLICY",
    "DEFAULT_POLICIES",
    "GATHERER_POLICY",
    "UPGRADER_POLICY",
    "PolicyStep",
    "RolePolicy",
    "PolicyRegistry",
    "policy_registry",
    "register_default_policies",
]
