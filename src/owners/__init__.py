"""
OWNERS Count

Counts the distinct reviewers and approvers of a project group by resolving
OWNERS files against OWNERS_ALIASES tables and the GitHub users API.

Resolution pipeline:
- AliasResolver: local alias table, then canonical fallback table, then
  literal name checked by an IdentityValidator
- MembershipAggregator: folds declarations into run-wide sets
- OwnersCounter: applies the per-repository policy over checkouts
"""

from src.owners.aggregator import MembershipAggregator
from src.owners.counter import OwnersCounter, count_group
from src.owners.identity import GitHubIdentityValidator, ValidationCache
from src.owners.models import (
    AggregateResult,
    AliasTable,
    OwnershipDeclaration,
    Resolution,
    ValidationOutcome,
)
from src.owners.protocols import IdentityValidator
from src.owners.resolver import AliasResolver

__all__ = [
    "AggregateResult",
    "AliasResolver",
    "AliasTable",
    "GitHubIdentityValidator",
    "IdentityValidator",
    "MembershipAggregator",
    "OwnersCounter",
    "OwnershipDeclaration",
    "Resolution",
    "ValidationCache",
    "ValidationOutcome",
    "count_group",
]
