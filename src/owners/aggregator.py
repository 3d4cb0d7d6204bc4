"""
Membership Aggregator

Folds OWNERS declarations into the run-wide reviewer and approver sets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from src.owners.models import AggregateResult, OwnershipDeclaration
from src.owners.resolver import AliasResolver

logger = logging.getLogger(__name__)


class MembershipAggregator:
    """
    Accumulates resolved reviewers and approvers across a whole run.

    The same instance is fed every repository of the group; its result
    is the union over all processed declarations. Feeding a declaration
    twice leaves the sets unchanged.
    """

    def __init__(self, resolver: AliasResolver, result: AggregateResult | None = None):
        self._resolver = resolver
        self._result = result if result is not None else AggregateResult()

    @property
    def result(self) -> AggregateResult:
        return self._result

    @property
    def reviewers(self) -> set[str]:
        return self._result.reviewers

    @property
    def approvers(self) -> set[str]:
        return self._result.approvers

    def aggregate(
        self,
        declarations: Iterable[OwnershipDeclaration],
        local: Mapping[str, Sequence[str]],
        fallback: Mapping[str, Sequence[str]] | None = None,
    ) -> tuple[set[str], set[str]]:
        """
        Resolve and merge a repository's declarations.

        Args:
            declarations: Parsed OWNERS files of one repository
            local: The repository's own alias table
            fallback: The canonical repository's alias table

        Returns:
            The running (reviewers, approvers) sets
        """
        for declaration in declarations:
            self._merge(declaration.reviewer_names(), self._result.reviewers, local, fallback)
            self._merge(declaration.approvers, self._result.approvers, local, fallback)
        return self._result.reviewers, self._result.approvers

    def _merge(
        self,
        entities: Sequence[str],
        target: set[str],
        local: Mapping[str, Sequence[str]],
        fallback: Mapping[str, Sequence[str]] | None,
    ) -> None:
        for entity in entities:
            resolution = self._resolver.resolve(entity, local, fallback)
            if resolution.unresolved:
                self._result.record_unresolved(entity)
                continue
            target.update(resolution.names)
