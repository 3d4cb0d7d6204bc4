"""
Alias Resolver

Expands entity names from OWNERS files into concrete account names.

Resolution order (first match wins):
1. The local OWNERS_ALIASES table of the repository being processed
2. The fallback table of the canonical repository
3. Literal account name, kept only if the identity validator accepts it

Alias tables always take precedence over literal interpretation, so the
validator is only consulted for names neither table knows about.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from src.owners.models import Resolution
from src.owners.protocols import IdentityValidator

logger = logging.getLogger(__name__)


class AliasResolver:
    """Resolves entity names against alias tables and the identity validator."""

    def __init__(self, validator: IdentityValidator):
        self._validator = validator

    def resolve(
        self,
        entity: str,
        local: Mapping[str, Sequence[str]],
        fallback: Mapping[str, Sequence[str]] | None = None,
    ) -> Resolution:
        """
        Resolve a single entity.

        Args:
            entity: Alias or literal account name
            local: Alias table of the repository being processed
            fallback: Alias table of the canonical repository, if any

        Returns:
            Resolution with the expanded names. An alias that expands to
            nothing is still a match.
        """
        if entity in local:
            return Resolution(entity, tuple(local[entity]), matched_alias=True)

        if fallback is not None and entity in fallback:
            return Resolution(entity, tuple(fallback[entity]), matched_alias=True)

        if self._validator.is_valid(entity):
            return Resolution(entity, (entity,), matched_alias=False)

        logger.warning(f"Unresolvable entity: {entity}")
        return Resolution(entity, (), matched_alias=False)
