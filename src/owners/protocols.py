"""
OWNERS Count Protocols

Defines the identity validation interface used by the alias resolver.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IdentityValidator(Protocol):
    """
    Protocol for account existence checks.

    Implementations must be memoized for the lifetime of one run so that
    every distinct literal name costs at most one external call.
    """

    def is_valid(self, name: str) -> bool:
        """
        Check whether an account currently exists.

        Args:
            name: Literal account name (e.g., "alice")

        Returns:
            True if the account exists. Failed checks return False.
        """
        ...
