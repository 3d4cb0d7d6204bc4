"""
OWNERS Data Models

Pydantic schemas for the OWNERS / OWNERS_ALIASES file formats and plain
data classes for resolution and aggregation results.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DirOptions(BaseModel):
    """Per-directory options of an OWNERS file."""

    model_config = ConfigDict(frozen=True, extra="forbid", coerce_numbers_to_str=True)

    no_parent_owners: bool = False


class FilterInfo(BaseModel):
    """Filename-filtered ownership block. Parsed, but not counted."""

    model_config = ConfigDict(frozen=True, extra="forbid", coerce_numbers_to_str=True)

    approvers: list[str] = Field(default_factory=list)
    reviewers: list[str] = Field(default_factory=list)
    required_reviewers: list[str] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    emeritus_approvers: list[str] = Field(default_factory=list)
    emeritus_reviewers: list[str] = Field(default_factory=list)


class OwnershipDeclaration(BaseModel):
    """
    Parsed contents of one OWNERS file.

    Only approvers, reviewers and required_reviewers take part in counting.
    The remaining keys are accepted so that valid files parse strictly.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", coerce_numbers_to_str=True)

    approvers: list[str] = Field(default_factory=list)
    reviewers: list[str] = Field(default_factory=list)
    required_reviewers: list[str] = Field(default_factory=list)
    filters: dict[str, FilterInfo] = Field(default_factory=dict)
    labels: list[str] = Field(default_factory=list)
    emeritus_approvers: list[str] = Field(default_factory=list)
    emeritus_reviewers: list[str] = Field(default_factory=list)
    options: DirOptions = Field(default_factory=DirOptions)

    def reviewer_names(self) -> list[str]:
        """Union of reviewers and required_reviewers, first occurrence wins."""
        return list(dict.fromkeys([*self.reviewers, *self.required_reviewers]))


class AliasTable(Mapping[str, tuple[str, ...]]):
    """
    Alias name to member names.

    A table without an underlying file is simply empty; lookups never fail.
    """

    def __init__(self, aliases: Mapping[str, list[str] | tuple[str, ...] | None] | None = None):
        self._aliases: dict[str, tuple[str, ...]] = {
            name: tuple(members or ()) for name, members in (aliases or {}).items()
        }

    @classmethod
    def empty(cls) -> AliasTable:
        return cls()

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._aliases[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def __repr__(self) -> str:
        return f"AliasTable({len(self._aliases)} aliases)"


class AliasesFile(BaseModel):
    """Parsed contents of an OWNERS_ALIASES file."""

    model_config = ConfigDict(frozen=True, extra="forbid", coerce_numbers_to_str=True)

    aliases: dict[str, list[str] | None] = Field(default_factory=dict)

    def to_table(self) -> AliasTable:
        return AliasTable(self.aliases)


class ValidationOutcome(str, Enum):
    """Result of a single identity check."""

    VALID = "valid"
    INVALID = "invalid"
    CHECK_FAILED = "check_failed"

    @property
    def is_valid(self) -> bool:
        return self is ValidationOutcome.VALID


@dataclass(frozen=True)
class Resolution:
    """
    Outcome of resolving one entity name.

    names is empty both for an alias with no members and for a literal
    name that failed validation; matched_alias tells the two apart.
    """

    entity: str
    names: tuple[str, ...]
    matched_alias: bool

    @property
    def unresolved(self) -> bool:
        return not self.matched_alias and not self.names


@dataclass
class AggregateResult:
    """Running reviewer/approver sets for a whole run."""

    reviewers: set[str] = field(default_factory=set)
    approvers: set[str] = field(default_factory=set)
    unresolved: list[str] = field(default_factory=list)

    def record_unresolved(self, entity: str) -> None:
        if entity not in self.unresolved:
            self.unresolved.append(entity)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "reviewers": sorted(self.reviewers),
            "approvers": sorted(self.approvers),
            "reviewer_count": len(self.reviewers),
            "approver_count": len(self.approvers),
            "unresolved": list(self.unresolved),
        }
