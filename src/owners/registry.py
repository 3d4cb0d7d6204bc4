"""
Group Registry

Parses the project's group registry (sigs.yaml) and turns the OWNERS URLs
declared by a group's subprojects into repository locations.
"""

from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.owners.errors import RegistryError

logger = logging.getLogger(__name__)

GROUP_PREFIXES = ("sig-", "wg-", "committee-")

_RAW_GITHUB_URL = re.compile(
    r"https://raw\.githubusercontent\.com/(?P<org>[^/]+)/(?P<repo>[^/]+)/(?P<branch>[^/]+)/(?P<path>.*)"
)
_GITHUB_URL = re.compile(
    r"https://github\.com/(?P<org>[^/]+)/(?P<repo>[^/]+)/(?:blob|tree)/(?P<branch>[^/]+)/(?P<path>.*)"
)


class Subproject(BaseModel):
    """A subproject owned by a group."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    description: str | None = None
    owners: list[str] = Field(default_factory=list)


class Group(BaseModel):
    """A SIG, working group, or committee."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    dir: str
    name: str
    label: str | None = None
    subprojects: list[Subproject] = Field(default_factory=list)


class Registry(BaseModel):
    """
    Top-level contents of sigs.yaml.

    Only the group kinds accepted by validate_group_name are kept; user groups
    and any other top-level lists are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sigs: list[Group] = Field(default_factory=list)
    workinggroups: list[Group] = Field(default_factory=list)
    committees: list[Group] = Field(default_factory=list)

    def all_groups(self) -> list[Group]:
        return [*self.sigs, *self.workinggroups, *self.committees]

    def find_group(self, group_dir: str) -> Group | None:
        for group in self.all_groups():
            if group.dir == group_dir:
                return group
        return None

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> Registry:
        """
        Load the registry from a YAML file.

        Raises:
            RegistryError: If the file is missing, not YAML, or malformed
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise RegistryError(f"cannot read registry {path}: {e}", path=str(path)) from e
        except yaml.YAMLError as e:
            raise RegistryError(f"invalid YAML in registry {path}: {e}", path=str(path)) from e

        return cls.from_data(data, path=str(path))

    @classmethod
    def from_data(cls, data: Any, path: str | None = None) -> Registry:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise RegistryError("registry must be a mapping at the top level", path=path)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise RegistryError(f"malformed registry: {e}", path=path) from e


def validate_group_name(group: str) -> bool:
    """Check that a group name looks like sig-xxx, wg-xxx, or committee-xxx."""
    return group.startswith(GROUP_PREFIXES)


def owners_roots(registry: Registry, group_dir: str) -> list[str]:
    """
    Collect the OWNERS URLs of every subproject of a group.

    Args:
        registry: Parsed registry
        group_dir: Group directory name (e.g., "sig-node")

    Returns:
        OWNERS URLs in registry order (empty if the group is unknown)
    """
    group = registry.find_group(group_dir)
    if group is None:
        return []
    return [url for subproject in group.subprojects for url in subproject.owners]


@dataclass(frozen=True)
class OwnersLocation:
    """
    Where a subproject's root OWNERS file lives.

    Parsed from a raw.githubusercontent.com (or github.com blob/tree) URL.
    """

    url: str
    org: str
    repo: str
    branch: str
    path: str

    @classmethod
    def parse(cls, url: str) -> OwnersLocation | None:
        """Parse an OWNERS URL, returning None if it is not a GitHub URL."""
        match = _RAW_GITHUB_URL.fullmatch(url) or _GITHUB_URL.fullmatch(url)
        if match is None:
            return None
        return cls(
            url=url,
            org=match.group("org"),
            repo=match.group("repo"),
            branch=match.group("branch"),
            path=match.group("path"),
        )

    @classmethod
    def for_repo(cls, slug: str) -> OwnersLocation:
        """Location of the top-level OWNERS file of an org/repo."""
        org, _, repo = slug.partition("/")
        return cls(
            url=f"https://raw.githubusercontent.com/{slug}/master/OWNERS",
            org=org,
            repo=repo,
            branch="master",
            path="OWNERS",
        )

    @property
    def slug(self) -> str:
        return f"{self.org}/{self.repo}"

    @property
    def checkout_dir(self) -> str:
        """Directory name of the local clone, unique per org/repo."""
        return f"{self.org}-org-{self.repo}"

    @property
    def root_dir(self) -> str:
        """Directory to search for OWNERS files, relative to the clone."""
        if self.path.lower() == "owners":
            return "."
        return posixpath.dirname(self.path) or "."

    def clone_url(self, use_https: bool = False) -> str:
        if use_https:
            return f"https://github.com/{self.org}/{self.repo}.git"
        return f"git@github.com:{self.org}/{self.repo}.git"


def owners_locations(urls: list[str]) -> list[OwnersLocation]:
    """Parse OWNERS URLs, skipping ones that do not point at GitHub."""
    locations: list[OwnersLocation] = []
    for url in urls:
        location = OwnersLocation.parse(url)
        if location is None:
            logger.warning(f"Skipping unrecognized OWNERS URL: {url}")
            continue
        locations.append(location)
    return locations
