"""
OWNERS Counter

Runs the aggregation over every repository assigned to a group.

Failures are contained to the smallest unit they affect: a repository that
cannot be processed is skipped, an OWNERS file that cannot be parsed is
skipped, and an unresolvable entity is only reported.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from src.owners.aggregator import MembershipAggregator
from src.owners.config import OwnersCountConfig
from src.owners.errors import InvalidGroupError, OwnersFileError, RegistryError
from src.owners.files import find_owners_files, load_alias_table_or_empty, load_owners_file
from src.owners.identity import GitHubIdentityValidator, ValidationCache
from src.owners.models import AggregateResult, AliasTable, OwnershipDeclaration
from src.owners.protocols import IdentityValidator
from src.owners.registry import (
    OwnersLocation,
    Registry,
    owners_locations,
    owners_roots,
    validate_group_name,
)
from src.owners.repos import clone_repositories, repos_to_clone
from src.owners.resolver import AliasResolver

logger = logging.getLogger(__name__)


class OwnersCounter:
    """
    Counts the distinct reviewers and approvers of a group.

    The fallback alias table comes from the canonical repository's checkout.
    When the repository being processed is the canonical one, its own table
    serves as both local and fallback.
    """

    def __init__(self, validator: IdentityValidator, canonical_repo: str = "kubernetes/kubernetes"):
        """
        Initialize the counter.

        Args:
            validator: Run-scoped identity validator
            canonical_repo: org/repo providing the fallback alias table
        """
        self._canonical = OwnersLocation.for_repo(canonical_repo)
        self._aggregator = MembershipAggregator(AliasResolver(validator))
        self._canonical_aliases: AliasTable | None = None

    @property
    def result(self) -> AggregateResult:
        return self._aggregator.result

    def is_canonical(self, location: OwnersLocation) -> bool:
        return location.slug.lower() == self._canonical.slug.lower()

    def _fallback_table(self, workdir: Path) -> AliasTable:
        if self._canonical_aliases is None:
            self._canonical_aliases = load_alias_table_or_empty(
                workdir / self._canonical.checkout_dir
            )
        return self._canonical_aliases

    def count(self, locations: Iterable[OwnersLocation], workdir: str | Path) -> AggregateResult:
        """
        Aggregate every OWNERS file under every location.

        Args:
            locations: Subproject OWNERS locations of the group
            workdir: Directory holding the repository checkouts

        Returns:
            The run-wide aggregate result
        """
        workdir = Path(workdir)
        for location in locations:
            self.process_location(location, workdir)
        return self.result

    def process_location(self, location: OwnersLocation, workdir: Path) -> bool:
        """
        Aggregate one subproject root.

        Returns:
            False if the repository was skipped
        """
        repo_dir = workdir / location.checkout_dir
        if not repo_dir.is_dir():
            logger.error(f"Cannot process dir {repo_dir}: checkout not found")
            return False

        root = repo_dir / location.root_dir
        if not root.exists():
            logger.error(f"Cannot process dir {root}: path not found")
            return False

        try:
            owners_files = find_owners_files(root)
        except OwnersFileError as e:
            logger.error(f"Cannot get OWNERS files: {e}")
            return False

        local = load_alias_table_or_empty(repo_dir)
        fallback = local if self.is_canonical(location) else self._fallback_table(workdir)

        logger.info(f"Processing repo {location.checkout_dir} ({location.root_dir})")
        self._aggregator.aggregate(self._load_declarations(owners_files), local, fallback)
        return True

    def _load_declarations(self, paths: list[Path]) -> Iterable[OwnershipDeclaration]:
        for path in paths:
            try:
                yield load_owners_file(path)
            except OwnersFileError as e:
                logger.error(f"Error reading file {path}: {e}")


def count_group(
    group: str,
    config: OwnersCountConfig,
    workdir: str | Path,
    validator: IdentityValidator | None = None,
    clone: bool = True,
) -> AggregateResult:
    """
    Count the reviewers and approvers of one group end to end.

    Preconditions (group name format, GitHub token, registry) are checked
    before anything is cloned or resolved.

    Args:
        group: Group directory name (e.g., "sig-node")
        config: Tool configuration
        workdir: Directory for repository checkouts
        validator: Identity validator (a GitHub-backed one is created if omitted)
        clone: Whether to clone missing checkouts into workdir

    Returns:
        The aggregate result for the group

    Raises:
        OwnersCountError: On any fatal precondition or clone failure
    """
    if not validate_group_name(group):
        raise InvalidGroupError(group)
    token = config.require_token()

    registry = Registry.from_yaml_file(config.registry_path)
    urls = owners_roots(registry, group)
    if not urls:
        raise RegistryError(
            f"no subproject OWNERS declared for {group} in {config.registry_path}",
            path=config.registry_path,
        )
    locations = owners_locations(urls)

    if clone:
        clone_repositories(
            repos_to_clone(locations, config.canonical_repo, config.use_https_clone),
            workdir,
        )

    if validator is not None:
        return OwnersCounter(validator, config.canonical_repo).count(locations, workdir)

    with GitHubIdentityValidator(
        token=token,
        cache=ValidationCache(),
        base_url=config.github_api_url,
        timeout_seconds=config.request_timeout_seconds,
    ) as github:
        result = OwnersCounter(github, config.canonical_repo).count(locations, workdir)
        logger.info(f"Identity checks: {github.api_calls} API calls, {github.cache.stats}")
    return result
