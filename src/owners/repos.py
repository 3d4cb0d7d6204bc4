"""
Repository Checkout

Shallow clones of the repositories a group's OWNERS files live in.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from pathlib import Path

from src.owners.errors import CloneError
from src.owners.registry import OwnersLocation

logger = logging.getLogger(__name__)


def repos_to_clone(
    locations: Iterable[OwnersLocation],
    canonical_repo: str | None = None,
    use_https: bool = False,
) -> dict[str, str]:
    """
    Map clone URL to checkout directory, one entry per distinct repository.

    The canonical repository is always included so that its alias table is
    available as the fallback for every other repository.
    """
    to_clone: dict[str, str] = {}
    for location in locations:
        to_clone[location.clone_url(use_https)] = location.checkout_dir
    if canonical_repo:
        canonical = OwnersLocation.for_repo(canonical_repo)
        to_clone.setdefault(canonical.clone_url(use_https), canonical.checkout_dir)
    return to_clone


def clone_repositories(to_clone: dict[str, str], workdir: str | Path) -> Path:
    """
    Shallow-clone each repository into workdir.

    Checkouts that already exist are reused.

    Raises:
        CloneError: If any clone fails
    """
    workdir = Path(workdir)
    workdir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Cloning in {workdir}")

    for clone_url, dir_name in to_clone.items():
        target = workdir / dir_name
        if target.is_dir():
            logger.info(f"Reusing existing checkout {target}")
            continue

        logger.info(f"Cloning {clone_url} at {dir_name}")
        try:
            result = subprocess.run(
                ["git", "clone", "--depth", "1", clone_url, str(target)],
                capture_output=True,
                text=True,
            )
        except (FileNotFoundError, OSError) as e:
            raise CloneError(clone_url, str(e)) from e
        if result.returncode != 0:
            logger.error(f"Error cloning {clone_url} at {dir_name}")
            raise CloneError(clone_url, result.stderr.strip() or None)

    return workdir
