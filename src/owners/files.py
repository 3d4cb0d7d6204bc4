"""
OWNERS File Loading

Discovery and parsing of OWNERS and OWNERS_ALIASES files in a checkout.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from src.owners.errors import OwnersFileError
from src.owners.models import AliasesFile, AliasTable, OwnershipDeclaration

logger = logging.getLogger(__name__)

OWNERS_FILENAME = "OWNERS"
ALIASES_FILENAME = "OWNERS_ALIASES"

# Member lists hold account names, so bare scalars such as 1234 or "no" stay text
_TEXT_TAGS = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)


class _OwnersLoader(yaml.SafeLoader):
    """SafeLoader that only resolves null implicitly; other plain scalars load as str."""


_OwnersLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def find_owners_files(root: str | Path) -> list[Path]:
    """
    List every OWNERS file under root, skipping vendored code.

    Args:
        root: Directory to walk

    Returns:
        Sorted list of OWNERS file paths

    Raises:
        OwnersFileError: If root cannot be walked
    """
    root = Path(root)
    if not root.is_dir():
        raise OwnersFileError(f"not a directory: {root}", path=str(root))

    def _raise(error: OSError) -> None:
        raise OwnersFileError(f"cannot walk {root}: {error}", path=str(root)) from error

    matches: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        if OWNERS_FILENAME not in filenames:
            continue
        path = Path(dirpath) / OWNERS_FILENAME
        if "vendor" in str(path.relative_to(root)):
            continue
        matches.append(path)
    return sorted(matches)


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.load(path.read_text(encoding="utf-8"), Loader=_OwnersLoader)
    except OSError as e:
        raise OwnersFileError(f"cannot read {path}: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise OwnersFileError(f"invalid YAML in {path}: {e}", path=str(path)) from e


def _validate(model: type[BaseModel], data: Any, path: Path) -> Any:
    if data is None:
        data = {}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise OwnersFileError(f"malformed {path}: {e}", path=str(path)) from e


def load_owners_file(path: str | Path) -> OwnershipDeclaration:
    """
    Parse one OWNERS file.

    Raises:
        OwnersFileError: If the file cannot be read or has unknown fields
    """
    path = Path(path)
    return _validate(OwnershipDeclaration, _load_yaml(path), path)


def load_alias_table(path: str | Path) -> AliasTable:
    """
    Parse one OWNERS_ALIASES file.

    Raises:
        OwnersFileError: If the file cannot be read or parsed
    """
    path = Path(path)
    aliases: AliasesFile = _validate(AliasesFile, _load_yaml(path), path)
    return aliases.to_table()


def load_alias_table_or_empty(repo_dir: str | Path) -> AliasTable:
    """
    Load OWNERS_ALIASES from the root of a checkout.

    A missing or unreadable file yields an empty table; both cases are
    logged and neither is an error.
    """
    path = Path(repo_dir) / ALIASES_FILENAME
    if not path.is_file():
        logger.warning(f"OWNERS_ALIASES does not exist in {repo_dir}")
        return AliasTable.empty()
    try:
        table = load_alias_table(path)
    except OwnersFileError as e:
        logger.warning(f"Error reading OWNERS_ALIASES: {e}")
        return AliasTable.empty()
    logger.debug(f"Loaded {len(table)} aliases from {path}")
    return table
