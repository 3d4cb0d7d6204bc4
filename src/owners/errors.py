"""
OWNERS Count Errors

Exception hierarchy for the OWNERS counting tool.

Only subclasses of OwnersCountError abort a run. OwnersFileError is raised
by the file loaders and is always contained by the caller (one file or one
repository is skipped, the run continues).
"""

from __future__ import annotations


class OwnersCountError(Exception):
    """
    Base exception for fatal OWNERS count errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class MissingCredentialError(OwnersCountError):
    """The GitHub token needed for identity checks is not set."""

    def __init__(self, variable: str = "GITHUB_TOKEN") -> None:
        super().__init__(
            f"please set {variable} env variable with your personal access token",
            code="CREDENTIAL_MISSING",
        )
        self.variable = variable


class InvalidGroupError(OwnersCountError):
    """Group name does not follow the sig-/wg-/committee- convention."""

    def __init__(self, group: str) -> None:
        super().__init__(
            f"invalid group name format '{group}', for ex, for sig xy-z, group name = sig-xy-z",
            code="GROUP_INVALID",
        )
        self.group = group


class RegistryError(OwnersCountError):
    """The group registry (sigs.yaml) could not be read or parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, code="REGISTRY_INVALID")
        self.path = path


class CloneError(OwnersCountError):
    """A repository could not be cloned."""

    def __init__(self, clone_url: str, detail: str | None = None) -> None:
        message = f"error cloning {clone_url}"
        if detail:
            message += f": {detail}"
        super().__init__(message, code="CLONE_FAILED")
        self.clone_url = clone_url


class OwnersFileError(Exception):
    """An OWNERS or OWNERS_ALIASES file could not be read or parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message)
