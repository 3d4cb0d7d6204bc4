"""
GitHub Identity Validation

Checks whether literal names in OWNERS files are existing GitHub accounts.

Every outcome, including failed checks, is memoized in a ValidationCache
owned by the run, so each distinct name costs at most one API call.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from src.owners.models import ValidationOutcome

logger = logging.getLogger(__name__)


class ValidationCache:
    """
    Account name to validation outcome, for a single run.

    Created empty at run start and discarded with the run. Entries are
    never evicted or expired.
    """

    def __init__(self) -> None:
        self._outcomes: dict[str, ValidationOutcome] = {}

    def get(self, name: str) -> ValidationOutcome | None:
        return self._outcomes.get(name)

    def set(self, name: str, outcome: ValidationOutcome) -> None:
        self._outcomes[name] = outcome

    def __contains__(self, name: object) -> bool:
        return name in self._outcomes

    def __len__(self) -> int:
        return len(self._outcomes)

    @property
    def stats(self) -> dict[str, int]:
        """Outcome counts for reporting."""
        counts = {outcome.value: 0 for outcome in ValidationOutcome}
        for outcome in self._outcomes.values():
            counts[outcome.value] += 1
        return counts


class GitHubIdentityValidator:
    """
    Identity validator backed by the GitHub users API.

    A name is valid iff GET /users/{name} answers 200. Any other status or
    a transport error is recorded as a negative for the rest of the run.
    No retries are attempted.
    """

    def __init__(
        self,
        token: str,
        cache: ValidationCache | None = None,
        base_url: str = "https://api.github.com",
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the validator.

        Args:
            token: GitHub token sent as a bearer credential
            cache: Run-scoped cache (a fresh one is created if omitted)
            base_url: GitHub REST API base URL
            timeout_seconds: Timeout for each lookup
            transport: Optional httpx transport (used by tests)
        """
        self._token = token
        self._cache = cache if cache is not None else ValidationCache()
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.Client | None = None
        self.api_calls = 0

    @property
    def cache(self) -> ValidationCache:
        return self._cache

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                headers={
                    "Accept": "application/vnd.github+json",
                    "Authorization": f"Bearer {self._token}",
                },
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitHubIdentityValidator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def check(self, name: str) -> ValidationOutcome:
        """
        Return the tri-state outcome for a name, querying GitHub on a miss.

        Args:
            name: Literal account name

        Returns:
            VALID, INVALID, or CHECK_FAILED
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        if not name.strip():
            # GET /users/ lists accounts instead of 404ing
            outcome = ValidationOutcome.INVALID
        else:
            outcome = self._lookup(name)
        self._cache.set(name, outcome)
        return outcome

    def is_valid(self, name: str) -> bool:
        return self.check(name).is_valid

    def _lookup(self, name: str) -> ValidationOutcome:
        self.api_calls += 1
        try:
            response = self._get_client().get(f"/users/{quote(name, safe='')}")
        except httpx.HTTPError as e:
            logger.warning(f"GitHub user check failed for {name}: {e}")
            return ValidationOutcome.CHECK_FAILED

        if response.status_code == httpx.codes.OK:
            return ValidationOutcome.VALID
        if response.status_code == httpx.codes.NOT_FOUND:
            return ValidationOutcome.INVALID

        logger.warning(
            f"GitHub user check for {name} returned status {response.status_code}"
        )
        return ValidationOutcome.CHECK_FAILED
