"""Find-closest workflow: validate, look up once, rank.

This is the glue between extraction and the distance service:
1) validate the request (starting address present, 1..max destinations)
2) issue a single batched distance lookup
3) split elements into successes and failures
4) sort successes by driving distance, closest first

Failures keep their input order so users can see which addresses to fix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .distance import DistanceElement, DistanceMatrixClient
from .errors import ConfigurationError, InvalidRequestError

DEFAULT_MAX_ADDRESSES = 20


@dataclass(frozen=True)
class FindClosestResult:
    """Ranked lookup results for one starting address."""

    starting_address: str
    results: list[DistanceElement]
    failed: list[DistanceElement]

    @property
    def closest(self) -> DistanceElement | None:
        return self.results[0] if self.results else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "results": [r.to_dict() for r in self.results],
            "failed": [r.to_dict() for r in self.failed],
            "startingAddress": self.starting_address,
        }


def validate_request(
    starting_address: Any,
    addresses: Any,
    *,
    max_addresses: int = DEFAULT_MAX_ADDRESSES,
) -> tuple[str, list[str]]:
    """Check a find-closest request and return cleaned (start, destinations).

    Raises:
        InvalidRequestError: with a message suitable for showing to the user.
    """
    if (
        not isinstance(starting_address, str)
        or not starting_address.strip()
        or not isinstance(addresses, list)
    ):
        raise InvalidRequestError(
            "Invalid input. Please provide a starting address and an array of addresses."
        )

    destinations = [a.strip() for a in addresses if isinstance(a, str) and a.strip()]
    if not destinations:
        raise InvalidRequestError("Please provide at least one destination address.")

    if len(destinations) > max_addresses:
        raise InvalidRequestError(f"Maximum {max_addresses} addresses allowed.")

    return starting_address.strip(), destinations


def rank_elements(
    elements: list[DistanceElement],
) -> tuple[list[DistanceElement], list[DistanceElement]]:
    """Split elements into (successes sorted by distance, failures in input order)."""
    ok = [e for e in elements if e.ok]
    failed = [e for e in elements if not e.ok]

    # sorted() is stable: equal distances keep input order.
    ok = sorted(ok, key=lambda e: e.distance.value if e.distance is not None else 0)
    return ok, failed


def find_closest(
    starting_address: Any,
    addresses: Any,
    *,
    client: DistanceMatrixClient | None,
    max_addresses: int = DEFAULT_MAX_ADDRESSES,
) -> FindClosestResult:
    """Rank `addresses` by driving distance from `starting_address`.

    Raises:
        InvalidRequestError: bad input (user-facing).
        ConfigurationError: no distance client (API key not configured).
        DistanceMatrixError: the lookup failed as a whole.
    """
    start, destinations = validate_request(
        starting_address, addresses, max_addresses=max_addresses
    )

    if client is None:
        raise ConfigurationError("Google Maps API key not configured.")

    elements = client.distances(start, destinations)
    results, failed = rank_elements(elements)

    return FindClosestResult(starting_address=start, results=results, failed=failed)
