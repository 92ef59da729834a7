"""Google Distance Matrix client.

The finder asks one question per request: "how far is each destination from
this starting point by car?" The Distance Matrix API answers that in a single
batched call (one origin, up to 25 destinations), returning one element per
destination, each with its own status.

Failure model
-------------
- The request as a whole can fail (bad key, quota, transport error). That
  raises `DistanceMatrixError`.
- Individual destinations can fail (`NOT_FOUND`, `ZERO_RESULTS`) while the
  request succeeds. Those come back as elements with a non-OK status and no
  distance/duration; they are not errors.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

import httpx

from .errors import DistanceMatrixError

log = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

STATUS_OK = "OK"


@dataclass(frozen=True)
class Measure:
    """A distance or duration: display text plus numeric value (meters or seconds)."""

    text: str
    value: float


@dataclass(frozen=True)
class DistanceElement:
    """Lookup result for one destination."""

    address: str
    status: str
    distance: Measure | None = None
    duration: Measure | None = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class DistanceMatrixClient:
    """Queries driving distance/time from one origin to many destinations."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        """Create a DistanceMatrixClient.

        Args:
            api_key: Google Maps API key.
            base_url: Distance Matrix JSON endpoint.
            timeout: Request timeout in seconds (ignored when `http_client` is given).
            http_client: Optional pre-configured httpx client (tests pass one with
                a MockTransport).
        """
        if not api_key:
            raise ValueError("api_key must be non-empty")
        if timeout <= 0:
            raise ValueError("timeout must be > 0")

        self.api_key = api_key
        self.base_url = base_url
        self.timeout = float(timeout)
        self._http = http_client

    def distances(self, origin: str, destinations: list[str]) -> list[DistanceElement]:
        """Look up driving distance from `origin` to every destination.

        Returns:
            One DistanceElement per destination, in the same order.

        Raises:
            DistanceMatrixError: the request failed as a whole.
        """
        if not destinations:
            return []

        params = {
            "origins": origin,
            "destinations": "|".join(destinations),
            "mode": "driving",
            "units": "imperial",
            "key": self.api_key,
        }

        log.info("distance matrix request: 1 origin, %d destinations", len(destinations))

        try:
            if self._http is not None:
                r = self._http.get(self.base_url, params=params)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    r = client.get(self.base_url, params=params)
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPError as e:
            raise DistanceMatrixError(f"Distance Matrix request failed: {e}") from e
        except ValueError as e:
            raise DistanceMatrixError("Distance Matrix returned invalid JSON") from e

        return parse_response(data, destinations)


def parse_response(data: Any, destinations: list[str]) -> list[DistanceElement]:
    """Convert a Distance Matrix JSON body into DistanceElements.

    Elements are paired with `destinations` by position. If the service returns
    fewer elements than destinations, the missing ones are reported with status
    "UNKNOWN_ERROR" so every destination still appears in the output.
    """
    if not isinstance(data, dict):
        raise DistanceMatrixError("Distance Matrix returned an unexpected payload")

    status = str(data.get("status") or "UNKNOWN_ERROR")
    if status != STATUS_OK:
        detail = data.get("error_message")
        if detail:
            log.warning("distance matrix status=%s: %s", status, detail)
        raise DistanceMatrixError(f"Google Maps API error: {status}", status=status)

    rows = data.get("rows") or []
    elements: list[Any] = []
    if rows and isinstance(rows[0], dict):
        elements = rows[0].get("elements") or []

    out: list[DistanceElement] = []
    for i, address in enumerate(destinations):
        el = elements[i] if i < len(elements) and isinstance(elements[i], dict) else {}
        el_status = str(el.get("status") or "UNKNOWN_ERROR")

        if el_status != STATUS_OK:
            log.info("no route to %r: %s", address, el_status)
            out.append(DistanceElement(address=address, status=el_status))
            continue

        out.append(
            DistanceElement(
                address=address,
                status=el_status,
                distance=_as_measure(el.get("distance")),
                duration=_as_measure(el.get("duration")),
            )
        )

    return out


def _as_measure(v: Any) -> Measure | None:
    if not isinstance(v, dict):
        return None
    value = v.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return Measure(text=str(v.get("text") or ""), value=value)
