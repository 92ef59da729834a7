import pytest

from address_finder.distance import DistanceElement, Measure
from address_finder.errors import ConfigurationError, InvalidRequestError
from address_finder.service import find_closest, rank_elements, validate_request


def _ok(address: str, meters: int) -> DistanceElement:
    return DistanceElement(
        address=address,
        status="OK",
        distance=Measure(text=f"{meters} m", value=meters),
        duration=Measure(text="1 min", value=60),
    )


class _FakeClient:
    def __init__(self, elements: list[DistanceElement]):
        self.elements = elements
        self.calls: list[tuple[str, list[str]]] = []

    def distances(self, origin: str, destinations: list[str]) -> list[DistanceElement]:
        self.calls.append((origin, destinations))
        return self.elements


def test_rank_elements_sorts_successes_and_keeps_failures_in_order() -> None:
    elements = [
        _ok("far", 9000),
        DistanceElement(address="bad-1", status="NOT_FOUND"),
        _ok("near", 100),
        _ok("mid-a", 500),
        DistanceElement(address="bad-2", status="ZERO_RESULTS"),
        _ok("mid-b", 500),
    ]
    ok, failed = rank_elements(elements)

    assert [e.address for e in ok] == ["near", "mid-a", "mid-b", "far"]
    assert [e.address for e in failed] == ["bad-1", "bad-2"]


def test_find_closest_calls_service_once() -> None:
    client = _FakeClient([_ok("b", 300), _ok("a", 200)])
    result = find_closest(" home ", ["a", "b"], client=client)

    assert client.calls == [("home", ["a", "b"])]
    assert result.starting_address == "home"
    assert result.closest is not None
    assert result.closest.address == "a"

    payload = result.to_dict()
    assert payload["success"] is True
    assert payload["startingAddress"] == "home"
    assert [r["address"] for r in payload["results"]] == ["a", "b"]
    assert payload["failed"] == []


@pytest.mark.parametrize(
    "start,addresses,message",
    [
        ("", ["123 Main St"], "Invalid input."),
        (None, ["123 Main St"], "Invalid input."),
        ("home", "123 Main St", "Invalid input."),
        ("home", [], "Please provide at least one destination address."),
        ("home", ["  ", ""], "Please provide at least one destination address."),
    ],
)
def test_validate_request_rejects_bad_input(start, addresses, message) -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        validate_request(start, addresses)
    assert str(exc_info.value).startswith(message)


def test_validate_request_caps_address_count() -> None:
    twenty = [f"{n} Main St" for n in range(20)]
    assert validate_request("home", twenty)[1] == twenty

    with pytest.raises(InvalidRequestError) as exc_info:
        validate_request("home", twenty + ["one more"])
    assert str(exc_info.value) == "Maximum 20 addresses allowed."

    with pytest.raises(InvalidRequestError):
        validate_request("home", ["a", "b", "c"], max_addresses=2)


def test_find_closest_without_client_is_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        find_closest("home", ["123 Main St"], client=None)
    assert str(exc_info.value) == "Google Maps API key not configured."


def test_validation_runs_before_configuration_check() -> None:
    with pytest.raises(InvalidRequestError):
        find_closest("home", [], client=None)
