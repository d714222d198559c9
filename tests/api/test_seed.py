"""Tests for the HTTP seed source."""

import httpx
import pytest

from api.seed import HttpSeedSource
from core.seeding import SeedSourceError
from core.shoe import ShoeManager

SEED = "00112233445566778899aabbccddeeff"
URL = "https://seed.test/seed"


def make_source(handler, token=None) -> HttpSeedSource:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpSeedSource(URL, token=token, client=client)


def test_fetches_seed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"seed": SEED, "age_ms": 42, "frame_jpeg": "..."})

    seed = make_source(handler).get_seed()

    assert seed.seed == SEED
    assert seed.age_ms == 42


def test_sends_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params.get("token"))
        return httpx.Response(200, json={"seed": SEED})

    make_source(handler, token="s3cret").get_seed()
    make_source(handler).get_seed()

    assert seen == ["s3cret", None]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"age_ms": 1}),
        httpx.Response(200, json={"seed": "tooshort"}),
    ],
)
def test_bad_responses_raise(response):
    def handler(request: httpx.Request) -> httpx.Response:
        return response

    with pytest.raises(SeedSourceError):
        make_source(handler).get_seed()


def test_network_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(SeedSourceError):
        make_source(handler).get_seed()


def test_shoe_falls_back_when_service_fails():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    shoe = ShoeManager()
    assert not shoe.reshuffle(make_source(handler))
    assert shoe.cards_remaining == 312


def test_shoe_seeded_from_service():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"seed": SEED, "age_ms": 3})

    shoe = ShoeManager()
    assert shoe.reshuffle(make_source(handler))
    assert shoe.seed == SEED
    assert list(shoe) == ShoeManager().build_and_shuffle(SEED)
