"""Seed source backed by a remote HTTP seed service."""

import logging
import time

import httpx
from pydantic import BaseModel, Field, ValidationError

from core.seeding import Seed, SeedSource, SeedSourceError

logger = logging.getLogger(__name__)


class SeedResponse(BaseModel):
    """Body returned by the seed service. Extra fields are ignored."""

    seed: str = Field(..., pattern=r"^[0-9a-fA-F]{32,}$")
    age_ms: float = 0.0


class HttpSeedSource(SeedSource):
    """
    Fetches 128-bit seed material with one GET per reshuffle.

    Any transport error, non-2xx status or malformed body surfaces as a
    SeedSourceError, which the shoe turns into an unseeded shuffle.
    """

    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 3.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._url = url
        self._token = token
        self._timeout = timeout
        self._client = client

    def get_seed(self) -> Seed:
        params = {"token": self._token} if self._token else None
        started = time.monotonic()
        try:
            if self._client is not None:
                response = self._client.get(self._url, params=params, timeout=self._timeout)
            else:
                response = httpx.get(self._url, params=params, timeout=self._timeout)
            response.raise_for_status()
            body = SeedResponse.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise SeedSourceError(f"seed request failed: {exc}") from exc
        except (ValidationError, ValueError) as exc:
            raise SeedSourceError(f"bad seed payload: {exc}") from exc

        logger.debug(
            "Fetched seed from %s in %.0f ms", self._url, (time.monotonic() - started) * 1000
        )
        return Seed(seed=body.seed, age_ms=body.age_ms)
