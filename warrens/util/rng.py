"""Deterministic random number generation with isolated streams.

Every consumer of randomness draws from its own named stream derived from a
single master seed. The world is reproducible from that seed, and drawing
more numbers in one stream never shifts another.

Usage:
    provider = RNGProvider(config.RANDOM_SEED)
    chunk_rng = provider.get(rng.domain("map.chunks", z, cx, cy))

Domain names are dot-separated and hierarchical, built with `domain()`.
"map.chunks.{z}.{cx}.{cy}" holds one stream per herringbone chunk, so the
terrain at a location does not depend on the order chunks are first visited.
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from warrens.types import RandomSeed

T = TypeVar("T")

DOMAIN_SEPARATOR = "."


def domain(*parts: object) -> str:
    """Join parts into a hierarchical domain name.

    Examples:
        >>> domain("map.chunks", -1, 2, 0)
        'map.chunks.-1.2.0'
    """
    return DOMAIN_SEPARATOR.join(str(part) for part in parts)


class RNGStream:
    """A cacheable handle on one named stream.

    The handle looks up its `Random` instance on every call, so a reference
    taken before `RNGProvider.reset()` keeps working afterwards and draws
    from the freshly seeded stream.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    # -------------------------------------------------------------------------
    # random.Random interface
    # -------------------------------------------------------------------------

    def random(self) -> float:
        return self._rng().random()

    def randint(self, a: int, b: int) -> int:
        """Integer in the closed range [a, b]."""
        return self._rng().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        return self._rng().randrange(start, stop, step)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng().choice(seq)

    def choices(
        self,
        population: Sequence[T],
        weights: Sequence[float] | None = None,
        *,
        cum_weights: Sequence[float] | None = None,
        k: int = 1,
    ) -> list[T]:
        return self._rng().choices(
            population, weights=weights, cum_weights=cum_weights, k=k
        )

    def shuffle(self, x: list) -> None:
        self._rng().shuffle(x)

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        return self._rng().sample(population, k)


# Accept either a plain Random or a stream handle: `def foo(rng: RNG) -> int:`
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out isolated streams derived from one master seed.

    A game world owns its own provider so that two worlds built from the same
    seed generate the same terrain, whatever else has drawn from the global
    provider in between.
    """

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Get the (cached) stream handle for ``domain``.

        Args:
            domain: Hierarchical name like "map.chunks.0.1.-2" or "world.spawns"
        """
        proxy = self._proxies.get(domain)
        if proxy is None:
            proxy = self._proxies[domain] = RNGStream(self, domain)
        return proxy

    def derive_seed(self, domain: str) -> int:
        """The integer seed of a domain's stream.

        Uses crc32 rather than hash(), which is salted per interpreter run
        via PYTHONHASHSEED.
        """
        return zlib.crc32(f"{self._master_seed}:{domain}".encode())

    def _get_raw(self, domain: str) -> Random:
        stream = self._streams.get(domain)
        if stream is None:
            if self._master_seed is None:
                stream = Random()  # System entropy
            else:
                stream = Random(self.derive_seed(domain))
            self._streams[domain] = stream
        return stream

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every stream. Existing handles stay valid."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize the global provider, or reseed it if it already exists.

    Reseeding in place keeps module-level cached handles working.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(master_seed)
    else:
        _provider.reset(master_seed)


def get(domain: str) -> RNGStream:
    """Get a stream from the global provider.

    Creates an unseeded provider if `init()` has not been called yet, so
    modules can cache streams at import time. Call `init()` at startup for
    deterministic output.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reseed the global provider.

    Raises:
        RuntimeError: If `init()` has not been called.
    """
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
