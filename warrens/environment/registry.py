"""The validated chunk library.

`ChunkRegistry` is built once from the static template table and never
changes afterwards. Pass it by reference to whatever needs to pick chunks.
`default_registry()` builds a shared instance on first use.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from warrens.environment import chunk_templates
from warrens.environment.chunks import AreaSpec, Biome, Chunk, ChunkError
from warrens.util.rng import RNG

logger = logging.getLogger(__name__)


class ChunkRegistry:
    """Immutable collection of validated chunks."""

    def __init__(self, chunks: Iterable[Chunk]) -> None:
        self._chunks: tuple[Chunk, ...] = tuple(chunks)

    @classmethod
    def from_templates(
        cls, templates: Iterable[tuple[Biome, int, str]]
    ) -> ChunkRegistry:
        """Parse and validate every template.

        Raises:
            ChunkError: The first malformed template. Nothing is skipped.
        """
        chunks: list[Chunk] = []
        for biome, depth, text in templates:
            try:
                chunk = Chunk.from_text(AreaSpec(biome, depth), text)
            except ChunkError as e:
                logger.error("Invalid chunk template (%s):\n%s", e, e.text)
                raise
            logger.debug(
                "Loaded chunk %d: biome=%s depth=%d connected=%s exit=%s",
                len(chunks),
                biome.name,
                depth,
                chunk.connected,
                chunk.exit,
            )
            chunks.append(chunk)

        logger.info("Chunk registry loaded %d templates", len(chunks))
        return cls(chunks)

    @property
    def chunks(self) -> tuple[Chunk, ...]:
        return self._chunks

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self._chunks)

    def __getitem__(self, index: int) -> Chunk:
        return self._chunks[index]

    def index(self, chunk: Chunk) -> int:
        return self._chunks.index(chunk)

    def matching(
        self, environment: AreaSpec, *, exit: bool | None = None
    ) -> list[Chunk]:
        """Chunks that can appear in ``environment``.

        Args:
            environment: The biome and depth being generated.
            exit: If given, keep only chunks whose exit flag equals it.
        """
        return [
            chunk
            for chunk in self._chunks
            if chunk.spec.can_hatch(environment)
            and (exit is None or chunk.exit == exit)
        ]

    def choose(
        self, rng: RNG, environment: AreaSpec, *, exit: bool | None = None
    ) -> Chunk:
        """Pick a chunk uniformly among those matching ``environment``.

        Falls back to the whole library when nothing matches, so generation
        never stalls on a sparse biome.
        """
        candidates = self.matching(environment, exit=exit)
        if not candidates:
            candidates = list(self._chunks)
        return rng.choice(candidates)


# =============================================================================
# Module-level default
# =============================================================================

_default: ChunkRegistry | None = None


def default_registry() -> ChunkRegistry:
    """The registry built from `chunk_templates.TEMPLATES`.

    Built on first call. The check-then-set is not thread-safe, so make the
    first call from a single thread (normally at startup).
    """
    global _default
    if _default is None:
        _default = ChunkRegistry.from_templates(chunk_templates.TEMPLATES)
    return _default
