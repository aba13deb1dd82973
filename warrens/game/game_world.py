from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum, auto

from warrens import config
from warrens.environment import fov
from warrens.environment.location import Location
from warrens.environment.map import WorldTerrain
from warrens.environment.registry import ChunkRegistry, default_registry
from warrens.environment.terrain import Terrain, TerrainCell
from warrens.game.components import Desc, MapMemory, Mob
from warrens.game.ecs import ComponentStore
from warrens.game.spatial import At, Slot, Spatial
from warrens.types import EntityID, RandomSeed, SectorLayer
from warrens.util.hex_directions import HexDir, hex_ring
from warrens.util.rng import RNGProvider

logger = logging.getLogger(__name__)


class FovStatus(Enum):
    SEEN = auto()
    REMEMBERED = auto()


class GameWorld:
    """
    The complete state of the world: terrain, entities and their placement.

    Terrain is generated lazily from the world seed as it is queried. Does not
    handle input or rendering. Entities are IDs in a `ComponentStore`; where
    they are is tracked by a `Spatial` index.
    """

    # How far from the layer origin to look for a starting cell.
    MAX_ENTRANCE_SEARCH_RADIUS = 200

    def __init__(
        self,
        seed: RandomSeed = config.RANDOM_SEED,
        registry: ChunkRegistry | None = None,
    ) -> None:
        self.seed = seed
        self.rng_provider = RNGProvider(seed)
        self.registry = registry if registry is not None else default_registry()
        self.world_terrain = WorldTerrain(self.registry, self.rng_provider)

        self.ecs = ComponentStore()
        self.spatial = Spatial()
        self.player: EntityID | None = None
        self.tick: int = 0

        # Extra sight blocking from whatever stands at a location. Replaceable.
        self.occupant_blocks_sight: Callable[[Location], bool] = (
            self._mob_blocks_sight
        )

    # =========================================================================
    # Terrain queries
    # =========================================================================

    def terrain(self, loc: Location) -> TerrainCell:
        cell = self.world_terrain.terrain(loc)
        if cell.feature == Terrain.DOOR and self.has_mobs(loc):
            # Standing in the doorway opens the door.
            cell = cell._replace(feature=Terrain.OPEN_DOOR)
        return cell

    def set_terrain(self, loc: Location, cell: TerrainCell) -> None:
        self.world_terrain.set_terrain(loc, cell)

    def is_wall(self, loc: Location) -> bool:
        return self.terrain(loc).is_wall

    def blocks_sight(self, loc: Location) -> bool:
        return self.terrain(loc).blocks_sight or self.occupant_blocks_sight(loc)

    def blocks_walk(self, loc: Location) -> bool:
        return self.terrain(loc).blocks_walk

    def has_mobs(self, loc: Location) -> bool:
        return any(self.ecs.contains(Mob, e) for e in self.spatial.entities_at(loc))

    def _mob_blocks_sight(self, loc: Location) -> bool:
        for e in self.spatial.entities_at(loc):
            mob = self.ecs.get(Mob, e)
            if mob is not None and mob.blocks_sight:
                return True
        return False

    # =========================================================================
    # Spatial queries
    # =========================================================================

    def location(self, e: EntityID) -> Location | None:
        return self.spatial.location(e)

    def entities_at(self, loc: Location) -> list[EntityID]:
        return self.spatial.entities_at(loc)

    def entities_in(self, parent: EntityID) -> list[EntityID]:
        return self.spatial.entities_in(parent)

    def entity_equipped(self, parent: EntityID, slot: Slot) -> EntityID | None:
        return self.spatial.entity_equipped(parent, slot)

    def entity_contains(self, parent: EntityID, child: EntityID) -> bool:
        return self.spatial.contains(parent, child)

    # =========================================================================
    # Entity lifecycle
    # =========================================================================

    def place_entity(self, e: EntityID, loc: Location) -> None:
        self.spatial.insert_at(e, loc)

    def equip_item(self, e: EntityID, parent: EntityID, slot: Slot) -> None:
        """Raises ContainmentCycleError or SlotOccupiedError on invalid moves."""
        self.spatial.equip(e, parent, slot)

    def kill_entity(self, e: EntityID) -> None:
        """Take ``e`` off the map. Its components are kept."""
        self.spatial.remove(e)

    def remove_entity(self, e: EntityID) -> None:
        """Delete ``e`` entirely, along with everything it holds."""
        for child in self.spatial.entities_in(e):
            self.remove_entity(child)
        self.spatial.remove(e)
        self.ecs.destroy(e)
        if self.player == e:
            self.player = None

    def spawn(self, components: Iterable[object], loc: Location) -> EntityID:
        e = self.ecs.make()
        for component in components:
            self.ecs.insert(e, component)
        self.place_entity(e, loc)
        return e

    def spawn_player(self, loc: Location) -> EntityID:
        self.player = self.spawn(
            [Desc("player", icon=ord("@")), MapMemory(), Mob()], loc
        )
        self.do_fov(self.player)
        return self.player

    def player_entrance(self, z: SectorLayer = config.OVERWORLD_Z) -> Location:
        """The open cell nearest to the origin of layer ``z``.

        Raises:
            RuntimeError: If no open cell is found within
                MAX_ENTRANCE_SEARCH_RADIUS.
        """
        origin = Location(0, 0, z)
        for radius in range(self.MAX_ENTRANCE_SEARCH_RADIUS + 1):
            for offset in hex_ring(radius):
                loc = origin + offset
                cell = self.terrain(loc)
                if not cell.blocks_walk and not cell.is_wall and not self.has_mobs(loc):
                    return loc
        raise RuntimeError(f"No open cell near the origin of layer {z}")

    # =========================================================================
    # Movement
    # =========================================================================

    def can_enter(self, e: EntityID, loc: Location) -> bool:
        if self.blocks_walk(loc):
            return False
        return not any(
            other != e and self.ecs.contains(Mob, other)
            for other in self.spatial.entities_at(loc)
        )

    def entity_step(self, e: EntityID, direction: HexDir) -> bool:
        """Move a map-placed entity one cell. Returns whether it moved."""
        place = self.spatial.get(e)
        if not isinstance(place, At):
            return False
        target = place.location.step(direction)
        if not self.can_enter(e, target):
            return False
        self.place_entity(e, target)
        self.do_fov(e)
        return True

    def next_tick(self) -> None:
        self.tick += 1
        for e in self.ecs.entities_with(MapMemory):
            self.do_fov(e)

    # =========================================================================
    # Field of view
    # =========================================================================

    def do_fov(self, e: EntityID) -> None:
        """Recompute what ``e`` sees and extend what it remembers.

        Only cells in the viewer's own sector are remembered. Cells seen
        across a sector border show up in ``seen`` but are not mapped until
        the viewer goes there.
        """
        if not self.ecs.contains(MapMemory, e):
            return
        origin = self.location(e)
        if origin is None:
            return

        radius = fov.sight_range(origin)
        visible = fov.field_of_view(origin, radius, self.blocks_sight)

        memory = self.ecs.get_mut(MapMemory, e)
        memory.seen.clear()
        home = origin.sector()
        for loc in visible:
            memory.seen.add(loc)
            if loc.sector() == home:
                memory.remembered.add(loc)

        logger.debug(
            "FOV for entity %d at %s: radius %d, %d visible",
            e,
            origin,
            radius,
            len(visible),
        )

    def fov_status(self, e: EntityID, loc: Location) -> FovStatus | None:
        memory = self.ecs.get(MapMemory, e)
        if memory is None:
            return None
        if memory.is_seen(loc):
            return FovStatus.SEEN
        if memory.is_remembered(loc):
            return FovStatus.REMEMBERED
        return None
