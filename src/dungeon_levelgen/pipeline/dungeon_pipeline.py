"""
Dungeon Generation Pipeline.

Runs the generation stages in a fixed order over one seeded random source:
room placement, triangulation, graph reduction, corridor carving, wall
derivation, spawn selection and navigation indexing. The output is an
immutable Dungeon; failures are reported on the PipelineResult rather
than raised.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..geometry import Edge, Hallway, Vertex
from ..generators import (
    ConnectorGraph,
    Room,
    TileGrid,
    TileType,
    carve_corridors,
    derive_walls,
    place_rooms,
    reduce_graph,
    select_spawn,
    triangulate,
)
from ..navigation import NavigationIndex
from .errors import GenerationError
from .settings import GenerationSettings

logger = logging.getLogger(__name__)

_SEED_MODULUS = 2**31 - 1


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PipelineStage(Enum):
    INITIALIZE = "initialize"
    PLACE_ROOMS = "place_rooms"
    TRIANGULATE = "triangulate"
    REDUCE_GRAPH = "reduce_graph"
    CARVE_CORRIDORS = "carve_corridors"
    DERIVE_WALLS = "derive_walls"
    SELECT_SPAWN = "select_spawn"
    BUILD_NAVIGATION = "build_navigation"
    COMPLETE = "complete"


# ---------------------------------------------------------------------------
# Output / Result dataclasses
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dungeon:
    """Finished generation output; read-only once returned."""
    grid: TileGrid
    settings: GenerationSettings
    rooms: Tuple[Room, ...]
    edges: Tuple[Edge, ...]
    spawn: Vertex
    navigation: NavigationIndex
    seed: int
    hallways: Tuple[Hallway, ...] = ()
    triangulation: Tuple[Edge, ...] = ()
    tree_edge_count: int = 0  # leading entries of edges that form the spanning tree

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def find_path(self, start: Vertex, goal: Vertex) -> List[Vertex]:
        return self.navigation.find_path(start, goal)

    def get_tile(self, x: int, y: int) -> TileType:
        return self.grid.get_tile(x, y)


@dataclass
class PipelineProgress:
    stage: PipelineStage
    overall_progress: float
    message: str
    elapsed_time: float = 0.0

    @property
    def percentage(self) -> int:
        return int(self.overall_progress * 100)


@dataclass
class PipelineResult:
    success: bool
    dungeon: Optional[Dungeon] = None
    stages_completed: List[PipelineStage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_time(self) -> float:
        return self.metrics.get("total_time", 0.0)

    @property
    def seed(self) -> Optional[int]:
        return self.metrics.get("seed")

    def add_error(self, error: str, stage: Optional[PipelineStage] = None):
        if stage:
            error = f"[{stage.value}] {error}"
        self.errors.append(error)

    def add_warning(self, warning: str, stage: Optional[PipelineStage] = None):
        if stage:
            warning = f"[{stage.value}] {warning}"
        self.warnings.append(warning)


def resolve_seed(seed: Optional[int]) -> int:
    """Return ``seed`` unchanged, or a time-derived seed for 0 / None."""
    if seed:
        return seed
    return time.time_ns() % _SEED_MODULUS or 1


# ---------------------------------------------------------------------------
# Progress tracker
# ---------------------------------------------------------------------------

class ProgressTracker:
    STAGE_WEIGHTS = {
        PipelineStage.INITIALIZE: 0.02,
        PipelineStage.PLACE_ROOMS: 0.18,
        PipelineStage.TRIANGULATE: 0.15,
        PipelineStage.REDUCE_GRAPH: 0.10,
        PipelineStage.CARVE_CORRIDORS: 0.20,
        PipelineStage.DERIVE_WALLS: 0.05,
        PipelineStage.SELECT_SPAWN: 0.02,
        PipelineStage.BUILD_NAVIGATION: 0.28,
    }

    def __init__(self):
        self.start_time = time.perf_counter()
        self.stage_start_times: Dict[PipelineStage, float] = {}
        self.stage_durations_ms: Dict[str, float] = {}

    def start_stage(self, stage: PipelineStage):
        self.stage_start_times[stage] = time.perf_counter()

    def complete_stage(self, stage: PipelineStage):
        started = self.stage_start_times.get(stage)
        if started is not None:
            self.stage_durations_ms[stage.value] = (time.perf_counter() - started) * 1000.0

    def calculate_progress(self, current_stage: PipelineStage, stage_progress: float) -> PipelineProgress:
        stages = list(self.STAGE_WEIGHTS.keys())
        if current_stage not in stages:
            overall = 1.0
        else:
            idx = stages.index(current_stage)
            completed = sum(self.STAGE_WEIGHTS[s] for s in stages[:idx])
            overall = completed + self.STAGE_WEIGHTS[current_stage] * stage_progress
        return PipelineProgress(
            stage=current_stage,
            overall_progress=min(overall, 1.0),
            message="",
            elapsed_time=time.perf_counter() - self.start_time,
        )


# ---------------------------------------------------------------------------
# Main pipeline
# ---------------------------------------------------------------------------

class DungeonPipeline:
    """Generates a Dungeon from GenerationSettings."""

    def __init__(
        self,
        settings: Optional[GenerationSettings] = None,
        progress_callback: Optional[Callable[[PipelineProgress], None]] = None,
    ):
        self.settings = settings or GenerationSettings()
        self.is_running = False
        self.current_stage = PipelineStage.INITIALIZE
        self.progress_tracker = ProgressTracker()
        self.progress_callback = progress_callback
        self._reset()

    def _reset(self):
        self.rng: Optional[random.Random] = None
        self.grid: Optional[TileGrid] = None
        self.rooms: List[Room] = []
        self.rooms_skipped = 0
        self.triangulation: List[Edge] = []
        self.connectors = ConnectorGraph()
        self.hallways: List[Hallway] = []
        self.walls_created = 0
        self.spawn: Optional[Vertex] = None
        self.navigation: Optional[NavigationIndex] = None

    # -- helpers --

    def set_progress_callback(self, callback: Callable[[PipelineProgress], None]):
        self.progress_callback = callback

    def _begin_stage(self, stage: PipelineStage, message: str):
        self.current_stage = stage
        self.progress_tracker.start_stage(stage)
        self._update_progress(0.0, message)

    def _end_stage(self, message: str):
        self._update_progress(1.0, message)
        self.progress_tracker.complete_stage(self.current_stage)

    def _update_progress(self, stage_progress: float, message: str):
        if not self.progress_callback:
            return
        progress = self.progress_tracker.calculate_progress(self.current_stage, stage_progress)
        progress.message = message
        try:
            self.progress_callback(progress)
        except Exception:
            logger.warning("Progress callback failed", exc_info=True)

    # -- stages --

    def _initialize(self, seed: int):
        self._begin_stage(PipelineStage.INITIALIZE, "Validating settings...")
        self.settings.validate_or_raise()
        self.rng = random.Random(seed)
        self.grid = TileGrid(self.settings.grid_width, self.settings.grid_height)
        self._end_stage(f"Grid {self.grid.width}x{self.grid.height}")

    def _place_rooms(self):
        self._begin_stage(PipelineStage.PLACE_ROOMS, "Placing rooms...")
        placement = place_rooms(self.grid, self.settings, self.rng)
        self.rooms = placement.rooms
        self.rooms_skipped = placement.skipped
        self._end_stage(f"Rooms: {len(self.rooms)} placed, {self.rooms_skipped} skipped")

    def _triangulate(self):
        self._begin_stage(PipelineStage.TRIANGULATE, "Triangulating room centres...")
        self.triangulation = triangulate(room.center for room in self.rooms)
        logger.info("Triangulation: %d edges over %d rooms", len(self.triangulation), len(self.rooms))
        self._end_stage(f"Triangulation: {len(self.triangulation)} edges")

    def _reduce_graph(self):
        self._begin_stage(PipelineStage.REDUCE_GRAPH, "Selecting connectors...")
        self.connectors = reduce_graph(
            self.triangulation, self.settings.extra_hallway_generation_chance, self.rng
        )
        logger.info("Connectors: %d tree, %d extra",
                    len(self.connectors.tree), len(self.connectors.extras))
        self._end_stage(f"Connectors: {len(self.connectors)}")

    def _carve_corridors(self):
        self._begin_stage(PipelineStage.CARVE_CORRIDORS, "Carving corridors...")
        self.hallways = carve_corridors(self.grid, self.connectors.edges, self.settings, self.rng)
        self._end_stage(f"Corridors: {len(self.hallways)}")

    def _derive_walls(self):
        self._begin_stage(PipelineStage.DERIVE_WALLS, "Deriving walls...")
        self.walls_created = derive_walls(self.grid)
        self._end_stage(f"Walls: {self.walls_created}")

    def _select_spawn(self, result: PipelineResult):
        self._begin_stage(PipelineStage.SELECT_SPAWN, "Selecting spawn...")
        self.spawn = select_spawn(self.rooms, self.rng)
        if self.spawn is None:
            self.spawn = Vertex.zero()
            logger.warning("No rooms placed; spawn defaults to origin")
            result.add_warning("No rooms placed; spawn defaults to origin", PipelineStage.SELECT_SPAWN)
        self._end_stage(f"Spawn at ({self.spawn.x:g}, {self.spawn.y:g})")

    def _build_navigation(self):
        self._begin_stage(PipelineStage.BUILD_NAVIGATION, "Building navigation index...")
        self.grid.freeze()
        self.navigation = NavigationIndex.from_grid(self.grid)
        self._end_stage(f"Navigation: {self.navigation.node_count} nodes")

    def _collect_metrics(self, result: PipelineResult):
        result.metrics.update({
            'rooms_placed': len(self.rooms),
            'rooms_skipped': self.rooms_skipped,
            'triangulation_edges': len(self.triangulation),
            'tree_edges': len(self.connectors.tree),
            'extra_edges': len(self.connectors.extras),
            'floor_tiles': self.grid.count(TileType.FLOOR),
            'wall_tiles': self.grid.count(TileType.WALL),
            'navigation_nodes': self.navigation.node_count,
            'phase_ms': dict(self.progress_tracker.stage_durations_ms),
        })

    # -- main entry --

    def generate(self) -> PipelineResult:
        if self.is_running:
            raise GenerationError("Pipeline is already running")
        self.is_running = True
        self._reset()
        self.progress_tracker = ProgressTracker()
        result = PipelineResult(success=False)
        start_time = time.perf_counter()

        try:
            actual_seed = resolve_seed(self.settings.seed)
            result.metrics['seed'] = actual_seed
            logger.info("Generation seed: %d", actual_seed)
            logger.info("Starting dungeon generation: %d rooms, %dx%d",
                        self.settings.room_count, self.settings.grid_width, self.settings.grid_height)

            stages = [
                (lambda: self._initialize(actual_seed), "Initialize"),
                (self._place_rooms, "Place rooms"),
                (self._triangulate, "Triangulate"),
                (self._reduce_graph, "Reduce graph"),
                (self._carve_corridors, "Carve corridors"),
                (self._derive_walls, "Derive walls"),
                (lambda: self._select_spawn(result), "Select spawn"),
                (self._build_navigation, "Build navigation"),
            ]
            for stage_fn, desc in stages:
                try:
                    logger.debug("Stage: %s", desc)
                    stage_fn()
                    result.stages_completed.append(self.current_stage)
                except GenerationError as e:
                    logger.error("Stage %s failed: %s", desc, e)
                    result.add_error(str(e), self.current_stage)
                    return result

            if self.rooms_skipped:
                result.add_warning(
                    f"{self.rooms_skipped} of {self.settings.room_count} rooms could not be placed",
                    PipelineStage.PLACE_ROOMS,
                )

            result.dungeon = Dungeon(
                grid=self.grid,
                settings=self.settings.with_seed(actual_seed),
                rooms=tuple(self.rooms),
                edges=tuple(self.connectors.edges),
                spawn=self.spawn,
                navigation=self.navigation,
                seed=actual_seed,
                hallways=tuple(self.hallways),
                triangulation=tuple(self.triangulation),
                tree_edge_count=len(self.connectors.tree),
            )
            self._collect_metrics(result)

            self.current_stage = PipelineStage.COMPLETE
            result.stages_completed.append(PipelineStage.COMPLETE)
            result.success = True
            result.metrics["total_time"] = time.perf_counter() - start_time
            self._update_progress(1.0, "Generation complete")
            logger.info("Dungeon complete in %.3fs: %d rooms, %d connectors",
                        result.metrics["total_time"], len(self.rooms), len(self.connectors))
        except Exception as e:
            logger.exception("Unexpected pipeline error")
            result.add_error(f"Unexpected error: {e}", self.current_stage)
        finally:
            self.is_running = False
        return result


def generate_dungeon(
    settings: Optional[GenerationSettings] = None,
    progress_callback: Optional[Callable[[PipelineProgress], None]] = None,
) -> Dungeon:
    """
    Generate a dungeon, raising on failure.

    Args:
        settings: Generation settings; defaults are used when omitted
        progress_callback: Optional per-stage progress receiver

    Returns:
        The generated Dungeon

    Raises:
        GenerationError: If any stage failed
    """
    result = DungeonPipeline(settings, progress_callback).generate()
    if not result.success:
        raise GenerationError("; ".join(result.errors) or "Generation failed")
    return result.dungeon
