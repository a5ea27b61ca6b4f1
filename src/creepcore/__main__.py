"""Run the engine against a small local colony.

Usage:
    python -m creepcore                    # 50 ticks, INFO logging
    python -m creepcore --ticks 500 --log-level WARNING
    python -m creepcore --hostiles 2       # give the towers something to do
"""

from __future__ import annotations

import argparse
import sys

from creepcore.config import EngineSettings
from creepcore.core.geometry import Position, Terrain
from creepcore.core.identity import ObjectKind
from creepcore.log import setup_logging
from creepcore.scheduling import TickEngine
from creepcore.tracing import InMemoryHistoryStore
from creepcore.world import LocalWorld

ROOM = "W1N1"


def demo_world(hostiles: int = 0) -> LocalWorld:
    """One room with two sources, a spawn, extensions, a tower and some work."""
    world = LocalWorld()
    world.add_room(ROOM, terrain={(20, y): Terrain.SWAMP for y in range(10, 30)})
    world.add_controller(Position(25, 5, ROOM), level=2)
    world.add_source(Position(5, 20, ROOM))
    world.add_source(Position(40, 35, ROOM))
    world.add_spawn(Position(25, 25, ROOM), energy=300)
    for x in (23, 27):
        world.add_store(ObjectKind.EXTENSION, Position(x, 27, ROOM))
    world.add_tower(Position(25, 30, ROOM), energy=500)
    for y in range(12, 18):
        world.add_road(Position(20, y, ROOM), hits=4_000)
    world.add_site(Position(30, 25, ROOM))
    for i in range(hostiles):
        world.add_hostile(Position(45 - i, 45, ROOM))
    return world


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="creepcore",
        description="Drive a local colony with the creepcore tick engine",
    )
    parser.add_argument("--ticks", type=int, default=50, help="Ticks to run")
    parser.add_argument("--seed", type=int, default=None, help="Override the RNG seed")
    parser.add_argument("--hostiles", type=int, default=0, help="Hostiles to place")
    parser.add_argument("--log-level", default=None, help="Logging level (default from settings)")
    args = parser.parse_args(argv)

    settings = EngineSettings()
    if args.seed is not None:
        settings = settings.model_copy(update={"rng_seed": args.seed})
    setup_logging(args.log_level or settings.log_level)

    world = demo_world(args.hostiles)
    history = InMemoryHistoryStore(max_ticks=args.ticks)
    engine = TickEngine(settings, history=history)

    for _ in range(args.ticks):
        record = engine.tick(world)
        kinds = [e.kind for e in record.events]
        print(
            f"tick {record.tick}: {len(world.agents())} agents, "
            f"{len(engine.registry)} tasks, "
            f"{kinds.count('assign')} assigned, {kinds.count('evict')} evicted, "
            f"{kinds.count('spawn')} spawned"
        )
        world.advance()

    return 0


if __name__ == "__main__":
    sys.exit(main())
