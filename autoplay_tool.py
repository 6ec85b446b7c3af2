"""Headless autoplay for the hex rotate engine.

Plays the first rotation that produces a match (scanning the board column by
column, clockwise before counter-clockwise) until the game ends or the turn
limit is reached, then prints a JSON summary. Handy for checking balance of
bomb cost, timer length and palette size without a renderer.

Run with: ``python autoplay_tool.py --width 8 --height 9 --colors 5 --seed 7``
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Ensure src/ is on the import path when running from a checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from hexmatch.config import EngineConfig  # type: ignore
from hexmatch.events.bus import EVENT_CELLS_EXPLODED, EVENT_GAME_OVER, EventBus  # type: ignore
from hexmatch.systems.match_engine import MatchEngine  # type: ignore
from hexmatch.systems.session_system import SessionSystem  # type: ignore

Choice = Tuple[int, int, bool]


def find_first_move(engine: MatchEngine) -> Optional[Choice]:
    config = engine.config
    for x in range(config.width):
        for y in range(config.height):
            selection = engine.select(x, y)
            for clockwise in (True, False):
                if engine.attempt_rotation(selection, clockwise, commit=False).valid:
                    return x, y, clockwise
    return None


def play(config: EngineConfig, max_turns: int) -> Dict[str, object]:
    bus = EventBus()
    engine = MatchEngine(config)
    session = SessionSystem(engine, bus)

    explosions: List[int] = []
    result: Dict[str, object] = {"game_over": None}
    bus.subscribe(EVENT_CELLS_EXPLODED, lambda sender, **k: explosions.append(k["outcome"].exploded_count))
    bus.subscribe(EVENT_GAME_OVER, lambda sender, **k: result.update(game_over=k["reason"]))

    session.start()
    turns = 0
    while turns < max_turns and not engine.is_game_over:
        choice = find_first_move(engine)
        if choice is None:
            break
        x, y, clockwise = choice
        session.select(x, y)
        session.rotate(clockwise)
        turns += 1

    result.update(
        turns=turns,
        score=engine.score,
        cells_exploded=sum(explosions),
        explosions=len(explosions),
        bombs_dropped=engine.dropped_bomb_count,
        live_bombs=[{"position": list(b.position), "moves_left": b.moves_left} for b in engine.bombs()],
    )
    engine.close()
    return result


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = EngineConfig()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--width", type=int, default=defaults.width)
    parser.add_argument("--height", type=int, default=defaults.height)
    parser.add_argument("--colors", type=int, default=defaults.color_count)
    parser.add_argument("--bomb-score", type=int, default=defaults.bomb_score)
    parser.add_argument("--bomb-timer", type=int, default=defaults.bomb_timer)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-turns", type=int, default=200)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = EngineConfig(
        width=args.width,
        height=args.height,
        color_count=args.colors,
        bomb_score=args.bomb_score,
        bomb_timer=args.bomb_timer,
        seed=args.seed,
    )
    summary = play(config, args.max_turns)
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
