"""
Command line interface.

Usage:
    minefield play [--level LEVEL] [--seed N]
    minefield evaluate [--agent {random,frontier}] [--games N]
    minefield scores {show,clear} [--level LEVEL]
"""
import argparse
import logging
import os
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from .controller import Game
from .environment import MinesweeperEnv, render_ansi
from .levels import LEVELS, get_level
from .scores import JsonScoreStore, ScoreKeeper
from .session import GamePhase, GameSession


SCORES_ENV_VAR = "MINEFIELD_SCORES_FILE"
DEFAULT_SCORES_FILE = Path.home() / ".minefield" / "scores.json"

HELP_TEXT = """Commands:
  r ROW COL    reveal a cell
  c ROW COL    chord on a revealed number
  f ROW COL    flag a cell
  u ROW COL    remove a flag
  level NAME   choose the level for the next reset
  reset        start a new board
  quit         leave the game"""


def default_scores_file() -> Path:
    """Scores path from the environment, or the per-user default."""
    return Path(os.environ.get(SCORES_ENV_VAR, DEFAULT_SCORES_FILE))


def format_status(session: GameSession, seconds: int) -> str:
    """One-line summary shown above the board."""
    best = "---" if session.best_time is None else f"{session.best_time:03d}"
    return (
        f"Time {seconds:03d}  Best {best}  "
        f"Mines {session.remaining_mines:03d}  [{session.phase.value}]"
    )


# ============================================================================
# Play
# ============================================================================

CELL_ACTIONS: Dict[str, Callable[[Game, int, int], GameSession]] = {
    "r": Game.reveal,
    "c": Game.chord,
    "f": Game.flag,
    "u": Game.unflag,
}


def play_line(game: Game, line: str) -> bool:
    """
    Apply one line of player input.

    Args:
        game: Game to act on.
        line: Command text, e.g. ``"r 3 4"``.

    Returns:
        False when the player asked to quit, True otherwise.

    Raises:
        ValueError: On malformed input, unknown levels or
            out-of-range cells.
    """
    words = line.split()
    if not words:
        return True
    command, args = words[0].lower(), words[1:]

    if command in ("q", "quit", "exit"):
        return False
    if command in ("h", "help", "?"):
        print(HELP_TEXT)
    elif command == "reset":
        game.reset()
    elif command == "level":
        if len(args) != 1:
            raise ValueError("Usage: level NAME")
        game.select_level(args[0])
    elif command in CELL_ACTIONS:
        if len(args) != 2:
            raise ValueError(f"Usage: {command} ROW COL")
        row, col = (int(arg) for arg in args)
        CELL_ACTIONS[command](game, row, col)
    else:
        raise ValueError(f"Unknown command {command!r} (type 'help')")
    return True


def play(args: argparse.Namespace) -> None:
    """Play interactively in the terminal."""
    store = JsonScoreStore(args.scores_file)
    game = Game(store=store, level=args.level, rng=np.random.default_rng(args.seed))
    last_tick = time.monotonic()

    print(HELP_TEXT)
    while True:
        session = game.session
        print()
        print(format_status(session, game.elapsed()))
        print(render_ansi(session.to_observation()))
        if session.phase is GamePhase.VICTORIOUS:
            print("*** You win! ***")
        elif session.phase is GamePhase.DEAD:
            print("*** Boom. ***")

        try:
            line = input("> ")
        except EOFError:
            break

        # Deliver the whole seconds that passed while waiting for input
        now = time.monotonic()
        for _ in range(int(now - last_tick)):
            game.tick()
        last_tick += int(now - last_tick)

        try:
            if not play_line(game, line):
                break
        except ValueError as error:
            print(f"Error: {error}")


# ============================================================================
# Evaluate
# ============================================================================

def run_episodes(env: MinesweeperEnv, agent, games: int, seed: Optional[int] = None) -> Dict[str, float]:
    """
    Play several games and collect statistics.

    Returns:
        Dict with win_rate, avg_reward, avg_steps and avg_revealed.
    """
    wins = 0
    rewards: List[float] = []
    steps: List[int] = []
    revealed: List[int] = []

    for episode in range(games):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        agent.reset()
        total = 0.0
        done = False
        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            obs, reward, terminated, truncated, info = env.step(action)
            total += float(reward)
            done = terminated or truncated
        wins += info["game_state"] == GamePhase.VICTORIOUS.name
        rewards.append(total)
        steps.append(info["steps"])
        revealed.append(info["revealed"])

    return {
        "win_rate": wins / games if games else 0.0,
        "avg_reward": float(np.mean(rewards)) if rewards else 0.0,
        "avg_steps": float(np.mean(steps)) if steps else 0.0,
        "avg_revealed": float(np.mean(revealed)) if revealed else 0.0,
    }


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a baseline agent."""
    from agents import FrontierAgent, RandomAgent

    level = get_level(args.level)
    agent_cls = {"random": RandomAgent, "frontier": FrontierAgent}[args.agent]
    agent = agent_cls(level, seed=args.seed)
    env = MinesweeperEnv(level=level)

    print(f"\nEvaluating {args.agent} agent over {args.games} {level.name} games...")
    results = run_episodes(env, agent, args.games, seed=args.seed)

    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg reward: {results['avg_reward']:.2f}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} cells")


# ============================================================================
# Scores
# ============================================================================

def scores(args: argparse.Namespace) -> None:
    """Show or clear best times."""
    keeper = ScoreKeeper(JsonScoreStore(args.scores_file))
    names = [args.level] if args.level else list(LEVELS)

    if args.action == "clear":
        for name in names:
            keeper.clear(name)
            print(f"Cleared best time for {name}")
        return

    for name in names:
        best = keeper.best(name)
        print(f"{name:<14} {'---' if best is None else f'{best:03d}'}")


# ============================================================================
# Entry Point
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play, evaluate agents, manage best times"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--scores-file",
        type=Path,
        default=default_scores_file(),
        help=f"Best-times file (default: ${SCORES_ENV_VAR} or {DEFAULT_SCORES_FILE})",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--level", choices=list(LEVELS), default="intermediate", help="Difficulty"
    )
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a baseline agent")
    eval_parser.add_argument(
        "--agent", choices=["random", "frontier"], default="frontier", help="Agent to evaluate"
    )
    eval_parser.add_argument(
        "--level", choices=list(LEVELS), default="beginner", help="Difficulty"
    )
    eval_parser.add_argument("--games", type=int, default=100, help="Number of games to play")
    eval_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    scores_parser = subparsers.add_parser("scores", help="Show or clear best times")
    scores_parser.add_argument("action", choices=["show", "clear"])
    scores_parser.add_argument(
        "--level", choices=list(LEVELS), default=None, help="Only this level"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    if args.command == "play":
        play(args)
    elif args.command == "evaluate":
        evaluate(args)
    elif args.command == "scores":
        scores(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
