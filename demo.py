#!/usr/bin/env python3
"""Watch the frontier agent play Minesweeper."""
import os
import time

from agents import FrontierAgent
from minefield import LEVELS, MinesweeperEnv, get_level


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, level_name: str = "beginner"):
    """Run demo games with visualization."""
    level = get_level(level_name)
    env = MinesweeperEnv(level=level, render_mode="ansi")
    agent = FrontierAgent(level)

    print(f"Board: {level.rows}x{level.cols} with {level.mine_count} mines")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, _ = env.reset()
        agent.reset()
        done = False
        step = 0

        while not done:
            action = agent.select_action(obs, env.get_action_mask())
            row, col = agent.action_to_position(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "VICTORIOUS":
                    wins += 1
                    print("\n*** WIN! ***")
                else:
                    print("\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--level", choices=list(LEVELS), default="beginner", help="Difficulty")
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, level_name=args.level)
