#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--level LEVEL]
    python main.py evaluate [--agent {random,frontier}]
    python main.py scores {show,clear}
"""
from minefield.cli import main


if __name__ == "__main__":
    main()
