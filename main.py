#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--width W] [--height H] [--mines N] [--seed S]
"""
import sys

from src.sweeper.cli import main


if __name__ == "__main__":
    sys.exit(main())
