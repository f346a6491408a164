#!/usr/bin/env python3
"""
run.py - Main entry point for connect4net

Examples:
  python run.py play                     # local game against the advisor
  python run.py serve --port 5000        # serve games over TCP
  python run.py connect localhost 5000   # play against a server
"""

import sys

from connect4net.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
