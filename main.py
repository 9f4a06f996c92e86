#!/usr/bin/env python3
"""Main Entry Point.

Usage: go mod graph | python main.py OR python main.py [file]
"""

from modgrapher.cli import main

if __name__ == "__main__":
    main()
