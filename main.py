#!/usr/bin/env python3
"""
Main CLI for the Adrian Font Server
===================================

Run from the repository root: ``python main.py serve -c adrian.yaml``.
Installed copies provide the same commands as ``adrian``.
"""

from src.adrian.cli import main

if __name__ == "__main__":
    main()
