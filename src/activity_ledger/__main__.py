#!/usr/bin/env python3
"""
Main entry point for the activity ledger module.
This allows running the module with: python -m activity_ledger
"""

from .cli import main

if __name__ == "__main__":
    main()
