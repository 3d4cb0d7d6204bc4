"""
OWNERS Count - CLI Entry Point

Usage:
    python -m src.owners <group> [options]
"""

from src.owners.cli import main

if __name__ == "__main__":
    main()
