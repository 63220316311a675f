"""CLI entry point for configuration introspection.

Usage:
    python -m fix_augment.config
    python -m fix_augment.config --check
    python -m fix_augment.config --json
"""

from .introspection import main

if __name__ == "__main__":
    main()
