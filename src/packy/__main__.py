"""
Entry point for running packy as a module.

Allows running Packy via:
    python -m packy validate <folder>
    python -m packy serve
"""

from packy.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
