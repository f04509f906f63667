"""Module entrypoint for running signwash as ``python -m signwash``."""

from __future__ import annotations

from signwash.cli import main


if __name__ == "__main__":
    main()
