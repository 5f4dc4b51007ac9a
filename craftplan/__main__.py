"""Module entrypoint for `python -m craftplan`.

Purpose: Delegate to `craftplan.server.main` to start the plan service.
"""

from .server import main


if __name__ == "__main__":
    main()
