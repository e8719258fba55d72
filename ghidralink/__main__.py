"""Module entrypoint for ``python -m ghidralink``.

All argument parsing and runtime setup happen in ``ghidralink.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
