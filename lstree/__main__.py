"""Module entrypoint for ``python -m lstree``.

All argument parsing and runtime setup happen in ``lstree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
