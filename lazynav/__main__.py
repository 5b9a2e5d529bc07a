"""Module entrypoint for ``python -m lazynav``."""

from .cli import main


if __name__ == "__main__":
    main()
