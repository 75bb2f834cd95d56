"""Entrypoint for `python -m findzero`."""

from .cli import main


if __name__ == "__main__":
    main()
