"""Module entrypoint for ``python -m llindex``.

All argument parsing and query dispatch happen in ``llindex.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
