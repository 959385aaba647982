"""Allow ``python -m bookfinder``."""

from bookfinder.cli import main

if __name__ == "__main__":
    main()
