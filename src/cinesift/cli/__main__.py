"""Allow running the CLI with ``python -m cinesift.cli``."""

from .main import main

main()
