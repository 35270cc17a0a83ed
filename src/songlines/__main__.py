"""Allow running as ``python -m songlines``."""

from songlines.cli import main

main()
