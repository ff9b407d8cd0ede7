"""Allow running ehstat with `python -m ehstat`."""

from .cli import main

main()
