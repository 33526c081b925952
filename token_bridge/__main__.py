"""Allow running as python -m token_bridge."""

from .cli import main

main()
