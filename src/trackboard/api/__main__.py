"""Allow running the API server with ``python -m trackboard.api``."""

from trackboard.api.app import main

main()
