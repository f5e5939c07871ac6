"""Command line interface (``python -m payout_splitter.cli``)."""

from .main import main

__all__ = ["main"]
