"""Entry point for `python -m rbiam`.

Usage:
    python -m rbiam export --graph rbiam-dump-1564315687.json trace.txt
"""

from __future__ import annotations

from rbiam.cli import cli

cli()
