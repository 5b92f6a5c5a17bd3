"""rbiam command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``rbiam`` script).
"""

from rbiam.cli.main import cli

__all__ = ["cli"]
