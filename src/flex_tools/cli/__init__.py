"""
FLEX Tools Command-Line Interface
=================================

This package provides command-line tools for FLEX binaries:

- **flex2sr**: FLEX binary to Motorola S-record converter
- **sr2flex**: Motorola S-record to FLEX binary converter
- **mkflexfs**: FLEX blank disk image creator

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

import logging

__all__ = ["flex2sr", "sr2flex", "mkflexfs", "setup_logging"]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )
