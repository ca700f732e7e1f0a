"""chanlog command-line interface.

Usage:
    python -m chanlog.cli [command] [options]

Commands:
    channels    List declared channels
    check       Report unresolved references
    components  List registered components
    emit        Log one message through a channel
"""

from chanlog.cli.main import app

__all__ = ["app"]
