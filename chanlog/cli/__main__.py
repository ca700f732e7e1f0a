"""Entry point for running CLI as module.

Usage:
    python -m chanlog.cli check logging.yaml
"""

from chanlog.cli.main import main

if __name__ == "__main__":
    main()
