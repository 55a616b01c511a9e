#!/usr/bin/env python3
"""
GitLab Gateway CLI.

Runs the gateway from a source checkout without installing it.
Installed copies expose the same command as `gitlab`.

Usage:
    python cli.py --help
    python cli.py project 42 --per-page=10
    python cli.py --all groups
    python cli.py configure
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from gitlab_gateway.cli.app import main

if __name__ == "__main__":
    main()
