"""
GitLab Gateway.

Command-line gateway to the GitLab REST API. Maps a method name, positional
arguments, and --key=value flags onto a single API call and prints the JSON
result.

Usage:
    gitlab projects --per-page=5
    gitlab --all groups
    gitlab configure
"""

__version__ = "0.1.0"
