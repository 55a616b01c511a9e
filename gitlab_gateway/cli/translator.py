"""
Argument Translator.

Turns the command-line tokens left over after global-option parsing into a
CallDescriptor: a method name, positional arguments, and a parameter mapping.

Coercion rules, applied to each token in order:
    --guest | --reporter | --developer | --master | --owner
                        -> params["access_level"] = 10 | 20 | 30 | 40 | 50
    --key=value         -> params["key"] = "value"
    --no-key            -> params["key"] = False
    --key               -> params["key"] = True
    anything else       -> positional argument

Hyphens in the method name and parameter keys become underscores.
Booleans go out as 1/0 in query strings and as true/false in JSON bodies.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from gitlab_gateway.core.exceptions import UsageError

ParamValue = str | bool | int

ACCESS_LEVELS: dict[str, int] = {
    "guest": 10,
    "reporter": 20,
    "developer": 30,
    "master": 40,
    "owner": 50,
}

ACCESS_LEVEL_FLAGS: dict[str, int] = {f"--{name}": level for name, level in ACCESS_LEVELS.items()}

FLAG_PATTERN = re.compile(r"^--(?P<negated>no-)?(?P<key>[^=]+?)(?:=(?P<value>.*))?$", re.DOTALL)

CONFIGURE_METHOD = "configure"
PAGINATOR_METHOD = "paginator"
HELP_METHOD = "help"

# Handled by the entry point itself, never rewritten or dispatched
PSEUDO_METHODS = frozenset({CONFIGURE_METHOD, HELP_METHOD})


@dataclass
class CallDescriptor:
    """A single API call built from the command line."""

    method: str
    args: list[str] = field(default_factory=list)
    params: dict[str, ParamValue] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {"method": self.method, "args": list(self.args), "params": dict(self.params)}


def normalize_name(name: str) -> str:
    """Replace hyphens with underscores."""
    return name.replace("-", "_")


def parse_flag(token: str) -> tuple[str, ParamValue] | None:
    """
    Parse one --flag token into a (key, value) pair.

    Returns:
        (normalized key, value), or None if the token is not a flag
    """
    if token in ACCESS_LEVEL_FLAGS:
        return "access_level", ACCESS_LEVEL_FLAGS[token]

    match = FLAG_PATTERN.match(token)
    if match is None:
        return None

    key = normalize_name(match.group("key"))
    value = match.group("value")
    if value is not None:
        return key, value
    return key, match.group("negated") is None


def split_tokens(tokens: Sequence[str]) -> tuple[list[str], dict[str, ParamValue]]:
    """Partition tokens into positional arguments and parameters, keeping order."""
    positional: list[str] = []
    params: dict[str, ParamValue] = {}

    for token in tokens:
        parsed = parse_flag(token)
        if parsed is None:
            positional.append(token)
        else:
            key, value = parsed
            params[key] = value

    return positional, params


def translate(tokens: Sequence[str], fetch_all: bool = False) -> CallDescriptor:
    """
    Build the CallDescriptor for one invocation.

    Args:
        tokens: Command-line tokens after global options
        fetch_all: Global --all flag; rewrites the call through the paginator

    Returns:
        CallDescriptor. For `configure` and `help` the descriptor is returned
        as parsed, without the --all rewrite; the caller handles those
        itself instead of dispatching them.

    Raises:
        UsageError: If no method name is given
    """
    positional, params = split_tokens(tokens)

    if not positional:
        raise UsageError("No method given. Usage: gitlab [OPTIONS] <method> [<arg> ...] [--<param>=<value> ...]")

    method = normalize_name(positional.pop(0))
    if not method:
        raise UsageError("Method name must not be empty")

    descriptor = CallDescriptor(method=method, args=positional, params=params)

    if method in PSEUDO_METHODS:
        return descriptor

    if fetch_all:
        descriptor.args = [method, *descriptor.args]
        descriptor.method = PAGINATOR_METHOD

    return descriptor
