"""
Command Registry.

Explicit mapping from normalized method names to async handlers, built once
at startup from the endpoint table. Dispatch goes through this table only;
a name that was never registered is an UnknownCommandError.

Usage:
    registry = build_registry()
    result = await dispatch(client, descriptor, registry, logger)
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from gitlab_gateway.cli.translator import PAGINATOR_METHOD, CallDescriptor, normalize_name
from gitlab_gateway.client.client import GitLabClient
from gitlab_gateway.client.endpoints import ENDPOINTS, Endpoint
from gitlab_gateway.client.pagination import PaginatedResult
from gitlab_gateway.core.exceptions import UnknownCommandError, UsageError

Handler = Callable[[GitLabClient, list[str], dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class Command:
    """A registered method: its handler plus what `gitlab help` shows."""

    name: str
    handler: Handler
    usage: str
    summary: str


class CommandRegistry:
    """Lookup table of the methods the gateway can dispatch."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, name: str, handler: Handler, usage: str = "", summary: str = "") -> None:
        """
        Register a handler under a method name.

        Raises:
            ValueError: If the name is already registered
        """
        key = normalize_name(name)
        if key in self._commands:
            raise ValueError(f"Method already registered: {key}")
        self._commands[key] = Command(name=key, handler=handler, usage=usage or key, summary=summary)

    def get(self, name: str) -> Command:
        """
        Look up a registered method.

        Raises:
            UnknownCommandError: If the name is not registered
        """
        try:
            return self._commands[normalize_name(name)]
        except KeyError:
            raise UnknownCommandError(name) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def commands(self) -> list[Command]:
        """All registered methods, sorted by name."""
        return [self._commands[name] for name in sorted(self._commands)]


def _endpoint_handler(endpoint: Endpoint) -> Handler:
    async def handler(client: GitLabClient, args: list[str], params: dict[str, Any]) -> Any:
        return await client.call(endpoint.http_method, endpoint.build_path(args), params)

    return handler


def _paginator_handler(endpoints: dict[str, Endpoint]) -> Handler:
    async def handler(client: GitLabClient, args: list[str], params: dict[str, Any]) -> PaginatedResult:
        if not args:
            raise UsageError(f"{PAGINATOR_METHOD} needs the name of a list method")

        name = normalize_name(args[0])
        endpoint = endpoints.get(name)
        if endpoint is None:
            raise UnknownCommandError(args[0])
        if not endpoint.paginated:
            raise UsageError(f"{name} does not return a paged list and cannot be used with --all")

        return client.paginate(endpoint.build_path(args[1:]), params)

    return handler


def build_registry(endpoints: Iterable[Endpoint] = ENDPOINTS) -> CommandRegistry:
    """Register one handler per endpoint plus the paginator helper."""
    registry = CommandRegistry()
    by_name: dict[str, Endpoint] = {}

    for endpoint in endpoints:
        registry.register(endpoint.name, _endpoint_handler(endpoint), endpoint.usage, endpoint.summary)
        by_name[normalize_name(endpoint.name)] = endpoint

    registry.register(
        PAGINATOR_METHOD,
        _paginator_handler(by_name),
        f"{PAGINATOR_METHOD} <method> [<arg> ...]",
        "Fetch every page of a list method (same as --all <method>)",
    )
    return registry


async def dispatch(
    client: GitLabClient,
    descriptor: CallDescriptor,
    registry: CommandRegistry,
    logger: Any,
) -> Any:
    """
    Run one CallDescriptor against the API.

    Paged results are fetched completely before returning.
    """
    command = registry.get(descriptor.method)

    logger.debug(
        "Dispatching API call",
        extra={
            "method": command.name,
            "args": descriptor.args,
            "params": sorted(descriptor.params),
        },
    )

    result = await command.handler(client, list(descriptor.args), dict(descriptor.params))

    if isinstance(result, PaginatedResult):
        result = await result.to_list()
        logger.debug("Fetched all pages", extra={"method": command.name, "items": len(result)})

    return result
