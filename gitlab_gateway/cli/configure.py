"""
Interactive Configuration.

`gitlab configure` asks for the GitLab endpoint and private token and writes
them to the gateway config file. Values already in the file are offered as
defaults, and the token prompt is hidden. Sections the wizard does not ask
about (e.g. logging) are kept as they are.
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from gitlab_gateway.core.config import get_config_path, load_yaml_config, save_yaml_config
from gitlab_gateway.core.config_schema import GatewayConfigSchema
from gitlab_gateway.core.exceptions import ConfigurationError

console = Console(stderr=True)

DEFAULT_ENDPOINT = "https://gitlab.com/api/v4"


def _existing_config(path: Path) -> dict[str, Any]:
    try:
        return load_yaml_config(path)
    except FileNotFoundError:
        return {}


def prompt_for_config(existing: dict[str, Any]) -> dict[str, Any]:
    """Ask for each setting, defaulting to the existing value."""
    api = dict(existing.get("api") or {})
    output = dict(existing.get("output") or {})

    api["endpoint"] = Prompt.ask(
        "GitLab API endpoint",
        default=api.get("endpoint", DEFAULT_ENDPOINT),
        console=console,
    ).strip()

    token_prompt = "Private token"
    if api.get("private_token"):
        token_prompt += " (leave empty to keep the current one)"
    token = Prompt.ask(token_prompt, password=True, default="", show_default=False, console=console).strip()
    if token:
        api["private_token"] = token

    api["verify_ssl"] = Confirm.ask(
        "Verify SSL certificates?",
        default=api.get("verify_ssl", True),
        console=console,
    )
    output["pretty"] = Confirm.ask(
        "Pretty-print JSON output by default?",
        default=output.get("pretty", False),
        console=console,
    )

    return {**existing, "api": api, "output": output}


def run_configure(logger: Any, path: Path | None = None) -> Path:
    """
    Run the setup wizard and persist the result.

    Returns:
        Path of the written config file

    Raises:
        ConfigurationError: If the answers do not form a valid configuration
    """
    config_path = path or get_config_path()

    console.print(Panel(
        f"Settings will be written to [cyan]{config_path}[/cyan]",
        title="GitLab Gateway Setup",
    ))

    data = prompt_for_config(_existing_config(config_path))

    if not data["api"].get("private_token"):
        raise ConfigurationError("A private token is required")

    try:
        GatewayConfigSchema(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration:\n{e}") from e

    written = save_yaml_config(data, config_path)
    logger.info("Configuration saved", extra={"path": str(written)})
    console.print(f"[green]Configuration saved to {written}[/green]")
    return written
