"""Config commands for mcupload."""

from __future__ import annotations

import click

from mcupload.core import config as config_module
from mcupload.core.config import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT, Config
from mcupload.core.output import (
    OutputFormat,
    print_error,
    print_key_value,
    print_output,
    print_success,
)


@click.group()
def config() -> None:
    """Manage mcupload configuration."""
    pass


@config.command("init")
@click.option("--url", prompt="Materials Commons server URL", help="Server URL")
@click.option("--profile", default="default", help="Profile name")
@click.option("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Chunk size in bytes")
@click.option("--timeout", type=int, default=DEFAULT_TIMEOUT, help="Request timeout in seconds")
@click.option("--no-verify-ssl", is_flag=True, help="Disable TLS certificate checks")
@click.option("--force", is_flag=True, help="Overwrite an existing profile")
def config_init(
    url: str,
    profile: str,
    chunk_size: int,
    timeout: int,
    no_verify_ssl: bool,
    force: bool,
) -> None:
    """Create configuration file with a new profile.

    The API key is never stored; set MC_API_KEY instead.

    Example:
        mcupload config init --url https://materialscommons.org/api
    """
    config_file = config_module.CONFIG_FILE

    if config_file.exists():
        cfg = Config.load(config_file)
        if cfg.has_profile(profile) and not force:
            print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
            raise SystemExit(1)
    else:
        cfg = Config()

    try:
        created = cfg.add_profile(
            name=profile,
            url=url,
            chunk_size=chunk_size,
            timeout=timeout,
            verify_ssl=not no_verify_ssl,
        )
    except Exception as e:
        print_error(str(e))
        raise SystemExit(1)

    if len(cfg.profiles) == 1:
        cfg.default_profile = profile

    cfg.save(config_file)

    print_success(f"Configuration saved to {config_file}")
    print_key_value({"profile": profile, **created.to_dict()})


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
def config_show(output: str) -> None:
    """Show current configuration."""
    config_file = config_module.CONFIG_FILE
    try:
        cfg = Config.load(config_file)
    except Exception as e:
        print_error(f"Failed to load config: {e}")
        raise SystemExit(1)

    if not cfg.profiles:
        print_error("No configuration found. Run 'mcupload config init' first.")
        raise SystemExit(1)

    data = {
        "config_file": str(config_file),
        "default_profile": cfg.default_profile,
        "profiles": list(cfg.profiles.keys()),
    }

    if output == "json":
        data["profile_details"] = {name: p.to_dict() for name, p in cfg.profiles.items()}
        print_output(data, format=OutputFormat.JSON)
        return

    print_key_value(data, title="Configuration")
    click.echo()
    for name, profile in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo(f"Profile: {name}{marker}")
        print_key_value(
            {
                "url": profile.url,
                "chunk_size": profile.chunk_size,
                "timeout": f"{profile.timeout}s",
                "verify_ssl": profile.verify_ssl,
            }
        )
        click.echo()
