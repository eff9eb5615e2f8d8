"""linkwatch CLI entrypoint.

Command-line interface for the connectivity monitor.
"""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from linkwatch.core.network_manager import NetworkManager
    from linkwatch.domain.config import LinkwatchConfig

from linkwatch.core.errors import LinkwatchCliError
from linkwatch.core.events import EventKind
from linkwatch.core.sync import classify_retryable
from linkwatch.domain.entities import ErrorKind, NetworkStatus
from linkwatch.domain.exceptions import LinkwatchDomainError
from linkwatch.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    Converts domain errors and unexpected exceptions into LinkwatchCliError,
    showing tracebacks in verbose mode. LinkwatchCliError exceptions are
    re-raised to use their built-in formatting.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (LinkwatchCliError, click.exceptions.Exit, click.Abort):
                raise
            except LinkwatchDomainError as e:
                raise LinkwatchCliError(e.message, hint=e.hint) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise LinkwatchCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _load_config(ctx: click.Context) -> LinkwatchConfig:
    """Load merged global/local configuration for the current invocation."""
    from linkwatch.adapters.factory import ConfigFactory

    return ConfigFactory().create_config_provider().load(ctx.obj.get("config_dir"))


def _configure_logging(ctx: click.Context, config: LinkwatchConfig) -> None:
    """Set up root logging from CLI flags and the [logging] config section."""
    if ctx.obj.get("verbose") or config.logging.debug_logs:
        level = logging.DEBUG
    elif ctx.obj.get("quiet"):
        level = logging.ERROR
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])
    logging.getLogger("linkwatch").setLevel(level)


def _create_manager(config: LinkwatchConfig) -> NetworkManager:
    from linkwatch.adapters.factory import ManagerFactory

    return ManagerFactory(config).create_network_manager()


def _format_status(status: NetworkStatus) -> str:
    labels = {
        NetworkStatus.ONLINE: click.style("online", fg="green"),
        NetworkStatus.OFFLINE_PENDING: click.style("offline (sync pending)", fg="yellow"),
        NetworkStatus.OFFLINE_NO_DATA: click.style("offline", fg="red"),
    }
    return labels[status]


def _echo_events(manager: NetworkManager) -> None:
    """Subscribe listeners that print every notification."""
    manager.subscribe(
        EventKind.CONNECTIVITY_CHANGED,
        lambda is_online: click.echo(
            f"Connectivity changed: {'online' if is_online else 'offline'}"
        ),
    )
    manager.subscribe(
        EventKind.STATUS_CHANGED,
        lambda status: click.echo(f"Status: {_format_status(status)}"),
    )
    manager.subscribe(EventKind.CONNECTION_LOST, lambda: click.echo("✗ Connection lost"))
    manager.subscribe(
        EventKind.CONNECTION_RESTORED, lambda: click.echo("✓ Connection restored")
    )
    manager.subscribe(EventKind.RETRY_READY, lambda: click.echo("↻ Sync retry ready"))


@click.group()
@click.version_option(version=__version__, prog_name="linkwatch")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing a local config.toml.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_dir: Path | None) -> None:
    """linkwatch - Adaptive connectivity monitoring with sync retry.

    Probes network reachability on an adaptive schedule and tells you when
    a failed sync is ready to be retried.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_dir"] = config_dir


@cli.command()
@click.pass_context
@handle_cli_errors("status")
def status(ctx: click.Context) -> None:
    """Probe reachability once and show the network status."""
    config = _load_config(ctx)
    _configure_logging(ctx, config)

    manager = _create_manager(config)
    manager.check_now()

    if manager.is_online():
        click.echo("✓ Online")
    else:
        click.echo("✗ Offline")
    click.echo(f"  Status: {_format_status(manager.get_network_status())}")


@cli.command()
@click.option(
    "--tick",
    "tick_seconds",
    type=click.FloatRange(min=0, min_open=True),
    default=1.0,
    show_default=True,
    help="Seconds between evaluation passes.",
)
@click.option(
    "--duration",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Stop after this many seconds (default: run until Ctrl-C).",
)
@click.pass_context
@handle_cli_errors("watch")
def watch(ctx: click.Context, tick_seconds: float, duration: float | None) -> None:
    """Monitor connectivity continuously, printing every change."""
    from linkwatch.adapters.factory import ManagerFactory

    config = _load_config(ctx)
    _configure_logging(ctx, config)

    factory = ManagerFactory(config)
    manager = factory.create_network_manager()
    _echo_events(manager)

    ticker = factory.create_ticker(tick_seconds)
    if not ctx.obj.get("quiet"):
        click.echo("Watching connectivity (Ctrl-C to stop)...")

    manager.start()
    ticker.start(manager.tick)
    try:
        ticker.wait(duration)
    except KeyboardInterrupt:
        click.echo("\nStopping...")
    finally:
        ticker.stop(timeout=tick_seconds + config.probe.timeout)
        manager.close()

    if ticker.error is not None:
        raise LinkwatchCliError(
            f"Monitoring stopped after an error: {ticker.error}",
            hint="Run with --verbose for more details",
        )


@cli.command()
@click.argument("response_code", type=int)
@click.option(
    "--error-kind",
    "-e",
    type=click.Choice([kind.value for kind in ErrorKind]),
    default=ErrorKind.NONE.value,
    show_default=True,
    help="Kind of error reported by the request layer.",
)
def classify(response_code: int, error_kind: str) -> None:
    """Tell whether a failed request with RESPONSE_CODE should be retried."""
    if classify_retryable(response_code, error_kind):
        click.echo("retryable")
    else:
        click.echo("not retryable")


# Configuration management commands
@cli.group()
def config() -> None:
    """Manage linkwatch configuration files.

    linkwatch uses a two-tier configuration system:
    - Local: <config-dir>/config.toml (set with --config-dir)
    - Global: ~/.config/linkwatch/config.toml (user defaults)

    Local settings override global settings. Missing values use built-in defaults.
    """
    pass


@config.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Show config locations and the effective configuration."""
    import tomli_w

    from linkwatch.shared.config_io import config_to_data, get_global_config_path

    global_path = get_global_config_path()
    click.echo(f"Global config: {global_path}")
    click.echo(f"  Status: {'exists' if global_path.exists() else 'not created'}")

    config_dir = ctx.obj.get("config_dir")
    if config_dir is not None:
        local_path = config_dir / "config.toml"
        click.echo(f"Local config:  {local_path}")
        click.echo(f"  Status: {'exists' if local_path.exists() else 'not created'}")

    click.echo("\nEffective configuration:")
    click.echo(tomli_w.dumps(config_to_data(_load_config(ctx))))


@config.command(name="init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing config file.")
@click.option(
    "--global", "-g", "use_global", is_flag=True, help="Write the global config file."
)
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, force: bool, use_global: bool) -> None:
    """Create a config.toml with documented defaults."""
    from linkwatch.shared.config_io import create_default_config_file, get_global_config_path

    config_dir = ctx.obj.get("config_dir")
    if use_global or config_dir is None:
        path = get_global_config_path()
    else:
        path = config_dir / "config.toml"

    if path.exists() and not force:
        raise LinkwatchCliError(
            f"Config file already exists: {path}",
            hint="Use --force to overwrite it",
        )

    create_default_config_file(path)
    click.echo(f"✓ Created {path}")


# Offline backup commands
@cli.group()
def backup() -> None:
    """Back up and restore offline data.

    Backups are only written while offline and are only restored for the
    owner that saved them.
    """
    pass


def _parse_items(items: tuple[str, ...]) -> dict[str, int]:
    data: dict[str, int] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise LinkwatchCliError(
                f"Invalid item: {item!r}",
                hint="Use KEY=VALUE with an integer VALUE, e.g. coins=42",
            )
        try:
            data[key] = int(value)
        except ValueError as e:
            raise LinkwatchCliError(
                f"Invalid value for {key!r}: {value!r}",
                hint="Values must be integers",
            ) from e
    return data


@backup.command(name="save")
@click.argument("owner")
@click.argument("items", nargs=-1, required=True)
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Backup store file (default: ~/.linkwatch/backup.json).",
)
@click.pass_context
@handle_cli_errors("backup save")
def backup_save(ctx: click.Context, owner: str, items: tuple[str, ...], path: Path | None) -> None:
    """Save KEY=VALUE items for OWNER while offline."""
    from linkwatch.adapters.factory import ManagerFactory
    from linkwatch.core.backup.backup_service import DEFAULT_BACKUP_KEY, DEFAULT_OWNER_KEY

    data = _parse_items(items)
    config = _load_config(ctx)
    _configure_logging(ctx, config)

    factory = ManagerFactory(config)
    manager = factory.create_network_manager()
    manager.check_now()
    service = factory.create_backup_service(manager, path)

    if service.save_backup(data, DEFAULT_BACKUP_KEY, DEFAULT_OWNER_KEY, owner):
        click.echo(f"✓ Backed up {len(data)} items")
    elif manager.is_online():
        click.echo("Online - nothing to back up")
    else:
        raise LinkwatchCliError("Backup failed", hint="Run with --verbose for more details")


@backup.command(name="restore")
@click.argument("owner")
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Backup store file (default: ~/.linkwatch/backup.json).",
)
@click.pass_context
@handle_cli_errors("backup restore")
def backup_restore(ctx: click.Context, owner: str, path: Path | None) -> None:
    """Restore the backup saved for OWNER."""
    from linkwatch.adapters.factory import ManagerFactory
    from linkwatch.core.backup.backup_service import DEFAULT_BACKUP_KEY, DEFAULT_OWNER_KEY

    config = _load_config(ctx)
    _configure_logging(ctx, config)

    factory = ManagerFactory(config)
    manager = factory.create_network_manager()
    service = factory.create_backup_service(manager, path)

    restored = service.restore_backup(DEFAULT_BACKUP_KEY, DEFAULT_OWNER_KEY, owner)
    if restored is None:
        click.echo("No backup available")
        return

    for key, value in sorted(restored.items()):
        click.echo(f"{key}={value}")


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
