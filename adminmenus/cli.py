"""CLI commands for adminmenus."""

import logging
import sys

import click

from adminmenus import config as config_mod
from adminmenus.host import InMemoryMenuHost
from adminmenus.lib import observability
from adminmenus.registration import register_admin_pages


def _prepare(log_level: str | None = None):
    """Load settings, configure logging and register pages into a fresh host."""
    settings = config_mod.get_settings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    observability.configure(settings)

    host = InMemoryMenuHost(settings.capabilities)
    results = register_admin_pages(settings, host)
    return settings, host, results


@click.group()
@click.version_option(package_name="adminmenus")
@click.option(
    "-f",
    "--config-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to the YAML config file (default: app.yaml)",
)
def cli(config_file):
    """adminmenus - register admin pages into a CMS admin menu."""
    if config_file:
        config_mod.set_config_path(config_file)
        config_mod.clear_settings_cache()


def _echo_entries(entries) -> None:
    if not entries:
        click.echo("  (no pages)")
    for entry in entries:
        click.echo(f"  {entry.menu_title} -> {entry.hook_suffix}")


@cli.command()
def show():
    """Print the admin menu tree built from the config file."""
    _, host, results = _prepare()

    submenu = host.submenu

    # Menus created by this run come first, even when none of their pages made it.
    for menu in host.menu:
        click.echo(f"{menu.menu_title or menu.menu_slug} [{menu.menu_slug}]")
        _echo_entries(submenu.get(menu.menu_slug, ()))

    created = {menu.menu_slug for menu in host.menu}
    for parent_slug, entries in submenu.items():
        if parent_slug in created:
            continue
        if parent_slug:
            heading = f"[{parent_slug}]"
        else:
            heading = "(unlisted)"
        click.echo(heading)
        _echo_entries(entries)

    failed = [slug for slug, hook_suffix in results.items() if not hook_suffix]
    for slug in failed:
        click.echo(f"{slug} (not registered)", err=True)
    if failed:
        sys.exit(1)


@cli.command()
@click.option("--host", "bind_host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8080, type=int, help="Port to bind to")
@click.option("--path", default="/admin", help="URL prefix for admin pages")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level",
)
def serve(bind_host, port, path, log_level):
    """Serve the configured admin pages."""
    import asyncio
    import signal

    from hypercorn.asyncio import serve as hypercorn_serve
    from hypercorn.config import Config

    from adminmenus.routing import create_app

    settings, host, _ = _prepare(log_level)
    app = create_app(host, path=path, debug=settings.debug)

    config = Config()
    config.bind = [f"{bind_host}:{port}"]
    config.loglevel = log_level.upper()
    config.include_server_header = False

    shutdown_event = asyncio.Event()

    loop = asyncio.new_event_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_event.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_event.set)
    try:
        loop.run_until_complete(
            hypercorn_serve(app, config, shutdown_trigger=shutdown_event.wait)
        )
    finally:
        loop.close()


if __name__ == "__main__":
    cli()
