"""
Click-based CLI for wp-supervisor.

IMPORTANT: This module only ORCHESTRATES. It never decides statuses.
- Loads site profiles and settings
- Opens the Server for a site
- Passes flags
- Formats output
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from wp_supervisor import __version__
from wp_supervisor.actions import REPORTERS, get_reporter
from wp_supervisor.config import LOCAL_PROFILE, ConfigManager, SiteProfile
from wp_supervisor.connector.ssh import SSHConfig
from wp_supervisor.engine.status import SOFTWARE_KEYS, is_known_software
from wp_supervisor.pipeline import build_fetcher, open_server, open_store

console = Console()
err_console = Console(stderr=True)

FORMAT_OPTION = click.option(
    "--format",
    "fmt",
    type=click.Choice(sorted(REPORTERS)),
    default="rich",
    show_default=True,
    help="Output format",
)


@click.group()
@click.version_option(version=__version__, prog_name="wp-supervisor")
@click.option("--config", "-c", type=click.Path(), help="Path to config directory")
@click.option("--verbose", "-v", is_flag=True, help="Log cache and network activity")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """wp-supervisor: server software status for WordPress hosts.

    Reports PHP, database, web server and WordPress versions and how they
    compare to the current minimum and recommended requirements.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    config_mgr = ConfigManager(Path(config) if config else None)
    ctx.obj["config_mgr"] = config_mgr
    ctx.obj["settings"] = config_mgr.load_settings()


def _resolve_profile(ctx: click.Context, server: str) -> SiteProfile:
    """Resolve server string to a SiteProfile (profile name, 'local', or host)."""
    config_mgr: ConfigManager = ctx.obj["config_mgr"]
    profile = config_mgr.get_profile(server)
    if profile:
        return profile

    # Otherwise treat as hostname/IP with default root user
    return SiteProfile(name=server, ssh=SSHConfig(host=server, user="root"))


@main.command()
@click.argument("server", default=LOCAL_PROFILE)
@FORMAT_OPTION
@click.option("--refresh", is_flag=True, help="Ignore cached server data")
@click.pass_context
def report(ctx: click.Context, server: str, fmt: str, refresh: bool) -> None:
    """Show the software a site runs on (cached for a day)."""
    profile = _resolve_profile(ctx, server)
    try:
        with open_server(profile, ctx.obj["settings"]) as srv:
            if refresh:
                srv.environment.flush()
            with console.status("[bold blue]Inspecting server...[/]"):
                data = srv.get_data()
                ip = srv.get_ip()
            get_reporter(fmt, console).report_server(data, ip)
    except ConnectionError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)


@main.command()
@click.argument("server", default=LOCAL_PROFILE)
@click.option("--software", "-s", multiple=True, help="Software key to check (repeatable)")
@FORMAT_OPTION
@click.pass_context
def status(ctx: click.Context, server: str, software: tuple[str, ...], fmt: str) -> None:
    """Classify software as updated, outdated or obsolete.

    Without --software, checks everything the server runs. Exits with code 1
    when anything is obsolete or could not be classified.
    """
    unknown = [s for s in software if not is_known_software(s)]
    if unknown:
        console.print(
            f"[bold red]Error:[/] Unknown software {', '.join(unknown)}. "
            f"Choose from {', '.join(SOFTWARE_KEYS)}."
        )
        sys.exit(2)

    profile = _resolve_profile(ctx, server)
    try:
        with open_server(profile, ctx.obj["settings"]) as srv:
            with console.status("[bold blue]Checking requirements...[/]"):
                if software:
                    statuses = {s: srv.is_updated(s) for s in software}
                else:
                    statuses = srv.statuses()
            exit_code = get_reporter(fmt, console).report_statuses(statuses)
    except ConnectionError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    sys.exit(exit_code)


@main.command()
@click.option("--site", default=LOCAL_PROFILE, help="Profile whose URL goes in the user agent")
@FORMAT_OPTION
@click.option("--refresh", is_flag=True, help="Ignore the cached document")
@click.pass_context
def requirements(ctx: click.Context, site: str, fmt: str, refresh: bool) -> None:
    """Show the minimum and recommended versions (cached for a week)."""
    settings = ctx.obj["settings"]
    fetcher = build_fetcher(_resolve_profile(ctx, site), settings, open_store(settings))
    if refresh:
        fetcher.flush()
    sys.exit(get_reporter(fmt, console).report_requirements(fetcher.get_requirements()))


@main.command()
@click.argument("server", default=LOCAL_PROFILE)
@click.pass_context
def ip(ctx: click.Context, server: str) -> None:
    """Print the server's IP address."""
    profile = _resolve_profile(ctx, server)
    try:
        with open_server(profile, ctx.obj["settings"]) as srv:
            address = srv.get_ip()
    except ConnectionError as e:
        console.print(f"[bold red]Error:[/] {e}")
        sys.exit(1)

    if not address:
        console.print("[bold red]Error:[/] IP address not found.")
        sys.exit(1)
    console.print(address, markup=False, highlight=False)


@main.group()
def cache() -> None:
    """Manage cached server data and requirements."""
    pass


@cache.command("clear")
@click.pass_context
def cache_clear(ctx: click.Context) -> None:
    """Delete every cached entry."""
    removed = open_store(ctx.obj["settings"]).clear()
    console.print(f"[bold green]✓ Cleared {removed} cached entr{'y' if removed == 1 else 'ies'}[/]")


@main.command()
@click.option("--site", default=LOCAL_PROFILE, help="Profile the dashboard reports on")
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8765, help="Port to listen on")
@click.pass_context
def web(ctx: click.Context, site: str, host: str, port: int) -> None:
    """Serve the JSON dashboard API."""
    from wp_supervisor.web.app import run_server

    run_server(_resolve_profile(ctx, site), ctx.obj["settings"], host=host, port=port)


@main.group()
def config() -> None:
    """Manage site profiles."""
    pass


@config.command("add")
@click.argument("name")
@click.option("--host", "-h", help="Server hostname or IP (omit to inspect this machine)")
@click.option("--user", "-u", default="root", help="SSH username")
@click.option("--port", "-p", default=22, help="SSH port")
@click.option("--password", "-pass", help="SSH password")
@click.option("--key", "-k", type=click.Path(), help="Path to SSH private key")
@click.option("--sudo/--no-sudo", default=True, help="Use sudo for commands")
@click.option("--wp-path", default="/var/www/html", show_default=True, help="WordPress install directory")
@click.option("--site-url", default="", help="Public site URL")
@click.option("--server-software", help="Server software string, skips web server detection")
@click.pass_context
def config_add(
    ctx: click.Context,
    name: str,
    host: str | None,
    user: str,
    port: int,
    password: str | None,
    key: str | None,
    sudo: bool,
    wp_path: str,
    site_url: str,
    server_software: str | None,
) -> None:
    """Add a new site profile."""
    config_mgr: ConfigManager = ctx.obj["config_mgr"]
    ssh = None
    if host:
        ssh = SSHConfig(host=host, user=user, port=port, password=password, key_path=key, use_sudo=sudo)
    config_mgr.add_profile(
        SiteProfile(name=name, ssh=ssh, wp_path=wp_path, site_url=site_url, server_software=server_software)
    )
    console.print(f"[bold green]✓ Added site profile:[/] {name}")


@config.command("list")
@click.pass_context
def config_list(ctx: click.Context) -> None:
    """List all site profiles."""
    config_mgr: ConfigManager = ctx.obj["config_mgr"]
    profiles = config_mgr.list_profiles()
    if not profiles:
        console.print("[dim]No profiles configured yet.[/]")
        return

    for name, data in profiles.items():
        ssh = data.get("ssh")
        target = f"{ssh['user']}@{ssh['host']}:{ssh['port']}" if ssh else "local"
        console.print(f"[bold green]{name}[/]: {target} {data.get('wp_path', '')}")


@config.command("remove")
@click.argument("name")
@click.pass_context
def config_remove(ctx: click.Context, name: str) -> None:
    """Remove a site profile."""
    config_mgr: ConfigManager = ctx.obj["config_mgr"]
    if config_mgr.remove_profile(name):
        console.print(f"[bold green]✓ Removed profile:[/] {name}")
    else:
        console.print(f"[bold red]Error:[/] Profile {name} not found.")
        sys.exit(1)


if __name__ == "__main__":
    main()
