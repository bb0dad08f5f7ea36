"""SecurityTester CLI - drive a ZAP daemon from the command line."""

import json
import signal
from contextlib import contextmanager
from typing import Optional

import typer
from rich.console import Console

from securitytester.config import (
    find_project_dir,
    get_project_env_path,
    get_zap_settings,
    is_verbose,
    load_project_config,
)
from securitytester.modules.zap import (
    ConfigurationError,
    SetupFailure,
    ZapApiError,
    ZapClient,
    ZapScanner,
    alert_to_dict,
    parse_port,
    print_alerts_table,
)
from securitytester.utils.log_setup import setup_logging

app = typer.Typer(
    name="securitytester",
    help="Run OWASP ZAP spider and active scans through the ZAP API",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

EXIT_SETUP_ERROR = 1
EXIT_SCAN_ERROR = 2


@app.command()
def version() -> None:
    """Show the installed SecurityTester version."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        current_version = pkg_version("securitytester")
    except PackageNotFoundError:
        current_version = "0.0.0+unknown"

    console.print(f"SecurityTester {current_version}")


def _build_scanner(
    host: Optional[str],
    port: Optional[str],
    spider: Optional[bool],
) -> ZapScanner:
    settings = get_zap_settings()
    try:
        return ZapScanner(
            settings.api_key,
            host or settings.host,
            port or settings.port,
            settings.with_spider if spider is None else spider,
        )
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        raise typer.Exit(EXIT_SETUP_ERROR)
    except SetupFailure as exc:
        console.print(f"[red]Could not set up ZAP: {exc}[/red]")
        raise typer.Exit(EXIT_SETUP_ERROR)


def _build_client(host: Optional[str], port: Optional[str]) -> ZapClient:
    """Connect to ZAP without touching its current session."""
    settings = get_zap_settings()
    try:
        port_number = parse_port(port or settings.port)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {exc}[/red]")
        raise typer.Exit(EXIT_SETUP_ERROR)
    return ZapClient(settings.api_key, host or settings.host, port_number)


@contextmanager
def _cancel_on_interrupt(scanner: ZapScanner):
    """Turn Ctrl+C into a cancelled wait instead of a traceback."""

    def _handler(signum, frame):
        console.print("[yellow]Interrupted, abandoning the wait for ZAP...[/yellow]")
        scanner.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


@app.command()
def scan(
    url: str = typer.Argument(..., help="Base URL to scan, e.g. http://localhost:3000"),
    policy: Optional[str] = typer.Option(None, "--policy", "-p", help="ZAP scan policy name"),
    in_scope_only: bool = typer.Option(
        True, "--in-scope-only/--all-urls", help="Restrict the active scan to the context"
    ),
    spider: Optional[bool] = typer.Option(
        None, "--spider/--no-spider", help="Crawl before scanning (default from config)"
    ),
    passive: Optional[bool] = typer.Option(
        None, "--passive/--no-passive", help="Enable or disable passive scanning first"
    ),
    host: Optional[str] = typer.Option(None, "--host", help="ZAP host (overrides config)"),
    port: Optional[str] = typer.Option(None, "--port", help="ZAP port (overrides config)"),
    as_json: bool = typer.Option(False, "--json", help="Print alerts as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose scan output"),
):
    """Spider and actively scan a URL, then print the alerts ZAP reported."""
    notes = err_console if as_json else console
    if "://" not in url:
        url = f"http://{url}"
        notes.print(f"[dim]No scheme provided. Using {url}[/dim]")

    setup_logging(verbose or is_verbose())
    scan_policy = policy or get_zap_settings().scan_policy

    scanner = _build_scanner(host, port, spider)
    with scanner, _cancel_on_interrupt(scanner):
        if passive is True:
            scanner.enable_passive_scan()
        elif passive is False:
            scanner.disable_passive_scan()
        # complete_scan resets last_error
        passive_error = scanner.last_error
        try:
            alerts = scanner.complete_scan(url, in_scope_only, scan_policy)
        except SetupFailure as exc:
            console.print(f"[red]Could not scope the scan: {exc}[/red]")
            raise typer.Exit(EXIT_SETUP_ERROR)

    if as_json:
        typer.echo(json.dumps([alert_to_dict(alert) for alert in alerts], indent=2))
    else:
        print_alerts_table(alerts, console=console)

    error = scanner.last_error or passive_error
    if error is not None:
        notes.print(f"[red]Scan did not complete cleanly: {error}[/red]")
        raise typer.Exit(EXIT_SCAN_ERROR)


@app.command()
def passive(
    action: str = typer.Argument(..., help="Action: enable or disable"),
    host: Optional[str] = typer.Option(None, "--host", help="ZAP host (overrides config)"),
    port: Optional[str] = typer.Option(None, "--port", help="ZAP port (overrides config)"),
):
    """Switch ZAP passive scanning on or off."""
    if action not in {"enable", "disable"}:
        console.print(f"[red]Unknown action: {action}. Use 'enable' or 'disable'.[/red]")
        raise typer.Exit(EXIT_SETUP_ERROR)

    setup_logging(is_verbose())
    with _build_client(host, port) as client:
        try:
            if action == "enable":
                client.set_passive_enabled(True)
                client.enable_all_passive_scanners()
            else:
                client.disable_all_passive_scanners()
        except ZapApiError as exc:
            console.print(f"[red]Passive scan {action} failed: {exc}[/red]")
            raise typer.Exit(EXIT_SCAN_ERROR)
    console.print(f"[green]Passive scanning {action}d[/green]")


@app.command()
def config():
    """Show the resolved ZAP connection settings."""
    settings = get_zap_settings()
    project_dir = find_project_dir()
    if project_dir and load_project_config(project_dir):
        console.print(f"[bold]Project configuration:[/bold] {get_project_env_path(project_dir)}")

    key = settings.api_key or ""
    masked = key[:4] + "..." + key[-4:] if len(key) > 12 else ("***" if key else "(none)")
    console.print(f"  API key: {masked}")
    console.print(f"  Host:    {settings.host}")
    console.print(f"  Port:    {settings.port}")
    console.print(f"  Spider:  {'on' if settings.with_spider else 'off'}")
    console.print(f"  Policy:  {settings.scan_policy or '(ZAP default)'}")


def main():
    """Entry point for the CLI."""
    app()
