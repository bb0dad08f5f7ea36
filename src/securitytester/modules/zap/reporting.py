"""Alert output helpers."""

from dataclasses import asdict
from typing import Any

from rich.console import Console
from rich.table import Table

from .models import Alert, Risk

RISK_STYLES = {
    Risk.HIGH: "bold red",
    Risk.MEDIUM: "yellow",
    Risk.LOW: "cyan",
    Risk.INFORMATIONAL: "dim",
}


def format_alert_line(alert: Alert) -> str:
    """One-line summary used when logging retrieved alerts."""
    return (
        f"Risk {alert.risk.label}: {alert.name}, confidence={alert.confidence.label}, "
        f"{alert.description}, details: {alert.details}"
    )


def alert_to_dict(alert: Alert) -> dict[str, Any]:
    """JSON-ready representation with enum values rendered as labels."""
    data = asdict(alert)
    data["risk"] = alert.risk.label
    data["confidence"] = alert.confidence.label
    return data


def count_by_risk(alerts: list[Alert]) -> dict[str, int]:
    counts = {risk.label: 0 for risk in sorted(Risk, reverse=True)}
    for alert in alerts:
        counts[alert.risk.label] += 1
    return counts


def print_alerts_table(alerts: list[Alert], console: Console | None = None) -> None:
    """Render alerts, most severe first, as a rich table."""
    console = console or Console()
    if not alerts:
        console.print("[green]No alerts reported.[/green]")
        return

    table = Table(title=f"ZAP alerts ({len(alerts)})")
    table.add_column("Risk")
    table.add_column("Alert")
    table.add_column("Confidence")
    table.add_column("URL", overflow="fold")
    table.add_column("Details", overflow="fold")
    for alert in sorted(alerts, key=lambda item: item.risk, reverse=True):
        table.add_row(
            f"[{RISK_STYLES[alert.risk]}]{alert.risk.label}[/]",
            alert.name,
            alert.confidence.label,
            alert.url,
            alert.details[:120],
        )
    console.print(table)

    summary = " | ".join(f"{label}: {count}" for label, count in count_by_risk(alerts).items())
    console.print(f"Total: {len(alerts)} | {summary}")
