"""
Main CLI application for Ethereum Wallet Overview.
"""

from .utils import format_amount, shorten_address
from .models import WalletReport, WalletOverview, TokenMovement
from typing import Optional, List, Dict, Any
from datetime import datetime
from dataclasses import asdict
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.panel import Panel
from web3 import Web3

from .config import Config
from .exceptions import WalletTrackerError
from .tracker import WalletTracker

# Logging setup
import logging
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="wallet-tracker",
    help="Explore an Ethereum wallet's balance, token holdings and token movements."
)

console = Console()


def load_config() -> Config:
    """Load application configuration."""
    try:
        config = Config.from_env()
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        console.print(
            "\n[yellow]Please create a .env file with your API key:[/yellow]")
        console.print("ETHERSCAN_API_KEY=your_key_here")
        raise typer.Exit(1)

    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING))
    return config


def fetch_report(tracker: WalletTracker, address: str,
                 show_progress: bool = True) -> WalletReport:
    """Fetch the wallet report behind a spinner."""
    if not show_progress:
        return tracker.get_wallet_report(address)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Loading wallet information...", total=None)
        return tracker.get_wallet_report(address)


def display_error(message: str):
    """Show a failed lookup with a hint to recheck the address."""
    console.print(Panel(
        f"[red]{message}[/red]\n\n"
        "[dim]Please check the wallet address and try again.[/dim]",
        title="[bold red]Error[/bold red]",
        expand=False
    ))


def display_no_data(address: str):
    """Show the empty state for a wallet with no history."""
    console.print(Panel(
        f"Wallet [yellow]{address}[/yellow] appears to have no transaction history.",
        title="No Data Found",
        expand=False
    ))


def format_date(iso_timestamp: Optional[str]) -> str:
    """Render an ISO timestamp for display, or N/A."""
    if not iso_timestamp:
        return "N/A"
    return datetime.fromisoformat(iso_timestamp).strftime("%Y-%m-%d %H:%M:%S UTC")


def display_overview(overview: WalletOverview):
    """Display the overview panel and holdings table."""
    console.print(Panel(
        f"Address: [yellow]{Web3.to_checksum_address(overview.address)}[/yellow]\n"
        f"ETH Balance: [bold blue]{format_amount(overview.eth_balance)} ETH[/bold blue]\n"
        f"Total Transactions: [green]{overview.total_transactions:,}[/green]\n"
        f"First Transaction: {format_date(overview.first_transaction)}\n"
        f"Last Transaction: {format_date(overview.last_transaction)}",
        title="Wallet Overview",
        expand=False
    ))

    if not overview.token_holdings:
        console.print("[yellow]No token holdings found.[/yellow]")
        return

    table = Table(title="\nToken Holdings")
    table.add_column("Token", style="magenta")
    table.add_column("Symbol", style="green", no_wrap=True)
    table.add_column("Contract", style="yellow", no_wrap=True)
    table.add_column("Balance", style="white", justify="right")

    for holding in overview.token_holdings:
        table.add_row(
            holding.name,
            holding.symbol,
            shorten_address(holding.contract_address),
            format_amount(holding.balance)
        )

    console.print(table)


def display_movements(movements: List[TokenMovement]):
    """Display per-token movements with their destination addresses."""
    if not movements:
        return

    console.print("\n[bold]Token Movements[/bold]")
    for movement in movements:
        lines = [
            f"Total Sent: [red]{format_amount(movement.total_sent)}[/red]",
            f"Total Received: [green]{format_amount(movement.total_received)}[/green]",
            f"Unique Destinations: {len(movement.unique_destinations)}",
            f"Unique Sources: {len(movement.unique_sources)}",
        ]

        if movement.unique_destinations:
            lines.append("\nDestinations:")
            lines.extend(f"  {dest}" for dest in movement.unique_destinations)

        console.print(Panel(
            "\n".join(lines),
            title=f"[bold blue]{movement.token_name}[/bold blue]",
            expand=False
        ))


def display_report(report: WalletReport):
    """Display a report, or the no-data panel if the wallet is unused."""
    if not report.has_activity:
        display_no_data(report.overview.address)
        return

    display_overview(report.overview)
    display_movements(report.token_movements)


def report_to_dict(report: WalletReport) -> Dict[str, Any]:
    """Convert a report to plain dicts and lists for JSON."""
    data = asdict(report)
    data['has_activity'] = report.has_activity
    return data


def export_to_json(report: WalletReport, filepath: Optional[str] = None) -> str:
    """Serialize the report to JSON, writing it to filepath if given."""
    payload = json.dumps(report_to_dict(report), indent=2, default=str)

    if filepath:
        with open(filepath, 'w') as jsonfile:
            jsonfile.write(payload)

    return payload


@app.command()
def show(
    address: str = typer.Argument(...,
                                  help="Ethereum wallet address (0x followed by 40 hex digits)"),
    output_format: str = typer.Option(
        "table", "--format", "-f", help="Output format: table, json"),
    output_file: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write JSON output to this file"),
):
    """Show the overview, holdings and token movements of a wallet."""

    if output_format not in ("table", "json"):
        console.print(
            f"[yellow]Unsupported output format: {output_format}[/yellow]")
        raise typer.Exit(2)

    config = load_config()
    tracker = WalletTracker(config)

    try:
        report = fetch_report(
            tracker, address,
            show_progress=not (output_format == "json" and not output_file))
    except WalletTrackerError as e:
        logger.error(f"Wallet lookup failed for {address}: {e}")
        display_error(str(e))
        raise typer.Exit(1)

    if output_format == "json":
        payload = export_to_json(report, output_file)
        if output_file:
            console.print(f"[green]Results exported to {output_file}[/green]")
        else:
            typer.echo(payload)
        return

    display_report(report)

    if output_file:
        export_to_json(report, output_file)
        console.print(f"[green]Results exported to {output_file}[/green]")


@app.command()
def setup():
    """Setup the application by creating a .env file template."""
    env_content = """# Ethereum Wallet Overview Configuration

# Required: Etherscan API Key (get from https://etherscan.io/apis)
ETHERSCAN_API_KEY=your_etherscan_api_key_here

# Optional settings
# ETHERSCAN_BASE_URL=https://api.etherscan.io/v2/api
REQUEST_TIMEOUT=30
# Group tokens by display name or by contract address
TOKEN_KEY=name
LOG_LEVEL=WARNING
"""

    env_path = Path(".env")
    if env_path.exists():
        console.print("[yellow].env file already exists![/yellow]")
        if not typer.confirm("Overwrite existing .env file?"):
            return

    with open(env_path, 'w') as f:
        f.write(env_content)

    console.print(f"[green]Created .env file at {env_path.absolute()}[/green]")
    console.print(
        "\n[yellow]Please edit the .env file and add your API key:[/yellow]")
    console.print("1. Get an Etherscan API key from https://etherscan.io/apis")
    console.print(
        "2. Replace 'your_etherscan_api_key_here' with your real key")
    console.print("3. Run: wallet-tracker show <wallet_address>")


if __name__ == "__main__":
    app()
