"""Typer CLI commands with Rich formatting."""

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..core.config import get_settings
from ..services.committee_service import CommitteeService

app = typer.Typer(
    name="dao-dashboard",
    help="DAO Committee Dashboard - Inspect committee seats, stakes and challenges",
)
console = Console()

NETWORK_OPTION = typer.Option("mainnet", "--network", "-n", help="Network (mainnet, sepolia)")
RPC_OPTION = typer.Option(None, "--rpc", "-r", help="Custom RPC URL")
JSON_OPTION = typer.Option(False, "--json", "-j", help="Output as JSON")
OPERATORS_OPTION = typer.Option(
    False, "--operators", "-o", help="Also resolve operator manager and manager addresses"
)


def run_async(coro):
    """Helper to run async functions from sync CLI."""
    return asyncio.run(coro)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_settings().log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def format_timestamp(ts: int) -> str:
    if not ts:
        return "--"
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


@app.command()
def count(
    network: str = NETWORK_OPTION,
    rpc_url: Optional[str] = RPC_OPTION,
    output_json: bool = JSON_OPTION,
):
    """Show the number of committee seats."""
    service = CommitteeService(network, rpc_url)
    seats = run_async(service.get_member_count())

    if output_json:
        print_json({"network": service.network, "count": seats})
    else:
        console.print(f"DAO committee seats on {service.network}: [bold]{seats}[/bold]")


@app.command()
def members(
    network: str = NETWORK_OPTION,
    rpc_url: Optional[str] = RPC_OPTION,
    operators: bool = OPERATORS_OPTION,
    output_json: bool = JSON_OPTION,
):
    """
    List committee members.

    Examples:
        dao-dashboard members
        dao-dashboard members --network sepolia --operators --json
    """
    service = CommitteeService(network, rpc_url)

    if output_json:
        result = run_async(service.scan_committee(operators))
        print_json([m.model_dump() for m in result])
        return

    with console.status("[bold blue]Scanning committee seats..."):
        result = run_async(service.scan_committee(operators))

    table = Table(title=f"DAO Committee ({service.network})")
    table.add_column("Seat", style="cyan", justify="right")
    table.add_column("Candidate")
    table.add_column("Candidate Contract")
    table.add_column("Joined", style="dim")
    if operators:
        table.add_column("Operator Manager")
        table.add_column("Manager")

    for member in result:
        info = member.candidate_info
        row = [
            str(member.seat_index),
            member.candidate,
            info.candidate_contract if info else "[red]unresolved[/red]",
            format_timestamp(info.member_joined_time) if info else "--",
        ]
        if operators:
            row += [member.operator_manager or "--", member.manager or "--"]
        table.add_row(*row)

    console.print(table)
    console.print(f"[dim]{len(result)} occupied seats[/dim]")


@app.command()
def staking(
    network: str = NETWORK_OPTION,
    rpc_url: Optional[str] = RPC_OPTION,
    operators: bool = OPERATORS_OPTION,
    output_json: bool = JSON_OPTION,
):
    """Show staking and activity reward state for every member."""
    service = CommitteeService(network, rpc_url)

    if output_json:
        result = run_async(service.get_staking_directory(operators))
        print_json([s.model_dump() for s in result])
        return

    with console.status("[bold blue]Fetching staking info..."):
        result = run_async(service.get_staking_directory(operators))

    table = Table(title=f"Committee Staking ({service.network})")
    table.add_column("Candidate")
    table.add_column("Memo", style="cyan")
    table.add_column("Total Staked", style="green", justify="right")
    table.add_column("Claimable Reward", style="green", justify="right")
    table.add_column("Last Seigniorage Update", style="dim")
    if operators:
        table.add_column("Manager")

    for info in result:
        row = [
            info.candidate,
            info.memo or "--",
            info.total_staked,
            info.claimable_activity_reward,
            format_timestamp(info.last_update_seigniorage_time),
        ]
        if operators:
            row.append(info.manager or "--")
        table.add_row(*row)

    console.print(table)


@app.command()
def challenge(
    seat_index: int = typer.Argument(..., help="Committee seat index to challenge"),
    challenger: str = typer.Argument(..., help="Challenger candidate contract address"),
    network: str = NETWORK_OPTION,
    rpc_url: Optional[str] = RPC_OPTION,
    output_json: bool = JSON_OPTION,
):
    """Check whether a candidate contract may challenge a committee seat."""
    service = CommitteeService(network, rpc_url)
    info = run_async(service.evaluate_challenge(seat_index, challenger))

    if output_json:
        print_json(info.model_dump())
    else:
        status = (
            "[bold green]Challenge possible[/bold green]"
            if info.can_challenge
            else f"[bold red]Cannot challenge:[/bold red] {info.challenge_reason}"
        )
        console.print(
            Panel(
                f"Seat: {seat_index}\n"
                f"Member: {info.member_candidate or '--'}\n"
                f"Challenger: {info.challenger_candidate}\n\n"
                f"Member stake: {info.required_stake}\n"
                f"Challenger stake: {info.current_stake}\n\n"
                f"{status}",
                title="Challenge",
            )
        )

    if not info.can_challenge:
        raise typer.Exit(1)


@app.command()
def reward(
    candidate_contract: str = typer.Argument(..., help="Candidate contract address"),
    network: str = NETWORK_OPTION,
    rpc_url: Optional[str] = RPC_OPTION,
    output_json: bool = JSON_OPTION,
):
    """Show the claimable activity reward of a candidate contract."""
    service = CommitteeService(network, rpc_url)
    result = run_async(service.resolve_activity_reward(candidate_contract))

    if output_json:
        print_json(result.model_dump())
    elif result.ok:
        console.print(
            Panel(
                f"Candidate: {result.candidate}\n"
                f"Claim account: {result.beneficiary}\n\n"
                f"Claimable: [bold yellow]{result.formatted_reward}[/bold yellow]",
                title=f"Activity Reward of {candidate_contract}",
            )
        )
    else:
        console.print(f"[red]Failed to get activity reward data for {candidate_contract}[/red]")

    if not result.ok:
        raise typer.Exit(1)


@app.command()
def check(
    address: str = typer.Argument(..., help="Address to check"),
    network: str = NETWORK_OPTION,
    rpc_url: Optional[str] = RPC_OPTION,
    output_json: bool = JSON_OPTION,
):
    """Check whether an address is a committee member (as candidate or manager)."""
    service = CommitteeService(network, rpc_url)
    is_member = run_async(service.check_membership(address))

    if output_json:
        print_json({"address": address, "is_member": is_member})
    else:
        status = "is a DAO member" if is_member else "is not a DAO member"
        console.print(f"Address {address} {status} on {service.network}")
    if not is_member:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
