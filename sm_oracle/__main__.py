from __future__ import annotations

import importlib
import logging
from typing import Callable, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import OracleConfig
from .errors import OracleViolation
from .generator import generate_input, make_rng
from .oracles import TrialResult, run_stability_oracle, run_trace_oracle

app = typer.Typer(add_completion=False)
console = Console()

'''
Use below to run

python -m sm_oracle stability my_package.matching:stable_matcher \
    --num-tests 50 \
    --n 8 \
    --seed 42

python -m sm_oracle trace my_package.matching:stable_matcher_with_trace --seed 42
'''


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_matcher(path: str) -> Callable:
    """Import a matcher given as 'package.module:function'."""
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        console.print(f"[red]Error: matcher must look like 'package.module:function', got '{path}'[/red]")
        raise typer.Exit(2)
    try:
        module = importlib.import_module(module_name)
        matcher = getattr(module, attr)
    except (ImportError, AttributeError) as exc:
        console.print(f"[red]Error: cannot load matcher '{path}': {exc}[/red]")
        raise typer.Exit(2)
    if not callable(matcher):
        console.print(f"[red]Error: '{path}' is not callable[/red]")
        raise typer.Exit(2)
    return matcher


def _build_config(num_tests: Optional[int], n: Optional[int], seed: Optional[int]) -> OracleConfig:
    try:
        return OracleConfig.from_env(num_tests=num_tests, n=n, seed=seed)
    except ValueError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(2)


def _print_trials(title: str, trials: List[TrialResult], with_offers: bool) -> None:
    table = Table(title=title)
    table.add_column("Trial", justify="right")
    table.add_column("N", justify="right")
    table.add_column("Hires", justify="right", style="cyan")
    if with_offers:
        table.add_column("Offers", justify="right", style="magenta")
    table.add_column("Result", style="green")

    for trial in trials:
        row = [str(trial.trial), str(trial.n), str(trial.num_hires)]
        if with_offers:
            row.append(str(trial.num_offers))
        row.append("pass")
        table.add_row(*row)

    console.print(table)


def _report_violation(violation: OracleViolation) -> None:
    console.print(f"\n[bold red]Rejected ({violation.kind})[/bold red]")
    if violation.trial is not None:
        console.print(f"Trial: {violation.trial}")
    console.print(f"Cause: {violation.message}")
    for key, value in violation.indices.items():
        console.print(f"  {key}: {value}")


@app.command()
def stability(
    matcher: str = typer.Argument(..., help="Matcher to test, as 'package.module:function'"),
    num_tests: Optional[int] = typer.Option(None, help="Number of randomized trials"),
    n: Optional[int] = typer.Option(None, help="Companies (and candidates) per trial"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    progress: bool = typer.Option(False, help="Show a progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log preferences, hires and traces"),
) -> None:
    """Check that a matcher always returns a valid, stable matching."""
    _configure_logging(verbose)
    config = _build_config(num_tests, n, seed)
    func = load_matcher(matcher)

    console.print("[bold blue]Stable Matching Oracle (Part A)[/bold blue]")
    console.print(f"Matcher: {matcher}")
    console.print(f"Trials: {config.num_tests}, N: {config.n}, Seed: {config.seed}\n")

    try:
        trials = run_stability_oracle(func, config, progress=progress)
    except OracleViolation as violation:
        _report_violation(violation)
        raise typer.Exit(1)

    _print_trials("Stability trials", trials, with_offers=False)
    console.print("\n[green]All trials stable.[/green]")


@app.command()
def trace(
    matcher: str = typer.Argument(..., help="Traced matcher to test, as 'package.module:function'"),
    num_tests: Optional[int] = typer.Option(None, help="Number of randomized trials"),
    n: Optional[int] = typer.Option(None, help="Companies (and candidates) per trial"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
    progress: bool = typer.Option(False, help="Show a progress bar"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log preferences, traces and replay steps"),
) -> None:
    """Check that a matcher's trace follows deferred acceptance and yields its output."""
    _configure_logging(verbose)
    config = _build_config(num_tests, n, seed)
    func = load_matcher(matcher)

    console.print("[bold blue]Stable Matching Oracle (Part B)[/bold blue]")
    console.print(f"Matcher: {matcher}")
    console.print(f"Trials: {config.num_tests}, N: {config.n}, Seed: {config.seed}\n")

    try:
        trials = run_trace_oracle(func, config, progress=progress)
    except OracleViolation as violation:
        _report_violation(violation)
        raise typer.Exit(1)

    _print_trials("Trace trials", trials, with_offers=True)
    console.print("\n[green]All traces consistent.[/green]")


@app.command()
def generate(
    n: int = typer.Option(4, help="Agents per side"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
) -> None:
    """Print one pair of random preference lists."""
    if n < 1:
        console.print(f"[red]Error: n must be at least 1, got {n}[/red]")
        raise typer.Exit(2)
    rng = make_rng(seed)

    for side in ("Company", "Candidate"):
        table = Table(title=f"{side} preferences")
        table.add_column(side, justify="right")
        for rank in range(n):
            table.add_column(f"#{rank + 1}", justify="right")
        for agent, prefs in enumerate(generate_input(n, rng)):
            table.add_row(str(agent), *(str(other) for other in prefs))
        console.print(table)


if __name__ == "__main__":
    app()
