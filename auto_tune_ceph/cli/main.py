"""Command-line interface for auto-tune-ceph."""

import json
import shutil
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..core.config import TunerConfig
from ..core.errors import AutoTuneCephError, SearchAbortedError
from ..core.results import SearchResult
from ..core.search import SearchController
from ..execution.backends import CephControlSurface
from ..logging.manager import SessionLogger

# Setup rich console and app
console = Console()
app = typer.Typer(
    name="auto-tune-ceph",
    help="Hill-climbing optimization of Ceph OSD options",
    add_completion=False,
)


@app.command("optimize")
def optimize_command(
    config: str = typer.Option("test.yaml", "--conf", "--config", "-c", help="Config file listing ceph config options to try out"),
    timeout: Optional[int] = typer.Option(None, "--timeout", help="Number of unsuccessful optimization attempts until stopping"),
    conf_sleep: Optional[float] = typer.Option(None, "--conf-sleep", help="Seconds to wait after applying a new config option"),
    bench_time: Optional[int] = typer.Option(None, "--bench-time", help="Benchmark length in seconds"),
    pool_pgs: Optional[int] = typer.Option(None, "--pool-pgs", help="pg_num and pgp_num of the benchmark pool"),
    bench_type: Optional[str] = typer.Option(None, "--bench-type", help="Benchmark type - one of write, seq, rand"),
    bench_scale: Optional[int] = typer.Option(None, "--bench-scale", help="Number of concurrent IOs in benchmark"),
    bench_block_size: Optional[int] = typer.Option(None, "--bench-block-size", help="Benchmark block IO size in KB"),
    bench_object_size: Optional[int] = typer.Option(None, "--bench-object-size", help="Benchmark object IO size in KB"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducible searches"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the best config as JSON to this file"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Debug log file (default: debug.log)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Search for the best performing Ceph configuration."""
    try:
        tuner_config = TunerConfig.from_file(config).with_overrides(
            search={"timeout": timeout, "settle_seconds": conf_sleep, "seed": seed},
            benchmark={
                "seconds": bench_time,
                "pool_pgs": pool_pgs,
                "bench_type": bench_type,
                "concurrency": bench_scale,
                "block_size_kb": bench_block_size,
                "object_size_kb": bench_object_size,
            },
        )
    except (AutoTuneCephError, ValueError) as e:
        console.print(f"[bold red]Configuration error: {e}[/bold red]")
        raise typer.Exit(1)

    session_logger = SessionLogger.from_config(
        tuner_config.logging_config, console=console, file_path=log_file, verbose=verbose
    )
    with session_logger:
        console.print("[bold green]Starting auto-tune-ceph optimization[/bold green]")
        console.print(f"Configuration: {config}")
        console.print(
            f"Options: {len(tuner_config.options)}, "
            f"stall budget: {tuner_config.search.timeout}, "
            f"benchmark: {tuner_config.benchmark.bench_type} "
            f"for {tuner_config.benchmark.seconds}s"
        )

        try:
            control = CephControlSurface(tuner_config.cluster, tuner_config.benchmark)
            controller = SearchController.create_from_config(control, tuner_config)
            result = controller.run()
        except SearchAbortedError as e:
            console.print(f"[bold red]Optimization aborted: {e.reason}[/bold red]")
            display_results(e.result)
            raise typer.Exit(1)
        except (AutoTuneCephError, ValueError) as e:
            console.print(f"[bold red]Optimization failed: {e}[/bold red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

        display_results(result)
        if output:
            write_results(result, output)


def display_results(result: SearchResult):
    """Display the best configuration, even when it is empty."""
    console.print("\n[bold green]Optimization Results[/bold green]")

    table = Table(title="Search Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Trials", str(result.trials))
    table.add_row("Improvements", str(sum(1 for r in result.history if r.improved)))
    table.add_row("Best Score", f"{result.highest_score:.2f}")
    console.print(table)

    config_table = Table(title="Best Config")
    config_table.add_column("Option", style="cyan")
    config_table.add_column("Value", style="yellow")
    config_table.add_column("Source", style="dim")
    for entry in result.best_config:
        config_table.add_row(entry.name, entry.value, entry.source)
    console.print(config_table)

    if not result.attempted:
        console.print("[yellow]No trial was run[/yellow]")
    elif not result.best_config:
        console.print("[yellow]No improving configuration was found[/yellow]")


def write_results(result: SearchResult, output: str):
    """Write the result as JSON."""
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(result.to_dict(), f, indent=2)
    console.print(f"[blue]Best config written to {output_path}[/blue]")


@app.command("validate")
def validate_command(
    config: str = typer.Option("test.yaml", "--conf", "--config", "-c", help="Configuration file to validate"),
):
    """Validate an option catalog."""
    console.print(f"[blue]Validating configuration: {config}[/blue]")

    try:
        tuner_config = TunerConfig.from_file(config)
    except (AutoTuneCephError, ValueError) as e:
        console.print(f"[bold red]Validation failed: {e}[/bold red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ Configuration is valid[/bold green]")

    table = Table(title="Config Options")
    table.add_column("Option", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Domain", style="yellow")
    table.add_column("Start Value")
    for option in tuner_config.options:
        table.add_row(
            option.name,
            option.type.value,
            option.describe_domain(),
            option.start_value or "-",
        )
    console.print(table)

    summary = Table(title="Configuration Summary")
    summary.add_column("Setting", style="cyan")
    summary.add_column("Value", style="green")
    summary.add_row("Stall budget", str(tuner_config.search.timeout))
    summary.add_row("Settle delay", f"{tuner_config.search.settle_seconds}s")
    summary.add_row("Benchmark", f"{tuner_config.benchmark.bench_type} for {tuner_config.benchmark.seconds}s")
    summary.add_row("Pool", f"{tuner_config.benchmark.pool} ({tuner_config.benchmark.pool_pgs} PGs)")
    console.print(summary)


@app.command("check-env")
def check_environment_command(
    config: Optional[str] = typer.Option(None, "--conf", "--config", "-c", help="Read binary paths from this configuration file"),
):
    """Check that the ceph and rados command line tools are available."""
    console.print("[blue]Checking environment[/blue]")

    try:
        tuner_config = TunerConfig.from_file(config) if config else None
    except (AutoTuneCephError, ValueError) as e:
        console.print(f"[bold red]Configuration error: {e}[/bold red]")
        raise typer.Exit(1)

    cluster = tuner_config.cluster if tuner_config else None
    binaries = {
        "ceph": cluster.ceph_binary if cluster else "/usr/bin/ceph",
        "rados": cluster.rados_binary if cluster else "/usr/bin/rados",
    }

    missing = []
    for name, binary in binaries.items():
        if shutil.which(binary) is None:
            missing.append(f"{name} ({binary})")
        else:
            console.print(f"✓ {name}: {binary}")

    if missing:
        console.print(f"[bold red]Missing commands: {', '.join(missing)}[/bold red]")
        raise typer.Exit(1)
    console.print("[bold green]✓ Environment check passed[/bold green]")


def main():
    """Main CLI entry point."""
    # Handle no arguments case
    if len(sys.argv) == 1:
        console.print("[bold]auto-tune-ceph[/bold] - Ceph configuration hill climbing")
        console.print("\nUse --help for available commands")
        console.print("\nQuick start:")
        console.print("  auto-tune-ceph validate --conf options.yaml")
        console.print("  auto-tune-ceph optimize --conf options.yaml --timeout 30")
        sys.exit(0)

    app()


if __name__ == "__main__":
    main()
