"""CLI for statscope.

Provides a rich command-line interface using Typer for:
- Serving the JSON API with periodic refresh
- Browsing snapshots
- Inspecting one container's history
- Ranking all containers
- Collecting a snapshot on demand
"""

from __future__ import annotations

from datetime import datetime
from functools import partial
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from statscope.analysis.export import series_to_dataframe, summaries_to_dataframe
from statscope.catalog.loader import load_catalog
from statscope.catalog.store import CatalogStore
from statscope.collection.factory import create_collector
from statscope.core.config import ViewerConfig, load_config
from statscope.core.constants import DISPLAY_TIMESTAMP_FORMAT
from statscope.core.exceptions import CollectionError, StatscopeError
from statscope.core.schemas import ContainerDetails, ContainerSummary, Snapshot, SnapshotInfo
from statscope.core.units import format_percent
from statscope.service import StatsService
from statscope.utils.logging import setup_logging

app = typer.Typer(
    name="statscope",
    help="Browse container resource snapshots",
    add_completion=False,
)

console = Console()

ConfigOption = typer.Option(
    None, "--config", "-c", help="Path to configuration file (YAML/JSON)"
)
StatsDirOption = typer.Option(
    None, "--stats-dir", "-d", help="Snapshot directory (overrides config)"
)
FormatOption = typer.Option("table", "--format", "-f", help="Output format: table, json, csv")


def _load_viewer_config(config: Path | None, stats_dir: Path | None) -> ViewerConfig:
    try:
        viewer_config = load_config(config) if config is not None else ViewerConfig()
    except Exception as e:
        console.print(f"[bold red]Error loading config: {e}[/]")
        raise typer.Exit(1) from e

    if stats_dir is not None:
        viewer_config.stats_dir = stats_dir
    return viewer_config


def _open_store(viewer_config: ViewerConfig) -> CatalogStore:
    store = CatalogStore(
        partial(
            load_catalog,
            viewer_config.stats_dir,
            suffix=viewer_config.file_suffix,
            timestamp_policy=viewer_config.timestamp_policy,
        )
    )
    try:
        store.initialize()
    except StatscopeError as e:
        console.print(f"[bold red]Error loading snapshot files: {e}[/]")
        raise typer.Exit(1) from e
    return store


def _open_service(config: Path | None, stats_dir: Path | None) -> StatsService:
    setup_logging(level="WARNING")
    return StatsService(_open_store(_load_viewer_config(config, stats_dir)))


def _fmt_time(value: datetime | None) -> str:
    return value.strftime(DISPLAY_TIMESTAMP_FORMAT) if value is not None else "N/A"


@app.command()
def serve(
    config: Path | None = ConfigOption,
    stats_dir: Path | None = StatsDirOption,
    host: str | None = typer.Option(None, "--host", help="Bind address (overrides config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (overrides config)"),
    log_level: str = typer.Option("INFO", "--log-level", "-l", help="Logging level"),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file in addition to console"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
) -> None:
    """Serve the JSON API and refresh the catalog periodically."""
    import uvicorn

    from statscope.api.app import create_app
    from statscope.refresh import RefreshWorker

    setup_logging(
        level=log_level, log_file=log_file, json_format=json_logs, rich_console=not json_logs
    )
    viewer_config = _load_viewer_config(config, stats_dir)
    if host is not None:
        viewer_config.host = host
    if port is not None:
        viewer_config.port = port

    store = _open_store(viewer_config)
    console.print(f"[bold green]Loaded {len(store.current)} snapshot files[/]")

    collector = create_collector(viewer_config.collection, viewer_config.stats_dir)
    if collector is not None and not collector.is_available():
        console.print(
            f"[bold yellow]The {collector.name} collector is not available, "
            "refreshes will only reload the directory[/]"
        )
        collector = None

    worker = RefreshWorker(
        store,
        collector,
        interval_seconds=viewer_config.refresh_interval_seconds,
    )
    worker.start()

    console.print(
        f"[bold blue]Starting server on http://{viewer_config.host}:{viewer_config.port}[/]"
    )
    try:
        uvicorn.run(
            create_app(StatsService(store)),
            host=viewer_config.host,
            port=viewer_config.port,
            log_config=None,
        )
    finally:
        worker.stop()


@app.command()
def snapshots(
    config: Path | None = ConfigOption,
    stats_dir: Path | None = StatsDirOption,
) -> None:
    """List loaded snapshots, newest first."""
    service = _open_service(config, stats_dir)
    _show_snapshot_list(service.list_snapshots())


@app.command()
def snapshot(
    ref: str = typer.Argument(
        "0", help="Snapshot index as listed by 'snapshots', or its file name"
    ),
    config: Path | None = ConfigOption,
    stats_dir: Path | None = StatsDirOption,
) -> None:
    """Show every container record of one snapshot."""
    service = _open_service(config, stats_dir)
    selected = service.get_snapshot(int(ref)) if ref.isdecimal() else service.find_snapshot(ref)
    if selected is None:
        console.print(f"[bold red]No snapshot {ref}[/]")
        raise typer.Exit(1)
    _show_snapshot(selected)


@app.command()
def container(
    container_id: str = typer.Argument(..., help="Short container ID"),
    config: Path | None = ConfigOption,
    stats_dir: Path | None = StatsDirOption,
    output_format: str = FormatOption,
) -> None:
    """Show one container's history with summary statistics."""
    service = _open_service(config, stats_dir)
    details = service.container_details(container_id)

    if output_format == "json":
        typer.echo(details.model_dump_json(indent=2))
        return
    if details.summary.is_empty:
        console.print(f"[bold yellow]No historical data found for container {container_id}[/]")
        raise typer.Exit(1)
    if output_format == "csv":
        typer.echo(series_to_dataframe(details.series).to_csv(index=False))
    else:
        _show_container(details)


@app.command()
def summary(
    config: Path | None = ConfigOption,
    stats_dir: Path | None = StatsDirOption,
    output_format: str = FormatOption,
) -> None:
    """Rank every container by average CPU."""
    service = _open_service(config, stats_dir)

    if output_format == "json":
        typer.echo(service.overview().model_dump_json(indent=2))
    elif output_format == "csv":
        typer.echo(summaries_to_dataframe(service.container_summaries()).to_csv(index=False))
    else:
        overview = service.overview()
        console.print(
            f"[bold]{overview.total_files}[/] snapshots from "
            f"{_fmt_time(overview.first_timestamp)} to {_fmt_time(overview.last_timestamp)}"
        )
        if overview.highest_peak_cpu is not None:
            peak = overview.highest_peak_cpu
            console.print(
                f"Highest peak CPU: [cyan]{peak.container_name or peak.container_id}[/] "
                f"({format_percent(peak.max_cpu)})"
            )
        _show_summaries(overview.summaries)


@app.command()
def collect(
    config: Path | None = ConfigOption,
    stats_dir: Path | None = StatsDirOption,
) -> None:
    """Run the configured collector once."""
    setup_logging(level="INFO")
    viewer_config = _load_viewer_config(config, stats_dir)
    collector = create_collector(viewer_config.collection, viewer_config.stats_dir)
    if collector is None:
        console.print("[bold red]Collection is disabled (collection.mode: none)[/]")
        raise typer.Exit(1)
    if not collector.is_available():
        console.print(f"[bold red]The {collector.name} collector is not available[/]")
        raise typer.Exit(1)

    try:
        path = collector.collect()
    except CollectionError as e:
        console.print(f"[bold red]Collection failed: {e}[/]")
        raise typer.Exit(1) from e

    if path is not None:
        console.print(f"[bold green]Snapshot written to {path}[/]")
    else:
        console.print("[bold green]Collection finished[/]")


@app.command()
def init_config(
    output: Path = typer.Option(
        Path("statscope.yaml"), "--output", "-o", help="Output configuration file"
    ),
) -> None:
    """Generate a sample configuration file."""
    sample_config = """\
# statscope configuration

# Directory of <YYYY-MM-DD_HH-MM-SS>_<suffix>.json snapshot files
stats_dir: "./stats"
file_suffix: ".json"

# What to do with files whose name carries no timestamp: now | mtime | reject
timestamp_policy: now

# Reload the catalog every 5 minutes
refresh_interval_seconds: 300

host: "127.0.0.1"
port: 8080

# How new snapshots are produced before each reload
collection:
  mode: none            # none | command | docker
  command: ["bash", "run.sh"]
  timeout_seconds: 120
"""
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(sample_config)
    console.print(f"[bold green]Sample configuration written to {output}[/]")


def _show_snapshot_list(rows: list[SnapshotInfo]) -> None:
    table = Table(title="Snapshots")
    table.add_column("#", style="dim", justify="right")
    table.add_column("File", style="cyan")
    table.add_column("Timestamp", style="white")
    table.add_column("Containers", justify="right")

    for row in rows:
        stamp = _fmt_time(row.timestamp)
        if row.timestamp_inferred:
            stamp += " [yellow](inferred)[/]"
        table.add_row(str(row.index), row.name, stamp, str(row.record_count))

    console.print(table)


def _show_snapshot(selected: Snapshot) -> None:
    table = Table(title=f"{selected.name} ({_fmt_time(selected.timestamp)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("CPU %", justify="right")
    table.add_column("Mem %", justify="right")
    table.add_column("Mem Usage")
    table.add_column("Net I/O")
    table.add_column("Block I/O")
    table.add_column("PIDs", justify="right")

    for r in selected.records:
        table.add_row(
            r.id, r.name, r.cpu_perc, r.mem_perc, r.mem_usage, r.net_io, r.block_io, r.pids
        )

    console.print(table)


def _show_container(details: ContainerDetails) -> None:
    s = details.summary
    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column("Metric", style="dim")
    stats_table.add_column("Value", style="bold")
    stats_table.add_row("Container", f"[cyan]{s.container_name}[/] ({s.container_id})")
    stats_table.add_row("Data Points", str(s.data_points))
    stats_table.add_row("First Seen", _fmt_time(s.first_seen))
    stats_table.add_row("Last Seen", _fmt_time(s.last_seen))
    stats_table.add_row(
        "CPU avg/max/min",
        f"{s.avg_cpu:.2f}% / {s.max_cpu:.2f}% / {s.min_cpu:.2f}%",
    )
    stats_table.add_row(
        "Mem avg/max/min",
        f"{s.avg_mem:.2f}% / {s.max_mem:.2f}% / {s.min_mem:.2f}%",
    )
    console.print(stats_table)

    table = Table(title="History")
    table.add_column("Timestamp")
    table.add_column("CPU %", justify="right")
    table.add_column("Mem %", justify="right")
    table.add_column("Mem Usage")
    table.add_column("Net I/O")
    table.add_column("Block I/O")
    table.add_column("PIDs", justify="right")
    for p in details.series.data:
        table.add_row(
            _fmt_time(p.timestamp),
            format_percent(p.cpu_perc),
            format_percent(p.mem_perc),
            p.mem_usage,
            p.net_io,
            p.block_io,
            p.pids,
        )
    console.print(table)


def _show_summaries(summaries: list[ContainerSummary]) -> None:
    table = Table(title="Containers by average CPU")
    table.add_column("Name", style="cyan")
    table.add_column("ID", style="dim")
    table.add_column("Points", justify="right")
    table.add_column("Avg CPU", justify="right", style="green")
    table.add_column("Max CPU", justify="right")
    table.add_column("Avg Mem", justify="right")
    table.add_column("Max Mem", justify="right")
    table.add_column("Last Seen")

    for s in summaries:
        table.add_row(
            s.container_name,
            s.container_id,
            str(s.data_points),
            format_percent(s.avg_cpu),
            format_percent(s.max_cpu),
            format_percent(s.avg_mem),
            format_percent(s.max_mem),
            _fmt_time(s.last_seen),
        )

    console.print(table)


if __name__ == "__main__":
    app()
