#!/usr/bin/env python3
"""
Gauge - CLI Entry Point

Usage:
    python main.py run -b benchmarks.sorting:SortBenchmark -n 20
    python main.py run -b benchmarks.sorting:SortBenchmark -m time_sort --worker pico
    python main.py list-benchmarks -b benchmarks.sorting:SortBenchmark
"""

import sys
import random
import logging
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import click
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn

from gauge import __version__
from gauge.config import Config
from gauge.errors import ConfigurationError, GaugeError
from gauge.benchmark import BenchmarkDescriptor, discover, find_benchmark_methods, load_benchmark_class
from gauge.model import Run
from gauge.output import Reporter, ResultsUploader
from gauge.output.reporter import print_summary
from gauge.runner import MultiTrialRunner
from gauge.worker import WORKERS, worker_name_for

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Configure root logger
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )

    logging.getLogger('gauge').setLevel(level)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output (INFO level)')
@click.option('--debug', is_flag=True, help='Enable debug output (DEBUG level, shows calibration)')
@click.pass_context
def cli(ctx, verbose, debug):
    """
    Gauge Benchmark Harness

    Runs micro and macro benchmarks, calibrating the number of repetitions
    per measurement so each timed batch lands near a target interval.

    Use -v for verbose output, --debug for calibration details.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['debug'] = debug
    setup_logging(verbose, debug)


@cli.command()
@click.option('--benchmark', '-b', required=True, help='Benchmark class (package.module:ClassName)')
@click.option('--method', '-m', multiple=True, help='Benchmark method to run (repeatable, default: all)')
@click.option('--worker', '-w', type=click.Choice(['auto'] + list(WORKERS.keys())), default='auto',
              help='Worker to use (default: chosen from the method signature)')
@click.option('--trials', '-t', default=None, type=int, help='Trials per benchmark method')
@click.option('--warmup', default=None, type=int, help='Warmup measurements per trial')
@click.option('--measurements', '-n', default=None, type=int, help='Measurements kept per trial')
@click.option('--interval', default=None, help='Target nanoseconds per timed batch')
@click.option('--gc/--no-gc', 'gc_before_each', default=None, help='Force GC before each measurement')
@click.option('--seed', default=None, type=int, help='Seed for randomized batch sizes')
@click.option('--format', '-f', 'output_format', type=click.Choice(['md', 'json', 'both', 'none']),
              default='both', help='Report format')
@click.option('--output-dir', '-o', default=None, type=click.Path(file_okay=False), help='Report directory')
@click.option('--upload-url', default=None, help='Results server to upload trials to')
@click.option('--api-key', default=None, help='API key for the results server')
def run(benchmark, method, worker, trials, warmup, measurements, interval, gc_before_each, seed,
        output_format, output_dir, upload_url, api_key):
    """
    Run benchmarks from a class.

    Example:
        python main.py run -b benchmarks.sorting:SortBenchmark -n 20 --interval 100000
    """
    console.print("\n[bold blue]Gauge Benchmark Run[/bold blue]")
    console.print(f"Benchmark: [cyan]{benchmark}[/cyan]")

    options = Config.get_worker_options()
    if interval is not None:
        options['timingIntervalNanos'] = str(interval)
    if gc_before_each is not None:
        options['gcBeforeEach'] = str(gc_before_each).lower()

    upload_config = Config.get_upload_config()

    try:
        if seed is None and Config.SEED is not None:
            try:
                seed = int(Config.SEED)
            except ValueError:
                raise ConfigurationError(f"GAUGE_SEED must be an integer, got {Config.SEED!r}")
        rng = random.Random(seed)

        descriptors = discover(benchmark, list(method) or None)
        benchmark_class = load_benchmark_class(benchmark)

        run_info = Run(label=benchmark)
        runner = MultiTrialRunner(
            trials=trials,
            run=run_info,
            worker_name=None if worker == 'auto' else worker,
            options=options,
            warmup_measurements=warmup,
            measurements=measurements,
            random=rng,
        )
        for descriptor in descriptors:
            chosen = worker_name_for(descriptor) if worker == 'auto' else worker
            console.print(f"  ⏱  {descriptor.name} ([cyan]{chosen}[/cyan])")
            runner.add_benchmark(
                lambda name=descriptor.method_name: BenchmarkDescriptor.create(benchmark_class, name)
            )

        reporter = None
        if output_format != 'none':
            formats = ('md', 'json') if output_format == 'both' else (output_format,)
            reporter = Reporter(Path(output_dir) if output_dir else None, formats=formats, console=console)
            runner.add_processor(reporter)

        uploader = ResultsUploader(
            url=upload_url or upload_config['url'],
            api_key=api_key or upload_config['key'],
            console=console,
        )
        runner.add_processor(uploader)

        console.print("")
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
            auto_refresh=False,
        ) as progress:
            # Redrawn only between trials, never while a batch is timed.
            task = progress.add_task("Running trials...", total=runner.total_trials)
            runner.on_progress(
                lambda completed, total: progress.update(task, completed=completed, refresh=True)
            )
            results = runner.run()

    except GaugeError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if reporter:
        for path in reporter.written:
            console.print(f"📄 Report: [green]{path}[/green]")

    print_summary(results, console)


@cli.command('list-benchmarks')
@click.option('--benchmark', '-b', required=True, help='Benchmark class (package.module:ClassName)')
def list_benchmarks_cmd(benchmark):
    """List benchmark methods of a class and the worker each would use."""
    try:
        benchmark_class = load_benchmark_class(benchmark)
        names = find_benchmark_methods(benchmark_class)
        descriptors = [BenchmarkDescriptor.create(benchmark_class, name) for name in names]
    except GaugeError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"\n[bold]Benchmarks in {benchmark_class.__name__}:[/bold]\n")

    table = Table()
    table.add_column("Method", style="cyan")
    table.add_column("Worker")
    table.add_column("Hooks")

    for descriptor in descriptors:
        hooks = (
            f"{len(descriptor.before_experiment)}/{len(descriptor.after_experiment)} experiment, "
            f"{len(descriptor.before_rep)}/{len(descriptor.after_rep)} rep"
        )
        table.add_row(descriptor.method_name, worker_name_for(descriptor), hooks)

    console.print(table)


@cli.command('list-workers')
def list_workers_cmd():
    """List available workers."""
    console.print("\n[bold]Available Workers:[/bold]\n")

    table = Table()
    table.add_column("Name", style="cyan")
    table.add_column("Class")
    table.add_column("Description")

    for name, worker_class in WORKERS.items():
        description = (worker_class.__doc__ or "").strip().splitlines()[0] if worker_class.__doc__ else ""
        table.add_row(name, worker_class.__name__, description)

    console.print(table)


@cli.command('init')
def init():
    """Initialize output directories."""
    console.print("\n[bold blue]Initializing Benchmark Project[/bold blue]\n")

    Config.ensure_directories()
    console.print(f"✅ Created output directory: {Config.OUTPUT_DIR}")
    console.print(f"✅ Created reports directory: {Config.REPORT_DIR}")

    env_file = Path(".env")
    if not env_file.exists():
        console.print("\n[yellow]⚠️  No .env file found.[/yellow]")
        console.print("Copy .env.example to .env to change the default worker options.")
    else:
        console.print("✅ .env file exists")

    console.print("\n[bold]Next steps:[/bold]")
    console.print("1. Write a benchmark class with time_* methods")
    console.print("2. Run: python main.py run -b your_module:YourBenchmark")


if __name__ == "__main__":
    cli()
