"""
Report generation for trial results.
Supports Markdown and JSON output formats.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..config import Config
from ..model import Trial
from ..runner.metrics import TrialSummary, summarize
from ..worker.util import format_nanos
from .utils import get_machine_info, get_report_subdir_name

logger = logging.getLogger(__name__)


def _format_ns(value: float) -> str:
    if value >= 1000:
        return format_nanos(int(round(value)))
    return f"{value:.2f}ns"


class Reporter:
    """
    Generate trial reports in various formats.

    Supports:
        - Markdown reports
        - JSON data export
        - Console output

    Reports are organized by date and hostname:
        reports/YYYYMMDD_hostname/

    Can also be registered as a result processor: trials handed to
    process_trial() are written out when close() is called.

    Example:
        reporter = Reporter()
        reporter.generate_markdown(trials, "report.md")
        reporter.generate_json(trials, "results.json")
    """

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        formats: Sequence[str] = ("md", "json"),
        console: Optional[Console] = None,
    ):
        """
        Initialize reporter.

        Args:
            output_dir: Base directory for output files (default: Config.REPORT_DIR)
            formats: Formats written by close() ('md', 'json')
            console: Console for print_summary (default: a new rich Console)
        """
        base_dir = Path(output_dir) if output_dir else Config.REPORT_DIR

        # Create subdirectory with date_hostname format
        self.output_dir = base_dir / get_report_subdir_name()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.formats = tuple(formats)
        self.console = console or Console()
        self.trials: List[Trial] = []
        self.written: List[str] = []

        # Cache machine info for this reporter instance
        self._machine_info = get_machine_info()

    def process_trial(self, trial: Trial) -> None:
        self.trials.append(trial)

    def close(self) -> None:
        """Write the collected trials in the configured formats."""
        if not self.trials:
            logger.info("No trials to report")
            return
        self.written = []
        if "md" in self.formats:
            self.written.append(self.generate_markdown(self.trials))
        if "json" in self.formats:
            self.written.append(self.generate_json(self.trials))
        for path in self.written:
            logger.info(f"Report written to: {path}")

    def generate_markdown(
        self,
        trials: Sequence[Trial],
        filename: Optional[str] = None,
    ) -> str:
        """
        Generate a Markdown report.

        Args:
            trials: Trials to report
            filename: Output filename (optional)

        Returns:
            Path to generated file
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        file_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if not filename:
            filename = f"benchmark_report_{file_timestamp}.md"

        output_path = self.output_dir / filename
        machine_info = self._machine_info

        lines = []
        lines.append("# Benchmark Report")
        lines.append(f"\n**Generated:** {timestamp}")
        lines.append(f"**Trials:** {len(trials)}")
        lines.append("\n---\n")

        lines.append("## Environment\n")
        lines.append("| Item | Value |")
        lines.append("|------|-------|")
        lines.append(f"| Hostname | {machine_info['hostname']} |")
        lines.append(f"| Platform | {machine_info['platform']} ({machine_info['machine']}) |")
        lines.append(f"| Python | {machine_info['python']} |")
        lines.append(f"| CPUs | {machine_info['cpu_count']} |")
        lines.append("\n---\n")

        lines.append("## Results\n")
        lines.append("| Benchmark | Worker | Measurements | Reps | Mean | Min | Median | Max |")
        lines.append("|-----------|--------|--------------|------|------|-----|--------|-----|")
        for trial in trials:
            summary = summarize(trial.measurements)
            lines.append(
                f"| {trial.benchmark} | {trial.worker} | {summary.count} | {summary.total_reps:.0f} "
                f"| {_format_ns(summary.weighted_mean)} | {_format_ns(summary.min)} "
                f"| {_format_ns(summary.median)} | {_format_ns(summary.max)} |"
            )

        lines.append("\n## Options\n")
        for trial in trials:
            options = ", ".join(f"{k}={v}" for k, v in sorted(trial.options.items()))
            lines.append(f"- `{trial.id}` {trial.benchmark}: {options or 'defaults'}")

        content = "\n".join(lines)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)

        return str(output_path)

    def generate_json(
        self,
        trials: Sequence[Trial],
        filename: Optional[str] = None,
    ) -> str:
        """
        Generate JSON trial results.

        Args:
            trials: Trials to export
            filename: Output filename (optional)

        Returns:
            Path to generated file
        """
        file_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        if not filename:
            filename = f"benchmark_results_{file_timestamp}.json"

        output_path = self.output_dir / filename

        data: Dict[str, Any] = {
            "generated_at": datetime.now().isoformat(),
            "environment": dict(self._machine_info),
            "trials": [
                {**trial.to_dict(), "summary": summarize(trial.measurements).to_dict()}
                for trial in trials
            ],
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        return str(output_path)

    def print_summary(self, trials: Sequence[Trial]) -> None:
        """Print a summary table to the console."""
        print_summary(trials, self.console)


def print_summary(trials: Sequence[Trial], console: Optional[Console] = None) -> None:
    """Print a summary table of trials."""
    table = Table(title="Benchmark Results")
    table.add_column("Benchmark", style="cyan")
    table.add_column("Worker")
    table.add_column("Measurements", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Median", justify="right")
    table.add_column("Max", justify="right")

    for trial in trials:
        summary: TrialSummary = summarize(trial.measurements)
        table.add_row(
            trial.benchmark,
            trial.worker,
            str(summary.count),
            _format_ns(summary.weighted_mean),
            _format_ns(summary.min),
            _format_ns(summary.median),
            _format_ns(summary.max),
        )

    (console or Console()).print(table)
