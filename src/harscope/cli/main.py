"""harscope CLI - batch HAR analysis of the current directory.

Takes no flags. Behaviour is tuned through HARSCOPE_* environment
variables (see ``harscope.config``).
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

import harscope
from harscope.config import get_settings
from harscope.exceptions import ScanError, SetupError
from harscope.logging import configure_from_settings, get_logger
from harscope.runner import analyze_all
from harscope.storage import ReportStore

LOG = get_logger(__name__)

app = typer.Typer(
    name="harscope",
    help="Analyze every HAR file under the current directory.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.command()
def run() -> None:
    """Analyze every HAR file below the current directory.

    Writes a JSON analysis and a Markdown report per file, plus
    summary_report.md, into the output directory.
    """
    settings = get_settings()
    configure_from_settings(settings)

    console.print(
        Panel(
            f"[bold cyan]harscope[/bold cyan] v{harscope.__version__}\n\n"
            f"[dim]Output:[/dim] {settings.output_dir}",
            title="HAR analyzer",
            border_style="cyan",
        )
    )

    store = ReportStore(settings.output_dir, max_table_rows=settings.max_table_rows)
    try:
        summary = analyze_all(Path.cwd(), store, console=console)
    except (SetupError, ScanError) as exc:
        LOG.error("har_run_aborted", error=str(exc))
        console.print(f"[red]Analysis failed: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from None

    if summary.files:
        console.print(f"\n[green]Analysis complete![/green] Results saved in: {escape(str(store.output_dir))}")


if __name__ == "__main__":
    app()
