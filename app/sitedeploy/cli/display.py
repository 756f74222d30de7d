"""Shared Rich display functions for pipeline runs.

Provides the banner panel and the stage summary table printed by the
deploy command.
"""

from rich.panel import Panel
from rich.table import Table

from sitedeploy.models.stage import PipelineResult, StageName
from sitedeploy.utils.formatting import console


def print_banner(subtitle: str) -> None:
    """Print the sitedeploy banner with a subtitle line.

    Args:
        subtitle: Text shown next to the product name.
    """
    console.print(
        Panel.fit(
            f"[text]SITEDEPLOY[/text]  [header]{subtitle}[/header]",
            border_style="border",
            padding=(1, 4),
        )
    )


def create_pipeline_table(pipeline: PipelineResult) -> Table:
    """Create a Rich table summarizing each stage of a run.

    Stages the run never reached are listed as not run.

    Args:
        pipeline: Result of the pipeline run.

    Returns:
        Rich Table with Stage, Status and Details columns.
    """
    table = Table(
        title="Pipeline Summary",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Stage", width=10)
    table.add_column("Status", width=8, justify="center")
    table.add_column("Details")

    for stage in StageName:
        result = pipeline.get(stage)
        if result is None:
            status = "[muted]-[/muted]"
            detail = "not run"
        elif result.skipped:
            status = "[muted]SKIP[/muted]"
            detail = ""
        elif result.success:
            status = "[success]OK[/success]"
            detail = result.message or ""
        elif result.fatal:
            status = "[error]FAIL[/error]"
            detail = result.message or "Unknown error"
        else:
            status = "[warning]WARN[/warning]"
            detail = result.message or ""

        table.add_row(stage.value, status, f"[muted]{detail}[/muted]")

    return table
