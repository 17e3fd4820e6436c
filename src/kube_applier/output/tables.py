"""Rich table builders."""

from __future__ import annotations

from rich.table import Table

from kube_applier.models.outcome import ApplyReport
from kube_applier.output.themes import styled_action


def report_table(report: ApplyReport) -> Table:
    table = Table(title=f"Apply: {report.source}", expand=True)
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Namespace", style="blue", no_wrap=True)
    table.add_column("Action", no_wrap=True)
    table.add_column("Message", max_width=60)

    for r in report.results:
        table.add_row(r.kind, r.name, r.namespace or "-", styled_action(r.action), r.message)
    return table
