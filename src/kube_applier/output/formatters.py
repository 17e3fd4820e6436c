"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from kube_applier.models.outcome import ApplyReport, ReconcileResult

console = Console()


def _result_to_dict(r: ReconcileResult) -> dict[str, Any]:
    return {
        "kind": r.kind,
        "name": r.name,
        "namespace": r.namespace,
        "action": r.action.value,
        "message": r.message,
    }


def report_to_dict(report: ApplyReport) -> dict[str, Any]:
    return {
        "source": report.source,
        "aborted": report.aborted,
        "summary": report.summary,
        "resources": [_result_to_dict(r) for r in report.results],
    }


def output_reports(reports: list[ApplyReport], fmt: str) -> None:
    if fmt == "json":
        data = [report_to_dict(r) for r in reports]
        console.print_json(json.dumps(data, indent=2))
    elif fmt == "yaml":
        data = [report_to_dict(r) for r in reports]
        console.print(yaml.dump(data, default_flow_style=False))
    else:
        from kube_applier.output.tables import report_table
        for report in reports:
            console.print(report_table(report))
            if report.aborted:
                console.print(f"[red]Aborted:[/red] {report.abort_message}")
            else:
                console.print(f"[green]Applied:[/green] {report.summary}")
