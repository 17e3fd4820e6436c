"""kapply apply <file>... - Apply manifests to the cluster."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from kubernetes.client import ApiException
from rich.console import Console
from rich.logging import RichHandler

from kube_applier.cli.options import ContextOption, NamespaceOption, OutputOption
from kube_applier.core.applier import Applier
from kube_applier.core.k8s_client import K8sClient
from kube_applier.errors import ApplyError, KubeApplierError
from kube_applier.models.outcome import ApplyReport
from kube_applier.output.formatters import output_reports

err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def apply(
    files: List[Path] = typer.Argument(help="Manifest files (.json, .yaml, .yml)"),
    output: str = OutputOption,
    namespace: Optional[str] = NamespaceOption,
    context: Optional[str] = ContextOption,
    no_create: bool = typer.Option(False, "--no-create", help="Do not create missing resources"),
    recreate: bool = typer.Option(
        False, "--recreate", help="Update changed resources by deleting and creating them",
    ),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop at the first failed change"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every step"),
) -> None:
    """Create or update the resources described in manifest files."""
    _setup_logging(verbose)
    applier = Applier(K8sClient(context=context))
    if namespace:
        applier.namespace = namespace
    if no_create:
        applier.allow_create = False
    if recreate:
        applier.update_via_delete_and_create = True
    if fail_fast:
        applier.throw_on_error = True

    reports: list[ApplyReport] = []
    failed = False
    for path in files:
        try:
            reports.append(applier.apply_file(path))
        except ApplyError as e:
            if e.report is not None:
                reports.append(e.report)
            err_console.print(f"[red]Apply of {path} aborted:[/red] {e}")
            failed = True
            break
        except KubeApplierError as e:
            err_console.print(f"[red]Cannot apply {path}:[/red] {e}")
            failed = True
        except ApiException as e:
            err_console.print(f"[red]Cannot read cluster state for {path}:[/red] {e.status} {e.reason}")
            failed = True
            break

    output_reports(reports, output)

    if failed or any(r.has_failures for r in reports):
        raise typer.Exit(code=1)
