"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import typer

app = typer.Typer(
    name="kapply",
    help="kube-applier - Apply Kubernetes manifests to a cluster.",
    no_args_is_help=True,
)


@app.callback()
def root() -> None:
    """kube-applier - Apply Kubernetes manifests to a cluster."""


def _register_commands() -> None:
    from kube_applier.cli.commands.apply_cmd import apply

    app.command(name="apply", help="Apply manifest files")(apply)


_register_commands()


def main() -> None:
    app()
