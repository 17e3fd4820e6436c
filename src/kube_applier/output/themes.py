"""Action color map."""

from kube_applier.models import ApplyAction

ACTION_COLORS: dict[ApplyAction, str] = {
    ApplyAction.CREATED: "green",
    ApplyAction.UPDATED: "yellow",
    ApplyAction.RECREATED: "magenta",
    ApplyAction.UNCHANGED: "dim",
    ApplyAction.SKIPPED: "cyan",
    ApplyAction.FAILED: "red bold",
    ApplyAction.IGNORED: "dim",
    ApplyAction.TEMPLATE: "blue",
}


def styled_action(action: ApplyAction) -> str:
    color = ACTION_COLORS.get(action, "white")
    return f"[{color}]{action.value}[/{color}]"
