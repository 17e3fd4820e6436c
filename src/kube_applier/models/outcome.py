"""Reconciliation results."""

from __future__ import annotations

from dataclasses import dataclass, field

from kube_applier.models import ApplyAction


@dataclass
class ReconcileResult:
    kind: str
    name: str
    namespace: str
    action: ApplyAction
    source: str = ""
    message: str = ""
    error: BaseException | None = None
    aborted: bool = False

    @property
    def failed(self) -> bool:
        return self.action == ApplyAction.FAILED


@dataclass
class ApplyReport:
    source: str
    results: list[ReconcileResult] = field(default_factory=list)
    aborted: bool = False
    abort_cause: BaseException | None = None
    abort_message: str = ""

    def add(self, result: ReconcileResult) -> ReconcileResult:
        self.results.append(result)
        if result.aborted and not self.aborted:
            self.aborted = True
            self.abort_cause = result.error
            self.abort_message = result.message
        return result

    @property
    def failed(self) -> list[ReconcileResult]:
        return [r for r in self.results if r.failed]

    @property
    def has_failures(self) -> bool:
        return self.aborted or bool(self.failed)

    @property
    def summary(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for r in self.results:
            key = r.action.value
            counts[key] = counts.get(key, 0) + 1
        return counts
