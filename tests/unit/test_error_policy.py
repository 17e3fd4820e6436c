"""Tests for the apply error handler."""

from __future__ import annotations

import logging

from kube_applier.core.error_policy import on_apply_error
from kube_applier.models import ErrorAction
from kube_applier.models.policy import ApplyPolicy


class TestOnApplyError:
    def test_default_policy_continues(self, caplog) -> None:
        cause = RuntimeError("boom")
        action = on_apply_error("Failed to create pod", cause, ApplyPolicy())

        assert action == ErrorAction.CONTINUE
        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.exc_info[1] is cause

    def test_throw_on_error_aborts(self) -> None:
        action = on_apply_error("Failed", RuntimeError("boom"), ApplyPolicy(throw_on_error=True))
        assert action == ErrorAction.ABORT
