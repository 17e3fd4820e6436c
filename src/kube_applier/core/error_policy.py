"""The single place where mutation failures are reported."""

from __future__ import annotations

import logging

from kube_applier.models import ErrorAction
from kube_applier.models.policy import ApplyPolicy

logger = logging.getLogger(__name__)


def on_apply_error(message: str, cause: BaseException | None, policy: ApplyPolicy) -> ErrorAction:
    """Log a failed apply step and decide whether the session continues."""
    logger.error(message, exc_info=cause)
    if policy.throw_on_error:
        return ErrorAction.ABORT
    return ErrorAction.CONTINUE
