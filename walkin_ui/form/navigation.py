"""Fast-forward through the lead form with known-good input."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from walkin_ui.data import ValidInput
from walkin_ui.form.actions import FormActions
from walkin_ui.form.assertions import FormAssertions
from walkin_ui.form.model import FormStep, path_to

logger = logging.getLogger(__name__)


class FormNavigation:
    """Replays the step graph from the first screen to a target step.

    Every prerequisite step is filled with ``valid`` input, advanced, and
    its successor confirmed active before the next step starts.
    """

    def __init__(self, actions: FormActions, assertions: FormAssertions, valid: ValidInput) -> None:
        self._actions = actions
        self._assertions = assertions
        self._valid = valid

    async def navigate_to(self, target: FormStep) -> None:
        for contract in path_to(target):
            logger.debug("Fast-forwarding through %s", contract.step.value)
            await self._actions.fill_step(contract.step, self._valid.values_for(contract.step))
            await self._actions.advance(contract.step)
            await self._assertions.expect_step_active(contract.successor)
        logger.info("Reached %s", target.value)

    async def prepare_step(self, step: FormStep, overrides: Optional[Mapping[str, Any]] = None) -> None:
        """Fill ``step`` with valid input, replacing the fields in ``overrides``."""
        values = self._valid.values_for(step)
        values.update(overrides or {})
        await self._actions.fill_step(step, values)
