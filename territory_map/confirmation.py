# confirmation.py
"""
Two-phase confirmation for destructive operations.

``request`` parks the mutation behind a token; ``confirm`` runs it,
``cancel`` drops it. Nothing is mutated until ``confirm``.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Callable

from territory_map.errors import ConfirmationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingConfirmation:
    """Handle for a requested destructive action."""

    token: int
    action: str
    message: str


class ConfirmationGate:
    """Hold pending destructive actions until the user answers."""

    def __init__(self):
        self._tokens = itertools.count(1)
        self._pending = {}

    def request(self, action, message, apply: Callable[[], object]):
        """Register ``apply`` and return the :class:`PendingConfirmation`."""
        pending = PendingConfirmation(token=next(self._tokens), action=action, message=message)
        self._pending[pending.token] = (pending, apply)
        logger.debug("Confirmation %d requested for %s", pending.token, action)
        return pending

    def is_pending(self, token):
        return token in self._pending

    def confirm(self, token):
        """Run the parked action and return its result.

        Raises
        ------
        ConfirmationError
            If the token is unknown or already settled.
        """
        try:
            pending, apply = self._pending.pop(token)
        except KeyError:
            raise ConfirmationError(f"No pending confirmation {token}") from None
        logger.debug("Confirmation %d accepted (%s)", token, pending.action)
        return apply()

    def cancel(self, token):
        """Drop the parked action; returns False if nothing was pending."""
        if self._pending.pop(token, None) is None:
            return False
        logger.debug("Confirmation %d declined", token)
        return True

    def cancel_all(self):
        self._pending.clear()
