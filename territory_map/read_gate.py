# read_gate.py
"""
Request-generation tokens for file reads.

Each read gets the next sequence number; a completion is applied only if it
carries the latest number issued, so a slow earlier read can never overwrite
the result of a later one.
"""

import logging

logger = logging.getLogger(__name__)


class LatestRequestGate:
    """Issue increasing request numbers and accept only the latest one.

    Parameters
    ----------
    name : str
        Label used in log messages ("image", "import"...).
    """

    def __init__(self, name):
        self.name = name
        self.latest = 0

    def issue(self):
        """Start a new request and return its number."""
        self.latest += 1
        return self.latest

    def accepts(self, request_id):
        return request_id == self.latest

    def complete(self, request_id, apply, *args):
        """Call ``apply(*args)`` if ``request_id`` is still the latest.

        Returns
        -------
        bool
            True if applied, False if the request was superseded.
        """
        if not self.accepts(request_id):
            logger.info("Dropped stale %s read %d (latest is %d)", self.name, request_id, self.latest)
            return False
        apply(*args)
        return True
