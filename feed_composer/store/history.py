"""In-memory visit history supplying recent domain signals."""

import threading
from collections import deque

from feed_composer.scorer.domains import base_domain


class VisitHistory:
    """Bounded record of visited URLs, most recent last."""

    def __init__(self, capacity: int = 1000) -> None:
        """Initialize the history.

        Args:
            capacity: Maximum number of visits retained.
        """
        self._visits: deque[str] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._visits)

    def record_visit(self, url: str) -> None:
        """Record a visited URL."""
        with self._lock:
            self._visits.append(url)

    def recent_domains(self, limit: int) -> list[str]:
        """Get registrable domains of the most recent visits.

        Args:
            limit: Number of most recent visits to consider.

        Returns:
            Distinct domains, most recently visited first. URLs without a
            host are ignored.
        """
        if limit <= 0:
            return []
        with self._lock:
            recent = list(self._visits)[-limit:]

        domains: list[str] = []
        seen: set[str] = set()
        for url in reversed(recent):
            domain = base_domain(url)
            if domain is not None and domain not in seen:
                seen.add(domain)
                domains.append(domain)
        return domains
