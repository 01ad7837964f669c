"""
Touched-rule tracker.

Records which rules have failed at least once for one field instance.
A required rule's message is only shown once that rule is touched, which
keeps errors from piling up before the user has finished typing.
"""

from typing import FrozenSet, Iterable, Set


class TouchedRuleTracker:
    """
    Per-instance, monotonic set of touched rule ids.

    Each rule moves untouched -> touched at most once; only reset()
    clears it.
    """

    def __init__(self, touched: Iterable[str] = ()):
        self._touched: Set[str] = set(touched)

    def mark(self, rule_ids: Iterable[str]) -> FrozenSet[str]:
        """
        Mark rule ids as touched.

        Returns:
            Ids that were newly touched by this call
        """
        newly_touched = frozenset(rule_ids) - self._touched
        self._touched.update(newly_touched)
        return newly_touched

    def is_touched(self, rule_id: str) -> bool:
        return rule_id in self._touched

    def snapshot(self) -> FrozenSet[str]:
        return frozenset(self._touched)

    def reset(self) -> None:
        self._touched.clear()

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._touched

    def __len__(self) -> int:
        return len(self._touched)
