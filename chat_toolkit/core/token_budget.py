"""Token budget estimation and history window selection"""

import math
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..models.conversation import Turn


VALID_ROLES = ("system", "user", "assistant")


def estimate_tokens(text: Any) -> int:
    """
    Estimate the token cost of a piece of text

    Rough estimation: 1 token ≈ 4 characters, rounded up. Absent, empty
    or non-text input costs 0.
    """
    if not isinstance(text, str) or not text:
        return 0
    return math.ceil(len(text) / 4)


def estimate_turns(turns: Iterable[Turn]) -> int:
    """Estimate the total token cost of a sequence of turns"""
    return sum(estimate_tokens(turn.content) for turn in turns)


def coerce_turn(item: Any) -> Optional[Turn]:
    """
    Convert a Turn or a role/content mapping to a Turn

    Returns None for malformed items.
    """
    if isinstance(item, Turn):
        return item

    if isinstance(item, dict):
        role = item.get("role")
        content = item.get("content")
    else:
        role = getattr(item, "role", None)
        content = getattr(item, "content", None)

    if role not in VALID_ROLES or not isinstance(content, str):
        return None
    return Turn(role=role, content=content)


class HistorySelector:
    """Select the most recent turns that fit within a token budget"""

    def select_with_cost(
        self,
        history: Sequence[Any],
        budget: int
    ) -> Tuple[List[Turn], int]:
        """
        Select a budget-bounded suffix of history

        Scans from newest to oldest and stops at the first turn that would
        push the running total over budget. Malformed turns are skipped.

        Args:
            history: Ordered turns, oldest first
            budget: Maximum estimated token cost

        Returns:
            Tuple of (selected turns oldest first, their estimated cost)
        """
        if budget <= 0 or not history:
            return [], 0

        selected: List[Turn] = []
        total = 0

        for item in reversed(history):
            turn = coerce_turn(item)
            if turn is None:
                continue

            cost = estimate_tokens(turn.content)
            if total + cost > budget:
                break

            selected.append(turn)
            total += cost

        selected.reverse()
        return selected, total

    def select(self, history: Sequence[Any], budget: int) -> List[Turn]:
        """Select a budget-bounded suffix of history"""
        selected, _ = self.select_with_cost(history, budget)
        return selected


def select_history(history: Sequence[Any], budget: int) -> List[Turn]:
    """Convenience function for HistorySelector().select"""
    return HistorySelector().select(history, budget)
