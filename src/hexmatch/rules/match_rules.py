"""Triangle match rules for the hex grid.

A rule fires at an anchor cell when the anchor's ``(x % 2, y % 2)`` parity
matches the rule and every offset cell holds the rule's color. Because odd
columns are shifted half a cell, the same visual triangle needs different
offsets depending on the anchor parity, hence eight rules per color.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from hexmatch.components.board import Board, Position
from hexmatch.events.outcomes import ExplodeElement, MatchPattern

Offset = Tuple[int, int]
Parity = Tuple[int, int]

# (parity, offsets) per triangle placement; the anchor offset (0, 0) comes first.
TRIPLE_PLACEMENTS: Tuple[Tuple[Parity, Tuple[Offset, ...]], ...] = (
    ((0, 0), ((0, 0), (1, 0), (1, 1))),
    ((0, 1), ((0, 0), (1, 0), (1, 1))),
    ((1, 0), ((0, 0), (1, 0), (0, 1))),
    ((1, 1), ((0, 0), (1, 0), (0, 1))),
    ((1, 0), ((0, 0), (1, -1), (1, 0))),
    ((1, 1), ((0, 0), (1, -1), (1, 0))),
    ((0, 0), ((0, 0), (0, 1), (1, 1))),
    ((0, 1), ((0, 0), (0, 1), (1, 1))),
)


@dataclass(frozen=True, slots=True)
class Rule:
    priority: int
    color: int
    parity: Parity
    offsets: Tuple[Offset, ...]
    pattern: MatchPattern = MatchPattern.TRIPLE

    def check(self, board: Board, x: int, y: int) -> bool:
        if (x % 2, y % 2) != self.parity:
            return False
        for dx, dy in self.offsets:
            # Off-grid cells report None and never equal a color.
            if board.color_at(x + dx, y + dy) != self.color:
                return False
        return True

    def clean(self, board: Board, x: int, y: int) -> List[Position]:
        """Empty every offset cell and return the cleared coordinates.

        Only valid after ``check`` succeeded for the same anchor.
        """
        positions: List[Position] = []
        for dx, dy in self.offsets:
            board.clear(x + dx, y + dy)
            positions.append((x + dx, y + dy))
        return positions


class RuleSet:
    """Rules kept in priority order; equal priorities keep insertion order."""

    def __init__(self, rules: Iterable[Rule]):
        self._rules: List[Rule] = sorted(rules, key=lambda rule: rule.priority)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def scan(self, board: Board) -> List[ExplodeElement]:
        """Clear every rule match on ``board`` in raster order and report them.

        Matches are cleaned as soon as they are found, so a later rule at the
        same or a following anchor sees the emptied cells. Overlapping matches
        are not merged.
        """
        found: List[ExplodeElement] = []
        for x, y in board.positions():
            for rule in self._rules:
                if rule.check(board, x, y):
                    positions = rule.clean(board, x, y)
                    found.append(ExplodeElement(color=rule.color, pattern=rule.pattern, positions=positions))
        return found

    def has_match(self, board: Board) -> bool:
        return any(rule.check(board, x, y) for x, y in board.positions() for rule in self._rules)


def build_rules(color_count: int) -> RuleSet:
    rules: List[Rule] = []
    for color in range(1, color_count + 1):
        for parity, offsets in TRIPLE_PLACEMENTS:
            rules.append(Rule(priority=0, color=color, parity=parity, offsets=offsets))
    return RuleSet(rules)
