"""
Cyclomatic complexity of a function body.

complexity = 1 + number of decision nodes anywhere in the body

Decision nodes are ``if``, ``switch``, ``for``, ``while``, ``do``/``while``
and the ternary operator. Each counts once no matter how many arms it has:
a ``switch`` with ten ``case`` labels adds 1, and ``else if`` adds 1 because
it is a nested ``if``. For single-entry, single-exit functions this matches
``E - N + 2P`` over compound decisions.
"""

import logging
from typing import Optional

from cycloscan.frontend.base import DECISION_KINDS, SyntaxNode


logger = logging.getLogger(__name__)

BASE_COMPLEXITY = 1

# Returned for a missing body; distinct from the minimum real value of 1.
NO_BODY = 0


class ComplexityCalculator:
    """Stateless between calls; one instance can serve a whole run."""

    def calculate(self, body: Optional[SyntaxNode]) -> int:
        if body is None:
            logger.debug("Empty function body encountered")
            return NO_BODY
        return BASE_COMPLEXITY + self.count_decisions(body)

    def count_decisions(self, node: SyntaxNode) -> int:
        """Count decision nodes in the subtree rooted at ``node``."""
        count = 0
        stack = [node]
        while stack:
            current = stack.pop()
            if current.kind in DECISION_KINDS:
                count += 1
            stack.extend(child for child in current.children() if child is not None)
        return count
