import logging
from typing import Dict, Optional

from .base import (
    PLACEHOLDER_NOTE,
    UNRECOGNIZED_NOTE,
    Interpretation,
    QueryInterpreter,
    TaskFilter,
)

logger = logging.getLogger(__name__)

HIGH_PRIORITY = "high"

DEFAULT_RULES: Dict[str, TaskFilter] = {
    "show urgent": TaskFilter("priority", HIGH_PRIORITY),
    "show completed": TaskFilter("is_completed", True),
    "show incomplete": TaskFilter("is_completed", False),
}


class KeywordInterpreter(QueryInterpreter):
    """Exact string match of the whole query against a fixed rule table."""

    def __init__(self, rules: Optional[Dict[str, TaskFilter]] = None):
        self.rules = DEFAULT_RULES if rules is None else rules

    def interpret(self, query: str) -> Interpretation:
        task_filter = self.rules.get(query)
        if task_filter is None:
            logger.info("AI could not provide specific filters, returning all tasks.")
            return Interpretation(None, f"{PLACEHOLDER_NOTE} {UNRECOGNIZED_NOTE}")
        return Interpretation(task_filter, PLACEHOLDER_NOTE)
