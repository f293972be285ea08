from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

PLACEHOLDER_NOTE = (
    "AI logic is currently a placeholder. "
    "Implement LLM API calls and robust filtering here."
)
UNRECOGNIZED_NOTE = "No specific filter was recognized, returning all tasks."


class InterpreterError(RuntimeError):
    pass


@dataclass(frozen=True)
class TaskFilter:
    column: str
    value: Any


@dataclass(frozen=True)
class Interpretation:
    filter: Optional[TaskFilter]
    note: str


class QueryInterpreter(ABC):
    @abstractmethod
    def interpret(self, query: str) -> Interpretation:
        pass
