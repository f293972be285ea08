import logging
from typing import Optional

import requests

from .base import (
    PLACEHOLDER_NOTE,
    UNRECOGNIZED_NOTE,
    Interpretation,
    InterpreterError,
    QueryInterpreter,
    TaskFilter,
)

logger = logging.getLogger(__name__)

# wire field name -> (task column, accepted value type)
FIELDS = {
    "priority": ("priority", str),
    "isCompleted": ("is_completed", bool),
    "is_completed": ("is_completed", bool),
}


class RemoteModelInterpreter(QueryInterpreter):
    """
    Ask an external model service to turn the query into a filter.

    The service receives {"query": "..."} and must answer with
    {"field": "priority" | "isCompleted" | null, "value": ..., "note": "..."}.
    """

    def __init__(self, url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def interpret(self, query: str) -> Interpretation:
        try:
            response = self.session.post(self.url, json={"query": query}, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise InterpreterError(f"Query model request failed: {e}") from e
        except ValueError as e:
            raise InterpreterError("Query model returned invalid JSON") from e

        if not isinstance(body, dict):
            raise InterpreterError("Query model returned an unexpected payload")

        field = body.get("field")
        note = body.get("note")
        if note is not None and not isinstance(note, str):
            raise InterpreterError("Query model returned a non-string note")
        if field is None:
            logger.info("Query model found no filter for %r", query)
            return Interpretation(None, note or f"{PLACEHOLDER_NOTE} {UNRECOGNIZED_NOTE}")

        if field not in FIELDS:
            raise InterpreterError(f"Query model returned unsupported field {field!r}")
        if "value" not in body:
            raise InterpreterError("Query model returned a field without a value")

        column, value_type = FIELDS[field]
        value = body["value"]
        if not isinstance(value, value_type):
            raise InterpreterError(f"Query model returned {value!r}, expected {value_type.__name__} for {field!r}")

        return Interpretation(TaskFilter(column, value), note or PLACEHOLDER_NOTE)
