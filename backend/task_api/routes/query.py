import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import ValidationError

from ..interpreters.base import QueryInterpreter
from ..repository import TaskRepository, get_repository
from .. import schemas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


def get_interpreter(request: Request) -> QueryInterpreter:
    return request.app.state.interpreter

@router.post("/query", response_model=schemas.QueryResponse)
def process_query(
    payload: Any = Body(default=None),
    repo: TaskRepository = Depends(get_repository),
    interpreter: QueryInterpreter = Depends(get_interpreter),
):
    try:
        query = schemas.QueryRequest.model_validate(payload).query
    except ValidationError:
        raise HTTPException(400, "Query is required")
    if not query:
        raise HTTPException(400, "Query is required")

    logger.info('Received AI query: "%s"', query)

    result = interpreter.interpret(query)
    if result.filter is None:
        tasks = repo.find_all()
    else:
        tasks = repo.find_where(result.filter.column, result.filter.value)

    return schemas.QueryResponse(
        message=f"Processing AI query: '{query}'",
        filtered_tasks=[schemas.TaskOut.model_validate(t) for t in tasks],
        note=result.note,
    )
