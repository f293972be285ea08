from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ..repository import MAX_TASK_ID, TaskRepository, get_repository
from .. import schemas

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _get_or_404(repo: TaskRepository, task_id: int):
    # ids outside the column range can never match a row
    if not 1 <= task_id <= MAX_TASK_ID:
        raise HTTPException(404, "Task not found")
    obj = repo.find_by_id(task_id)
    if not obj:
        raise HTTPException(404, "Task not found")
    return obj

@router.post("/", response_model=schemas.TaskOut, status_code=status.HTTP_201_CREATED)
def create(data: schemas.TaskCreate, repo: TaskRepository = Depends(get_repository)):
    return repo.create(data)

@router.get("/", response_model=list[schemas.TaskOut])
def list_all(repo: TaskRepository = Depends(get_repository)):
    return repo.find_all()

@router.get("/{task_id}", response_model=schemas.TaskOut)
def get_one(task_id: int, repo: TaskRepository = Depends(get_repository)):
    return _get_or_404(repo, task_id)

@router.put("/{task_id}", response_model=schemas.TaskOut)
def update(task_id: int, payload: Any = Body(default=None), repo: TaskRepository = Depends(get_repository)):
    obj = _get_or_404(repo, task_id)
    # bind only after the lookup, a missing task wins over a bad body
    try:
        data = schemas.TaskUpdate.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
    return repo.update(obj, data.changes())

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete(task_id: int, repo: TaskRepository = Depends(get_repository)):
    obj = _get_or_404(repo, task_id)
    repo.delete(obj)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
