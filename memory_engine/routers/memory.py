import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from ..core.database import get_db
from ..core.errors import MemoryNotFoundError
from ..schemas.memory import (
    MemoryCreate,
    MemoryUpdate,
    MemoryDelete,
    MemoryLookup,
    UserMemoryLookup,
    MemoryRead,
    MemoryList,
    MemoryDeleted,
)
from ..services.memory_service import memory_service

logger = logging.getLogger("memory_engine.api")

INVALID_INPUT_STATUS = 411
INVALID_INPUT_MESSAGE = "Invalid input"
# misspelling is part of the published error contract
SERVER_ERROR_MESSAGE = "Intenal server error"
NOT_FOUND_MESSAGE = "Memory not found"

ERROR_RESPONSES = {
    INVALID_INPUT_STATUS: {"description": "Request body failed validation"},
    404: {"description": "No matching memory"},
    500: {"description": "Memory store failure"},
}

router = APIRouter(prefix="/memory", tags=["memory"], responses=ERROR_RESPONSES)

def invalid_input_response() -> JSONResponse:
    return JSONResponse(status_code=INVALID_INPUT_STATUS, content={"message": INVALID_INPUT_MESSAGE})

def _failure(exc: Exception, action: str) -> JSONResponse:
    if isinstance(exc, MemoryNotFoundError):
        logger.info(f"{action}: memory {exc.memory_id} not found")
        return JSONResponse(status_code=404, content={"message": NOT_FOUND_MESSAGE})
    logger.exception(f"{action} failed")
    return JSONResponse(status_code=500, content={"message": SERVER_ERROR_MESSAGE, "error": str(exc)})

@router.post("/", response_model=MemoryRead, status_code=201)
def add_memory(payload: MemoryCreate, db: Session = Depends(get_db)):
    try:
        mem = memory_service.create_memory(db, payload)
    except Exception as e:
        return _failure(e, "add_memory")
    return MemoryRead.from_model(mem)

@router.patch("/", response_model=MemoryRead)
def update_memory(payload: MemoryUpdate, db: Session = Depends(get_db)):
    try:
        mem = memory_service.update_memory(db, payload)
    except Exception as e:
        return _failure(e, "update_memory")
    return MemoryRead.from_model(mem)

@router.delete("/", response_model=MemoryDeleted)
def delete_memory(payload: MemoryDelete, db: Session = Depends(get_db)):
    try:
        deleted_id = memory_service.delete_memory(db, payload)
    except Exception as e:
        return _failure(e, "delete_memory")
    return MemoryDeleted(id=deleted_id)

@router.post("/get", response_model=MemoryRead)
def get_memory(payload: MemoryLookup, db: Session = Depends(get_db)):
    try:
        mem = memory_service.get_memory(db, payload)
    except Exception as e:
        return _failure(e, "get_memory")
    return MemoryRead.from_model(mem)

@router.post("/user", response_model=MemoryList)
def get_user_memory(payload: UserMemoryLookup, db: Session = Depends(get_db)):
    try:
        mems = memory_service.get_user_memories(db, payload)
    except Exception as e:
        return _failure(e, "get_user_memory")
    return MemoryList(memories=[MemoryRead.from_model(m) for m in mems])
