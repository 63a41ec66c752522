from fastapi import APIRouter, Depends
from app.api.deps import get_history, get_session_log
from app.schemas.session import HistoryOut
from app.services.history import CompletionHistory
from app.services.local_data import clear_all_data
from app.services.session_log import SessionLog

router = APIRouter(prefix="/api", tags=["data"])

@router.get("/history", response_model=HistoryOut)
def get_history_snapshot(history: CompletionHistory = Depends(get_history)):
    return {"activity_ids": history.snapshot()}

@router.delete("/data", status_code=204)
def clear_data(history: CompletionHistory = Depends(get_history), session_log: SessionLog = Depends(get_session_log)):
    clear_all_data(history, session_log)
