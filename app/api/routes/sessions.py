from fastapi import APIRouter, Depends
from uuid import UUID
from app.api.deps import get_catalog, get_history, get_picker, get_registry, get_session_log
from app.core.errors import SessionNotFound
from app.data.activities import ActivityCatalog
from app.schemas.session import MoodIn, OptionsIn, SessionCreate, SessionOut
from app.services.checkin import CheckinSession
from app.services.history import CompletionHistory
from app.services.registry import SessionRegistry
from app.services.session_log import SessionLog
from app.services.suggestion import Picker

router = APIRouter(prefix="/api/sessions", tags=["sessions"])

def _out(session_id: UUID, s: CheckinSession) -> dict:
    st = s.state
    return {
        "session_id": session_id,
        "stage": st.stage,
        "mood": st.mood,
        "category": st.category,
        "minutes": st.minutes,
        "activity": st.activity,
        "rerolls_left": st.rerolls_left,
        "can_reroll": st.can_reroll,
    }

@router.post("", response_model=SessionOut, status_code=201)
def start(
    payload: SessionCreate | None = None,
    catalog: ActivityCatalog = Depends(get_catalog),
    history: CompletionHistory = Depends(get_history),
    session_log: SessionLog = Depends(get_session_log),
    picker: Picker = Depends(get_picker),
    registry: SessionRegistry = Depends(get_registry),
):
    s = CheckinSession(catalog, history, session_log, picker=picker)
    if payload and payload.mood:
        s.select_mood(payload.mood)
    sid = registry.add(s)
    return _out(sid, s)

@router.get("/{session_id}", response_model=SessionOut)
def get_state(session_id: UUID, registry: SessionRegistry = Depends(get_registry)):
    return _out(session_id, registry.get(session_id))

@router.post("/{session_id}/mood", response_model=SessionOut)
def select_mood(session_id: UUID, payload: MoodIn, registry: SessionRegistry = Depends(get_registry)):
    s = registry.get(session_id)
    with s.lock:
        s.select_mood(payload.mood)
        return _out(session_id, s)

@router.post("/{session_id}/confirm", response_model=SessionOut)
def confirm(session_id: UUID, payload: OptionsIn, registry: SessionRegistry = Depends(get_registry)):
    s = registry.get(session_id)
    with s.lock:
        s.confirm(payload.category, payload.minutes)
        return _out(session_id, s)

@router.post("/{session_id}/reroll", response_model=SessionOut)
def reroll(session_id: UUID, registry: SessionRegistry = Depends(get_registry)):
    s = registry.get(session_id)
    with s.lock:
        s.reroll()
        return _out(session_id, s)

@router.post("/{session_id}/complete", response_model=SessionOut)
def complete(session_id: UUID, registry: SessionRegistry = Depends(get_registry)):
    s = registry.get(session_id)
    with s.lock:
        s.complete()
        return _out(session_id, s)

@router.post("/{session_id}/back", response_model=SessionOut)
def back(session_id: UUID, registry: SessionRegistry = Depends(get_registry)):
    s = registry.get(session_id)
    with s.lock:
        s.back_to_options()
        return _out(session_id, s)

@router.post("/{session_id}/reset", response_model=SessionOut)
def reset(session_id: UUID, registry: SessionRegistry = Depends(get_registry)):
    s = registry.get(session_id)
    with s.lock:
        s.reset()
        return _out(session_id, s)

@router.delete("/{session_id}", status_code=204)
def end(session_id: UUID, registry: SessionRegistry = Depends(get_registry)):
    """
    Drop a check-in the client is done with instead of waiting for it to expire.
    """
    if registry.discard(session_id) is None:
        raise SessionNotFound(session_id)
