from fastapi import APIRouter, Depends, Query
from app.api.deps import get_catalog, get_history, get_picker
from app.core.errors import NoMatchFound
from app.data.activities import ActivityCatalog
from app.schemas.activity import ALLOWED_MINUTES, Activity, Category, Mood
from app.services.history import CompletionHistory
from app.services.suggestion import Picker, suggest

router = APIRouter(prefix="/api/suggestions", tags=["suggestions"])

MINUTES_PATTERN = "^(" + "|".join(str(m) for m in ALLOWED_MINUTES) + ")$"

@router.get("", response_model=Activity)
def get_suggestion(
    mood: Mood,
    category: Category,
    minutes: str = Query(pattern=MINUTES_PATTERN),
    exclude_id: str | None = None,
    catalog: ActivityCatalog = Depends(get_catalog),
    history: CompletionHistory = Depends(get_history),
    picker: Picker = Depends(get_picker),
):
    """
    One-off suggestion outside a check-in session. Does not touch the reroll budget.
    """
    a = suggest(catalog, mood, category, int(minutes), history=history.snapshot(), exclude_id=exclude_id, picker=picker)
    if a is None:
        raise NoMatchFound(mood, category, int(minutes))
    return a
