from pydantic import BaseModel, field_validator
from uuid import UUID
from app.schemas.activity import Activity, Category, Mood, check_minutes
from app.services.checkin import CheckinStage

class SessionCreate(BaseModel):
    mood: Mood | None = None

class MoodIn(BaseModel):
    mood: Mood

class OptionsIn(BaseModel):
    category: Category
    minutes: int  # 5 | 10 | 30 | 60
    @field_validator("minutes")
    @classmethod
    def _allowed(cls, v):
        return check_minutes(v)

class SessionOut(BaseModel):
    session_id: UUID
    stage: CheckinStage
    mood: Mood | None = None
    category: Category
    minutes: int
    activity: Activity | None = None
    rerolls_left: int
    can_reroll: bool

class HistoryOut(BaseModel):
    activity_ids: list[str]
