from fastapi import APIRouter, Depends, HTTPException
from app.api.deps import get_catalog
from app.data.activities import ActivityCatalog
from app.schemas.activity import Activity, ActivityList, Category

router = APIRouter(prefix="/api/activities", tags=["activities"])

@router.get("", response_model=ActivityList)
def list_activities(category: Category | None = None, catalog: ActivityCatalog = Depends(get_catalog)):
    items = catalog.by_category(category) if category else list(catalog.all())
    return {"activities": items}

@router.get("/{activity_id}", response_model=Activity)
def get_activity(activity_id: str, catalog: ActivityCatalog = Depends(get_catalog)):
    a = catalog.get(activity_id)
    if not a: raise HTTPException(status_code=404, detail="Activity not found")
    return a
