from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from app.db.models import KeyValue
from typing import Any

def get_value(db: Session, key: str, for_update: bool = False) -> Any | None:
    stmt = select(KeyValue.value).where(KeyValue.key == key)
    if for_update:
        # Ignored by SQLite, row lock elsewhere
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()

def put_value(db: Session, key: str, value: Any) -> KeyValue:
    row = db.get(KeyValue, key)
    if row is None:
        row = KeyValue(key=key, value=value)
        db.add(row)
    else:
        row.value = value
    db.commit()
    return row

def delete_values(db: Session, *keys: str) -> int:
    res = db.execute(delete(KeyValue).where(KeyValue.key.in_(keys)))
    db.commit()
    return res.rowcount
