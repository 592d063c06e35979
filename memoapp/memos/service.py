import logging
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select, desc, or_
from memoapp.memos.models import Memo
from memoapp.memos.schemas import MemoCreate, MemoUpdate

logger = logging.getLogger(__name__)

def _aware(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)

def create_memo(db: Session, payload: MemoCreate) -> Memo:
    now = datetime.now(timezone.utc)
    memo = Memo(
        title=payload.title,
        content=payload.content,
        category=payload.category.value,
        created_at=now,
        updated_at=now,
    )
    memo.tags = payload.tags
    db.add(memo)
    db.commit()
    db.refresh(memo)
    logger.info("memo created: %s", memo.id)
    return memo

def get_memo(db: Session, memo_id: str) -> Memo | None:
    return db.get(Memo, memo_id)

def _like(q: str) -> str:
    escaped = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

def _matches(memo: Memo, needle: str) -> bool:
    needle = needle.casefold()
    return (
        needle in memo.title.casefold()
        or needle in (memo.content or "").casefold()
        or any(needle in t.casefold() for t in memo.tags)
    )

def list_memos(db: Session, category: str | None = None, tag: str | None = None, q: str | None = None) -> list[Memo]:
    stmt = select(Memo)
    if category:
        stmt = stmt.where(Memo.category == category)
    needle = (q or "").strip()
    if needle:
        # tags_json only narrows the rows; tag hits are confirmed on the parsed list below
        like = _like(needle)
        stmt = stmt.where(or_(
            Memo.title.ilike(like, escape="\\"),
            Memo.content.ilike(like, escape="\\"),
            Memo.tags_json.ilike(like, escape="\\"),
        ))
    stmt = stmt.order_by(desc(Memo.created_at))
    rows = list(db.scalars(stmt).all())
    if needle:
        rows = [m for m in rows if _matches(m, needle)]
    if tag:
        # exact match; tags live in a JSON text column
        rows = [m for m in rows if tag in m.tags]
    return rows

def update_memo(db: Session, memo_id: str, payload: MemoUpdate) -> Memo | None:
    memo = db.get(Memo, memo_id)
    if not memo:
        return None
    if payload.title is not None:
        memo.title = payload.title
    if payload.content is not None:
        memo.content = payload.content
    if payload.category is not None:
        memo.category = payload.category.value
    if payload.tags is not None:
        memo.tags = payload.tags
    # updated_at never goes behind created_at, even with clock skew
    memo.updated_at = max(datetime.now(timezone.utc), _aware(memo.created_at))
    db.commit()
    db.refresh(memo)
    logger.info("memo updated: %s", memo.id)
    return memo

def delete_memo(db: Session, memo_id: str) -> bool:
    memo = db.get(Memo, memo_id)
    if not memo:
        return False
    db.delete(memo)
    db.commit()
    logger.info("memo deleted: %s", memo_id)
    return True
