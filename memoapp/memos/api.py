import logging
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from memoapp.shared.db import get_db
from memoapp.shared.http import ApiError
from memoapp.memos.schemas import (
    Category,
    CategoryOut,
    MemoCreate,
    MemoUpdate,
    MemoOut,
    MemoList,
    MEMO_CATEGORIES,
)
from memoapp.memos.service import (
    create_memo,
    get_memo,
    list_memos,
    update_memo,
    delete_memo,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/memos", tags=["Memos"])

def _not_found(memo_id: str) -> ApiError:
    logger.warning("memo not found: %s", memo_id)
    return ApiError("Memo not found", status=404)

@router.post("", response_model=MemoOut, status_code=201)
def create(payload: MemoCreate, db: Session = Depends(get_db)):
    return create_memo(db, payload)

@router.get("", response_model=MemoList)
def list_(
    category: Category | None = Query(None),
    tag: str | None = Query(None),
    q: str | None = Query(None, description="Search title, content and tags"),
    db: Session = Depends(get_db),
):
    items = list_memos(db, category=category.value if category else None, tag=tag, q=q)
    return {"items": items, "total": len(items)}

# declared before /{memo_id} so it is not captured as an id
@router.get("/categories", response_model=list[CategoryOut])
def categories():
    return [{"value": v, "label": label} for v, label in MEMO_CATEGORIES.items()]

@router.get("/{memo_id}", response_model=MemoOut)
def get(memo_id: str, db: Session = Depends(get_db)):
    memo = get_memo(db, memo_id)
    if not memo:
        raise _not_found(memo_id)
    return memo

@router.patch("/{memo_id}", response_model=MemoOut)
def patch(memo_id: str, payload: MemoUpdate, db: Session = Depends(get_db)):
    memo = update_memo(db, memo_id, payload)
    if not memo:
        raise _not_found(memo_id)
    return memo

@router.delete("/{memo_id}", status_code=204)
def delete(memo_id: str, db: Session = Depends(get_db)):
    if not delete_memo(db, memo_id):
        raise _not_found(memo_id)
    return Response(status_code=204)
