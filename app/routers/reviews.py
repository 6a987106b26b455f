from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.crud import review as crud
from app.database import get_db
from app.schemas.review import ReviewResponse

router = APIRouter()


@router.get("/", response_model=List[ReviewResponse])
def read_reviews(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    return crud.get_reviews(db, skip=skip, limit=limit)
