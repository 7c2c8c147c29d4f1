from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from tasklinks.core.database import get_db
from tasklinks.schemas.relation import RelationResponse
from tasklinks.services import relation_service

router = APIRouter(prefix="/relations", tags=["relations"])

@router.get("", response_model=List[RelationResponse])
def list_relations(db: Session = Depends(get_db)):
    return relation_service.get_all(db)
