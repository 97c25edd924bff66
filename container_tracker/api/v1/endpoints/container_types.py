"""Container type reference data endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from container_tracker.db.session import get_db
from container_tracker.models import ContainerType
from container_tracker.schemas.container import ContainerTypeRead

router: APIRouter = APIRouter()


@router.get("", response_model=list[ContainerTypeRead], summary="List container types")
def list_container_types(db: Session = Depends(get_db)) -> list[ContainerType]:
    return db.scalars(select(ContainerType).order_by(ContainerType.id)).all()
