# packhub/routers/suppliers.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from ..core.db import get_db
from ..schemas.supplier import (
    SupplierProfileCreate, SupplierProfileUpdate, SupplierProfileRead,
    SupplierSearch, SupplierSearchResult,
)
from ..services.supplier_service import (
    create_supplier_profile, update_supplier_profile, search_suppliers,
)

router = APIRouter(tags=["suppliers"])

@router.post("/supplier-profiles", response_model=SupplierProfileRead, status_code=status.HTTP_201_CREATED)
def create_supplier_profile_ep(payload: SupplierProfileCreate, db: Session = Depends(get_db)):
    return create_supplier_profile(db, **payload.model_dump())

@router.patch("/supplier-profiles/{profile_id}", response_model=SupplierProfileRead)
def update_supplier_profile_ep(
    payload: SupplierProfileUpdate,
    profile_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    return update_supplier_profile(db, profile_id=profile_id, changes=payload.model_dump(exclude_unset=True))

@router.post("/suppliers/search", response_model=List[SupplierSearchResult])
def search_suppliers_ep(filters: SupplierSearch, db: Session = Depends(get_db)):
    # read-only; POST so list filters travel in a JSON body
    return search_suppliers(db, **filters.model_dump())
