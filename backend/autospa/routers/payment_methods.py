# backend/autospa/routers/payment_methods.py
# GET seeds the default methods on an empty table

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import PaymentMethods as DBPaymentMethods
from ..seed import seed_payment_methods
from ..schemas.payment_methods import (
    PaymentMethodCreate,
    PaymentMethodUpdate,
    PaymentMethodRead,
)

router = APIRouter(prefix="/payment-methods", tags=["payment-methods"])


@router.get("", response_model=list[PaymentMethodRead])
def list_payment_methods(db: Session = Depends(get_db)):
    seed_payment_methods(db)
    return (
        db.query(DBPaymentMethods)
        .filter(DBPaymentMethods.is_active == 1)
        .order_by(DBPaymentMethods.id.asc())
        .all()
    )


@router.post("", response_model=PaymentMethodRead, status_code=status.HTTP_201_CREATED)
def create_payment_method(
    data: PaymentMethodCreate,
    db: Session = Depends(get_db),
):
    obj = DBPaymentMethods(name=data.name)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.put("/{id}", response_model=PaymentMethodRead)
def update_payment_method(
    id: int,
    data: PaymentMethodUpdate,
    db: Session = Depends(get_db),
):
    obj = db.get(DBPaymentMethods, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        if field == "is_active":
            value = int(value)
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment_method(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBPaymentMethods, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    db.delete(obj)
    db.commit()
