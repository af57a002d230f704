# retailers/routes/customers.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.customer import Customer
from retailers.models.users import User, UserRole
from retailers.schemas.customer import CustomerCreate, CustomerUpdate, CustomerResponse
from retailers.services.orders import NO_ADDRESS
from retailers.services.users import list_users
from retailers.utils.entity_store import ConcurrencyConflictError, EntityStore, get_store
from retailers.utils.tokenJWT import require_admin

router = APIRouter(prefix="/customers", tags=["Customers"])


# Registered storefront customers, shown in the shape of customer records
@router.get("", response_model=List[CustomerResponse])
def list_customers(db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return [
        CustomerResponse(
            customer_id=str(u.id),
            partition_key=Customer.PARTITION,
            row_key=str(u.id),
            name=u.first_name,
            surname=u.last_name,
            username=u.username,
            email=u.email,
            shipping_address=u.shipping_address or NO_ADDRESS,
        )
        for u in list_users(db)
        if u.role == UserRole.CUSTOMER.value
    ]


# Customer records of the legacy store, the ones legacy orders are placed for
@router.get("/legacy", response_model=List[CustomerResponse])
def list_legacy_customers(
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    return sorted(store.get_all(Customer), key=lambda c: (c.surname.casefold(), c.name.casefold()))


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    customer = store.get(Customer, Customer.PARTITION, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    customer = Customer(**payload.model_dump())
    return store.add(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    customer = store.get(Customer, Customer.PARTITION, customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    for field, value in payload.model_dump(exclude={"etag"}).items():
        setattr(customer, field, value)
    try:
        return store.update(customer, payload.etag)
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: str,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    if not store.delete(Customer, Customer.PARTITION, customer_id):
        raise HTTPException(status_code=404, detail="Customer not found")
