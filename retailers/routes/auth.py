# retailers/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from retailers.database import get_db
from retailers.models.users import User
from retailers.schemas import user as schemas
from retailers.services import users as user_service
from retailers.utils.audit import write_log
from retailers.utils.tokenJWT import create_access_token, get_current_user

router = APIRouter(tags=["Auth"])

# Register a new customer account
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    try:
        new_user = user_service.register_user(
            db,
            username=payload.username,
            email=payload.email,
            password=payload.password,
            first_name=payload.first_name,
            last_name=payload.last_name,
            shipping_address=payload.shipping_address,
        )
    except user_service.DuplicateUserError as e:
        write_log(
            db,
            user_id=None,
            action="REGISTER",
            resource="auth",
            status="FAIL",
            ip=request.client.host,
            meta={"username": payload.username, "reason": str(e)},
        )
        raise HTTPException(status_code=400, detail=f"{e.field} is already registered")

    # Log successful registration event
    write_log(
        db,
        user_id=new_user.id,
        action="REGISTER",
        resource="auth",
        status="SUCCESS",
        ip=request.client.host,
        meta={"username": new_user.username},
    )
    return new_user


# Authenticate by username or email and issue a JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    db_user = user_service.authenticate_user(db, payload.username_or_email, payload.password)

    # Validate credentials and log failure on error
    if not db_user:
        write_log(db, user_id=None, action="LOGIN", resource="auth",
                  status="FAIL", ip=request.client.host, meta={"login": payload.username_or_email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username/email or password")

    user_service.update_last_login(db, db_user.id)

    # Generate access token
    access_token = create_access_token(data={"sub": str(db_user.id), "name": db_user.username, "role": db_user.role})

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=request.client.host, meta={"username": db_user.username, "role": db_user.role})

    return {"access_token": access_token, "token_type": "bearer"}


# Retrieve current authenticated user details
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
