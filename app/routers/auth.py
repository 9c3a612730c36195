import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import MIN_PASSWORD_LENGTH
from app.core.current_user import get_current_user
from app.core.deps import get_db
from app.core.permissions import require_capability
from app.core.security import hash_password, token_for_user, verify_password
from app.core.timeutil import utcnow
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest
from app.schemas.common import Message
from app.schemas.user import PasswordChange, ProfileUpdate, UserCreate, UserRead

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Email already registered"},
    },
)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    email = payload.email.lower()
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email",
        )

    user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=email,
        hashed_password=hash_password(payload.password),
        role=payload.role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email",
        )
    db.refresh(user)
    logger.info("Registered user %s as %s", user.id, user.role)

    return {
        "message": "User created successfully",
        "token": token_for_user(user),
        "user": user,
    }


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        401: {"description": "Invalid email or password"},
        403: {"description": "Account is deactivated"},
    },
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    return {
        "message": "Login successful",
        "token": token_for_user(user),
        "user": user,
    }


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/profile", response_model=UserRead)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = payload.model_dump(exclude_unset=True)

    if data.get("email"):
        data["email"] = data["email"].lower()
        taken = (
            db.query(User)
            .filter(User.email == data["email"], User.id != current_user.id)
            .first()
        )
        if taken:
            raise HTTPException(status_code=400, detail="Email is already in use")

    for field, value in data.items():
        if value is None and field in ("first_name", "last_name", "email"):
            continue
        setattr(current_user, field, value)
    current_user.updated_at = utcnow()

    db.commit()
    db.refresh(current_user)
    return current_user


@router.put("/change-password", response_model=Message)
def change_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if len(payload.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )

    if not verify_password(payload.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    current_user.hashed_password = hash_password(payload.new_password)
    current_user.updated_at = utcnow()
    db.commit()
    return {"message": "Password updated successfully"}


@router.get("/students", response_model=list[UserRead])
def list_students(
    db: Session = Depends(get_db),
    _: User = Depends(require_capability("students:list")),
):
    return (
        db.query(User)
        .filter(User.role == UserRole.STUDENT.value)
        .order_by(User.last_name.asc(), User.first_name.asc())
        .all()
    )
