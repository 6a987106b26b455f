from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import logging

from app.config import settings
from app.crud import user as user_crud
from app.database import get_db
from app.models.user import User
from app.schemas.user import (
    OTPVerify,
    SignupResponse,
    Token,
    UserCreate,
    UserResponse,
)
from app.services.auth import (
    authenticate_user,
    create_user_token,
    generate_otp,
    get_current_user,
    get_password_hash,
)
from app.services.email import email_service

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(user: UserCreate, db: Session = Depends(get_db)):
    db_user = user_crud.create_user(
        db,
        name=user.name,
        email=user.email,
        hashed_password=get_password_hash(user.password),
        role=user.role,
        avatar=user.avatar,
    )

    otp = generate_otp()
    db_user.otp_code = otp
    db_user.otp_expires_at = datetime.utcnow() + timedelta(
        minutes=settings.OTP_EXPIRE_MINUTES
    )
    db.commit()

    if not email_service.send_otp_email(
        db_user.email, otp, settings.OTP_EXPIRE_MINUTES
    ):
        logger.warning("OTP email for user %s was not delivered", db_user.id)

    return SignupResponse(
        message="OTP sent to email. Please verify your account.",
        user_id=db_user.id,
    )


@router.post("/verify-otp", response_model=Token)
def verify_otp(data: OTPVerify, db: Session = Depends(get_db)):
    user = user_crud.get_user(db, data.user_id)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid user ID.")

    if (
        not user.otp_code
        or user.otp_code != data.otp
        or not user.otp_expires_at
        or user.otp_expires_at < datetime.utcnow()
    ):
        raise HTTPException(status_code=400, detail="Invalid or expired OTP.")

    user.is_verified = True
    user.otp_code = None
    user.otp_expires_at = None
    db.commit()
    logger.info("User %s verified", user.id)

    return Token(access_token=create_user_token(user))


@router.post("/token", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)
):
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_verified:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account not verified. Please verify your email with OTP.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=create_user_token(user))


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user
