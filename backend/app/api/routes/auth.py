"""
Authentication API endpoints.

Handles registration, login and logout. The JWT session token is set as an
HttpOnly cookie; API clients may send it as a Bearer token instead.
"""

import re
from typing import Literal, Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import (
    create_access_token,
    get_password_hash,
    get_token_subject,
    verify_password,
)
from app.db import crud
from app.db.session import get_db
from app.models import CandidateProfile, RecruiterProfile, User
from app.schemas import CamelModel, UserResponse

logger = get_logger("auth")

router = APIRouter()

# Bearer header is optional; the session cookie is the primary credential
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


# ============== Pydantic Schemas ==============


class UserRegister(CamelModel):
    """Schema for user registration."""

    username: str = Field(min_length=3, max_length=50)
    email: str
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    role: Literal["candidate", "recruiter"] = "candidate"

    # Recruiter profile details
    company: Optional[str] = None
    position: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        email_pattern = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
        if not re.match(email_pattern, v):
            raise ValueError("Invalid email format")
        return v.lower()


class UserLogin(BaseModel):
    username: str
    password: str


class Token(CamelModel):
    """Schema for login response."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============== Helper Functions ==============


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Authenticate a user by username and password."""
    user = crud.get_user_by_username(db, username)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def _set_session_cookie(response: Response, user: User) -> str:
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return token


async def get_current_user(
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    session_token: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user.

    Reads the Bearer header first, then the session cookie.
    Raises 401 if neither holds a valid token for an existing user.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = bearer_token or session_token
    if not token:
        raise credentials_exception

    user_id = get_token_subject(token)
    if user_id is None:
        raise credentials_exception

    user = crud.get_user(db, user_id)
    if user is None:
        raise credentials_exception

    return user


async def require_recruiter(current_user: User = Depends(get_current_user)) -> User:
    """Dependency restricting a route to recruiters."""
    if current_user.role != "recruiter":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Recruiter role required",
        )
    return current_user


async def require_candidate(current_user: User = Depends(get_current_user)) -> User:
    """Dependency restricting a route to candidates."""
    if current_user.role != "candidate":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Candidate role required",
        )
    return current_user


# ============== API Endpoints ==============


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, response: Response, db: Session = Depends(get_db)):
    """
    Register a new user and start a session.

    Candidates get an empty profile, recruiters get a recruiter profile
    with the supplied company and position.
    """
    if crud.get_user_by_username(db, user_data.username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already exists",
        )
    if crud.get_user_by_email(db, user_data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    new_user = User(
        username=user_data.username,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        full_name=user_data.full_name,
        role=user_data.role,
    )
    db.add(new_user)
    db.flush()

    if user_data.role == "candidate":
        db.add(CandidateProfile(
            user_id=new_user.id,
            skills=[],
            experience="",
            education="",
            resume_text="",
            ai_evaluation={},
        ))
    else:
        db.add(RecruiterProfile(
            user_id=new_user.id,
            company=user_data.company or "",
            position=user_data.position or "",
        ))

    db.commit()
    db.refresh(new_user)

    _set_session_cookie(response, new_user)
    logger.info(f"Registered {new_user.role} '{new_user.username}' (id={new_user.id})")
    return new_user


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """Log in with username and password."""
    user = authenticate_user(db, credentials.username, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = _set_session_cookie(response, user)
    return Token(access_token=access_token, user=UserResponse.model_validate(user))


@router.post("/logout")
async def logout(response: Response):
    """End the session by clearing the cookie."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"message": "Logged out"}


@router.get("/user", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current authenticated user."""
    return current_user
