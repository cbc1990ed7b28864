from typing import List
from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy import or_

from models.User import User
from schemas import UserWrite, UserRead
from database import get_db

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def create_user(payload: UserWrite, db: Session = Depends(get_db)):
    """
    Register the profile of a user who signed in through the magic link.
    The id is the uid handed out by the identity provider.
    """
    exists = db.query(User).filter(
        or_(User.id == payload.id, User.email == payload.email)
    ).first()
    if exists:
        raise HTTPException(status_code=409, detail="User id or email already exists")

    new_user = User(
        id=payload.id,
        email=payload.email,
        display_name=payload.display_name,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


@router.get("/", response_model=List[UserRead])
def get_users(db: Session = Depends(get_db)):
    return db.query(User).all()


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
