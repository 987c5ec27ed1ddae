# File: app/routers/auth.py

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.models.authority import Authority, MunicipalityType
from app.schemas.auth import RegisterIn, LoginIn, AuthResponse, AuthorityOut
from app.core.security import hash_password, verify_password, make_token, get_current_authority

router = APIRouter(prefix="/auth", tags=["auth"])

def _authority_out(a: Authority) -> AuthorityOut:
    return AuthorityOut(
        id=a.id,
        name=a.name,
        email=a.email,
        phone=a.phone,
        city=a.city,
        municipality_type=a.municipality_type.value,
    )

@router.post("/register", response_model=AuthResponse, status_code=201)
def register(body: RegisterIn, db: Session = Depends(get_db)):
    try:
        municipality_type = MunicipalityType(body.municipality_type)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid municipality type")

    email = body.email.lower()
    if db.query(Authority).filter(Authority.email == email).first():
        raise HTTPException(status_code=400, detail="User with this email already exists")

    authority = Authority(
        name=body.name.strip(),
        email=email,
        hashed_password=hash_password(body.password),
        phone=body.phone,
        city=body.city.strip(),
        municipality_type=municipality_type,
    )
    db.add(authority)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User with this email already exists")
    db.refresh(authority)
    logging.info(f"Authority {authority.id} registered for {authority.city}")

    return {
        "message": "User registered successfully",
        "token": make_token(authority.id, authority.email),
        "user": _authority_out(authority),
    }

@router.post("/login", response_model=AuthResponse)
def login(body: LoginIn, db: Session = Depends(get_db)):
    authority = db.query(Authority).filter(Authority.email == body.email.lower()).first()
    if not authority or not authority.hashed_password:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not verify_password(body.password, authority.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {
        "message": "Login successful",
        "token": make_token(authority.id, authority.email),
        "user": _authority_out(authority),
    }

@router.get("/me", response_model=AuthorityOut)
def me(current: Authority = Depends(get_current_authority)):
    return _authority_out(current)
