# app/core/security.py
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import time, jwt
from sqlalchemy.orm import Session
from app.core.config import settings
from passlib.hash import bcrypt_sha256
from app.db.session import get_db
from app.models.authority import Authority
from app.schemas.auth import Actor

ALGO = "HS256"
bearer = HTTPBearer(auto_error=False)

def hash_password(raw: str) -> str:
    return bcrypt_sha256.hash(raw)

def verify_password(raw: str, hashed: str) -> bool:
    return bcrypt_sha256.verify(raw, hashed)

def make_token(authority_id: int, email: str, ttl: Optional[int] = None) -> str:
    now = int(time.time())
    payload = {
        "sub": email,
        "uid": authority_id,
        "iat": now,
        "exp": now + (settings.jwt_expires_in if ttl is None else ttl),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGO)

def _actor_from_payload(payload: dict) -> Actor:
    email = payload.get("sub")
    if not email:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token payload")
    return Actor(user_id=payload.get("uid"), email=email)

def _decode_token(creds: Optional[HTTPAuthorizationCredentials]) -> dict:
    if not creds:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")
    try:
        return jwt.decode(creds.credentials, settings.jwt_secret, algorithms=[ALGO])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Token expired")
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")

def get_current_actor(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Actor:
    return _actor_from_payload(_decode_token(creds))

def get_optional_actor(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[Actor]:
    if not creds:
        return None
    try:
        payload = jwt.decode(creds.credentials, settings.jwt_secret, algorithms=[ALGO])
    except jwt.PyJWTError:
        return None
    if not payload.get("sub"):
        return None
    return Actor(user_id=payload.get("uid"), email=payload["sub"])

def get_current_authority(actor: Actor = Depends(get_current_actor),
                          db: Session = Depends(get_db)) -> Authority:
    authority = db.query(Authority).filter(Authority.email == actor.email).first()
    if not authority:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return authority
