from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from keycove import encrypt, decrypt

from leads_backend.settings import settings

def decrypt_password(password: str):
  return decrypt(password,settings.PASSWORD_SECRET)

def encrypt_password(password: str):
  return encrypt(password,settings.PASSWORD_SECRET)

def create_access_token(user_id: str, expires_in: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(seconds=expires_in or settings.TOKEN_EXPIRATION_SECONDS)
    return jwt.encode({"sub": user_id, "exp": expire}, settings.TOKEN_SECRET, algorithm=settings.TOKEN_ALGORITHM)

def decode_access_token(token: str) -> Optional[str]:
    """Returns the user id carried by a valid token, None for anything else."""
    try:
        payload = jwt.decode(token, settings.TOKEN_SECRET, algorithms=[settings.TOKEN_ALGORITHM])
    except JWTError:
        return None
    return payload.get("sub")
