"""
Credential helpers: password hashing, access tokens and generated login ids.
"""
import secrets
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from dayflow.core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Ambiguous glyphs (0/O, 1/l/I) are left out of generated passwords
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789@#$%"
TEMP_PASSWORD_LENGTH = 12


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = dict(data)
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire, "type": "access"})
    if "sub" in to_encode:
        to_encode["sub"] = str(to_encode["sub"])
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode a token. Returns the payload, {"error": "TOKEN_EXPIRED"} for an
    expired token, or None when the token is invalid.
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except jwt.InvalidTokenError as e:
        logger.debug(f"Token rejected: {e}")
        return None


def generate_login_id(company_code: str, first_name: str, last_name: str, joining_year: int, serial_number: int) -> str:
    """e.g. DF + JDO + 2025 + 0007 -> DFJDO20250007"""
    initials = (first_name[:1] + last_name[:2]).upper()
    return f"{company_code}{initials}{joining_year}{serial_number:04d}"


def generate_random_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))

