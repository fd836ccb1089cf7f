import re
import html
import base64
import hashlib
import logging
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken
from dayflow.core.config import settings

logger = logging.getLogger(__name__)

# Fernet wants a 32-byte urlsafe key; derive one so any configured string works
_cipher = Fernet(base64.urlsafe_b64encode(hashlib.sha256(settings.encryption_key.encode()).digest()))

def encrypt_data(data: Optional[str]) -> Optional[str]:
    """Encrypt sensitive string data."""
    if not data:
        return data
    try:
        return _cipher.encrypt(data.encode()).decode()
    except Exception as e:
        logger.error(f"Encryption failed: {e}")
        raise ValueError(f"Encryption failed, refusing to store plaintext: {e}") from e

def decrypt_data(encrypted_data: Optional[str]) -> Optional[str]:
    """Decrypt sensitive string data."""
    if not encrypted_data:
        return encrypted_data
    try:
        return _cipher.decrypt(encrypted_data.encode()).decode()
    except InvalidToken:
        logger.warning("Decryption failed (possibly not encrypted)")
        return encrypted_data

def sanitize_input(text: Optional[str]) -> Optional[str]:
    """Basic input sanitization to prevent XSS."""
    if not isinstance(text, str):
        return text
    # Remove script blocks, then escape what is left
    stripped = re.sub(r'<script.*?>.*?</script>', '', text, flags=re.DOTALL | re.IGNORECASE)
    return html.escape(stripped)
