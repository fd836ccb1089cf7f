from slowapi import Limiter
from slowapi.util import get_remote_address

from dayflow.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
