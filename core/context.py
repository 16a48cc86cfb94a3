# core/context.py
import base64
import hashlib
import time
from dataclasses import dataclass

SHORT_ID_LENGTH = 7


# ============================================================
# 🧵 Contexto por petición (solo para correlación de logs)
# ============================================================
@dataclass(frozen=True)
class RequestContext:
    id: str
    short_id: str
    long_id: str


def new_context() -> RequestContext:
    """
    Genera un identificador de correlación a partir del reloj de alta resolución.
    No garantiza unicidad: no usar para idempotencia ni deduplicación.
    """
    digest = hashlib.sha256(str(time.time_ns()).encode("utf-8")).digest()
    long_id = base64.urlsafe_b64encode(digest).decode("ascii")
    short_id = long_id[:SHORT_ID_LENGTH]
    return RequestContext(id=short_id, short_id=short_id, long_id=long_id)
