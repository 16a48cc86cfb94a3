# core/injector.py
from dataclasses import dataclass
from typing import Optional

from pymongo.database import Database

from core.errors import DependencyResolutionError


# ============================================================
# 💉 Dependencias compartidas por todos los handlers
# ============================================================
@dataclass(frozen=True)
class Injector:
    database: Optional[Database]


def resolve_database(injector: Optional[Injector]) -> Database:
    """Devuelve el handle de base de datos inyectado o falla como error de servidor."""
    if injector is None:
        raise DependencyResolutionError("no injector registered for this route")
    if injector.database is None:
        raise DependencyResolutionError("injector carries no database handle")
    return injector.database
