# store/query.py
"""
Modelo de consultas independiente del driver.

Los filtros y actualizaciones se construyen como árboles de nodos inmutables
y solo se traducen a documentos nativos de MongoDB al llamar a ``compile()``.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union

# ============================================================
# 🔹 Predicados hoja (un solo campo)
# ============================================================
@dataclass(frozen=True)
class Eq:
    key: str
    value: Any

    def compile(self) -> Dict[str, Any]:
        return {self.key: self.value}


@dataclass(frozen=True)
class Neq:
    key: str
    value: Any

    def compile(self) -> Dict[str, Any]:
        return {self.key: {"$ne": self.value}}


@dataclass(frozen=True)
class Lt:
    key: str
    value: Any

    def compile(self) -> Dict[str, Any]:
        return {self.key: {"$lt": self.value}}


@dataclass(frozen=True)
class Lte:
    key: str
    value: Any

    def compile(self) -> Dict[str, Any]:
        return {self.key: {"$lte": self.value}}


@dataclass(frozen=True)
class Gt:
    key: str
    value: Any

    def compile(self) -> Dict[str, Any]:
        return {self.key: {"$gt": self.value}}


@dataclass(frozen=True)
class Gte:
    key: str
    value: Any

    def compile(self) -> Dict[str, Any]:
        return {self.key: {"$gte": self.value}}


# ============================================================
# 🔹 Predicados compuestos
# ============================================================
# Una lista vacía se compila tal cual ({"$and": []}); MongoDB la rechaza.
@dataclass(frozen=True)
class And:
    children: Sequence["Predicate"] = ()

    def compile(self) -> Dict[str, Any]:
        return {"$and": [child.compile() for child in self.children]}


@dataclass(frozen=True)
class Or:
    children: Sequence["Predicate"] = ()

    def compile(self) -> Dict[str, Any]:
        return {"$or": [child.compile() for child in self.children]}


Predicate = Union[Eq, Neq, Lt, Lte, Gt, Gte, And, Or]


# ============================================================
# 🔹 Operadores de actualización
# ============================================================
@dataclass(frozen=True)
class Set:
    """Reemplaza los campos indicados; las claves usan notación con puntos."""

    fields: Dict[str, Any] = field(default_factory=dict)

    def compile(self) -> Dict[str, Any]:
        return {"$set": dict(self.fields)}


UpdateOperator = Union[Set]


# ============================================================
# 🔹 Contenedores usados por el store
# ============================================================
@dataclass(frozen=True)
class Filter:
    root: Optional[Predicate] = None
    limit: int = 0  # 0 = sin límite

    def compile(self) -> Dict[str, Any]:
        if self.root is None:
            return {}
        return self.root.compile()


@dataclass(frozen=True)
class Update:
    root: Optional[UpdateOperator] = None

    def compile(self) -> Dict[str, Any]:
        if self.root is None:
            return {}
        return self.root.compile()
