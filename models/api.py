# models/api.py
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ============================================================
# 🔹 Envoltorio normalizado de la petición HTTP
# ============================================================
class APIRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str = ""
    path: str = ""
    method: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    path_parameters: Dict[str, str] = Field(default_factory=dict)
    query_parameters: Dict[str, str] = Field(default_factory=dict)
    body: str = ""


# ============================================================
# 🔹 Respuesta que el router escribe en el transporte
# ============================================================
class APIResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Any] = None
