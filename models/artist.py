# models/artist.py
from pydantic import BaseModel


class ArtistInfo(BaseModel):
    """Solo se usa para comprobar que un artista existe."""

    id: str
    name: str = ""
