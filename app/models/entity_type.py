# app/models/entity_type.py

import enum


class EntityType(str, enum.Enum):
    """Catalog tables a polymorphic entity_id can point at"""

    movie = "movie"
    music = "music"
    short = "short"
