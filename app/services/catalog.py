# app/services/catalog.py

from sqlalchemy import select
from sqlalchemy.orm import Session
from app.models.entity_type import EntityType
from app.models.movie import MovieModel
from app.models.music import MusicModel
from app.models.short import ShortModel
from app.core.exceptions import NotFoundError

ENTITY_MODELS = {
    EntityType.movie: (MovieModel, MovieModel.movie_id),
    EntityType.music: (MusicModel, MusicModel.music_id),
    EntityType.short: (ShortModel, ShortModel.short_id),
}


def entity_exists(db: Session, entity_id: int, entity_type: EntityType) -> bool:
    model, pk = ENTITY_MODELS[EntityType(entity_type)]
    stmt = select(pk).where(pk == entity_id)
    return db.execute(stmt).first() is not None


def ensure_entity(db: Session, entity_id: int, entity_type: EntityType) -> None:
    """Raise NotFoundError unless the referenced catalog row exists"""
    if not entity_exists(db, entity_id, entity_type):
        raise NotFoundError(f"{EntityType(entity_type).value.capitalize()} not found")
