# app/models/movie.py

import enum
from sqlalchemy import Column, Integer, String, Text, DECIMAL, DateTime, Enum
from sqlalchemy.sql import func
from app.database import Base


class MovieType(str, enum.Enum):
    movie = "movie"
    tv = "tv"


class MovieModel(Base):
    __tablename__ = "movies"

    movie_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    poster_url = Column(Text, nullable=True)
    year = Column(Integer, nullable=True)
    director = Column(String(255), nullable=True)
    rating = Column(DECIMAL(3, 1), default=0)
    duration = Column(Integer, nullable=True, comment="Runtime in minutes")
    type = Column(Enum(MovieType), default=MovieType.movie, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<MovieModel(movie_id={self.movie_id}, title='{self.title}')>"
