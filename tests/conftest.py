# tests/conftest.py

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import (
    GenreModel,
    MovieGenreModel,
    MovieModel,
    MovieType,
    MusicModel,
    ShortModel,
    UserModel,
)
from app.schemas.user import UserSignup
from app.services.auth_service import AuthService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_account(db, username: str, is_admin: bool = False) -> dict:
    result = AuthService(db).signup(
        UserSignup(email=f"{username}@example.com", username=username, password="Secret123")
    )
    if is_admin:
        user_model = db.get(UserModel, result.user.user_id)
        user_model.is_admin = True
        db.commit()
    return {
        "id": result.user.user_id,
        "email": result.user.email,
        "username": username,
        "password": "Secret123",
        "access_token": result.access_token,
        "refresh_token": result.refresh_token,
        "headers": auth_headers(result.access_token),
    }


@pytest.fixture
def user(db):
    return create_account(db, "alice")


@pytest.fixture
def other_user(db):
    return create_account(db, "bobby")


@pytest.fixture
def admin(db):
    return create_account(db, "admin", is_admin=True)


def add_movie(db, title: str, genres=(), **fields) -> MovieModel:
    movie = MovieModel(title=title, **fields)
    db.add(movie)
    db.flush()
    for name in genres:
        genre = db.query(GenreModel).filter_by(name=name).one_or_none()
        if genre is None:
            genre = GenreModel(name=name)
            db.add(genre)
            db.flush()
        db.add(MovieGenreModel(movie_id=movie.movie_id, genre_id=genre.genre_id))
    db.commit()
    db.refresh(movie)
    return movie


@pytest.fixture
def movies(db):
    return [
        add_movie(
            db, "Inception", ["Sci-Fi", "Action"], year=2010, director="Christopher Nolan",
            type=MovieType.movie, duration=148,
        ),
        add_movie(
            db, "Interstellar", ["Sci-Fi"], year=2014, director="Christopher Nolan",
            type=MovieType.movie, duration=169,
        ),
        add_movie(
            db, "Dark", ["Thriller"], year=2017, director="Baran bo Odar",
            type=MovieType.tv, description="A time travel mystery",
        ),
    ]


@pytest.fixture
def music(db):
    tracks = [
        MusicModel(
            title="Blinding Lights", artist="The Weeknd", album="After Hours",
            genre="Pop", duration=200, plays=50,
        ),
        MusicModel(
            title="Levitating", artist="Dua Lipa", album="Future Nostalgia",
            genre="Pop", duration=203, plays=10,
        ),
        MusicModel(
            title="So What", artist="Miles Davis", album="Kind of Blue",
            genre="Jazz", duration=562,
        ),
    ]
    db.add_all(tracks)
    db.commit()
    for track in tracks:
        db.refresh(track)
    return tracks


@pytest.fixture
def shorts(db):
    clips = [
        ShortModel(
            title="Nolan behind the scenes", video_url="https://cdn.example.com/s1.mp4", duration=45
        ),
        ShortModel(title="Cat plays piano", video_url="https://cdn.example.com/s2.mp4", duration=30),
    ]
    db.add_all(clips)
    db.commit()
    for clip in clips:
        db.refresh(clip)
    return clips
