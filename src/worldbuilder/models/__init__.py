"""Database models for World Builder.

SQLAlchemy models for:
- Users
- Series and books (the owner entities)
- World-building resources (battles, characters, creatures, ...)

All models use async SQLAlchemy; asyncpg for PostgreSQL, aiosqlite for SQLite.
"""

from .database import Base, close_db, create_all, get_engine, get_session, init_db
from .library import Book, Genre, Series
from .user import User
from .world import (
    Battle,
    Character,
    CharacterGender,
    CharacterTitle,
    CharacterType,
    Creature,
    Group,
    HeightMetric,
    MagicSystem,
    Plot,
    PlotReference,
    Setting,
    Technology,
    Transport,
    Weapon,
    WeightMetric,
    World,
)

__all__ = [
    # Database
    "Base",
    "init_db",
    "create_all",
    "get_session",
    "get_engine",
    "close_db",
    # Users
    "User",
    # Owners
    "Series",
    "Book",
    "Genre",
    # Resources
    "Battle",
    "Character",
    "Creature",
    "Setting",
    "Transport",
    "Group",
    "MagicSystem",
    "Plot",
    "PlotReference",
    "Technology",
    "Weapon",
    "World",
    # Enums
    "CharacterTitle",
    "CharacterType",
    "CharacterGender",
    "HeightMetric",
    "WeightMetric",
]
