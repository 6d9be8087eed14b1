"""Database factory functions for creating database instances."""

from bizledger.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL.

    The default URL comes from bizledger.config.default_database_url().

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        SQLAlchemyDatabase instance
    """
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: str) -> SQLAlchemyDatabase:
    """Create a SQLite database instance for a file path.

    Args:
        database_path: Path to SQLite database file

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    return create_database(f"sqlite:///{database_path}")
