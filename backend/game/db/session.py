from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import sessionmaker

from game.core.settings import settings

DATABASE_URL = settings.DATABASE_URL


def enable_sqlite_pragmas(engine: Engine) -> None:
    # SQLite's LIKE ignores ASCII case by default; name/title filters are case-sensitive.
    # The pragma is deprecated upstream but still honoured by current SQLite builds.
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA case_sensitive_like=ON")
        cursor.close()


connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

if DATABASE_URL.startswith("sqlite"):
    enable_sqlite_pragmas(engine)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
