from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from tasklinks.core.config import settings


def _connect_args(database_url: str) -> dict:
    # SQLite: la session vit dans le threadpool de FastAPI
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Dépendance sessionDB: une session par requête"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
