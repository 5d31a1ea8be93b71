from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from raumbuchung.config import settings


connect_args = {}
if settings.database_url.startswith("sqlite"):
    # FastAPI führt sync-Endpunkte im Threadpool aus
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
