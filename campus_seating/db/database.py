import os
import urllib.parse

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

load_dotenv()


def buildDatabaseUrl() -> str:
    """DATABASE_URL wins; otherwise compose a PostgreSQL URL from POSTGRES_* vars."""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    user = os.getenv("POSTGRES_USER")
    password = os.getenv("POSTGRES_PASSWORD")
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    name = os.getenv("POSTGRES_DB")

    encoded_password = urllib.parse.quote_plus(password) if password else ""
    return f"postgresql://{user}:{encoded_password}@{host}:{port}/{name}"


def createDbEngine(url: str):
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across threads (TestClient)
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, pool_pre_ping=True)


DATABASE_URL = buildDatabaseUrl()

engine = createDbEngine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()
