from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from marquee.core.config import settings

# SQLite (tests, local runs) needs cross-thread connections for the TestClient
connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
