from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from takween.config.settings import Settings

DATABASE_URL = Settings.DATABASE_URL

# SQLite needs the same-thread check off for the threadpool FastAPI runs sync routes in
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
elif Settings.DATABASE_SSL:
    engine = create_engine(DATABASE_URL, connect_args={"sslmode": "require"})
else:
    engine = create_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Imported wherever a DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
