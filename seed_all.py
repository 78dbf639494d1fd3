"""
Database setup script
Creates the tables and loads the demo workspace
"""

import sys

from dotenv import load_dotenv

load_dotenv()

from takween.config.settings import Settings
from takween.database import Base, SessionLocal, engine
from takween import models  # noqa: F401  registers every table on Base.metadata
from takween.seed import DEMO_PASSWORD, seed_demo_data


def create_tables():
    print(f"\n{'='*60}")
    print("Creating Database Tables")
    print(f"{'='*60}")
    Base.metadata.create_all(bind=engine)
    for table in sorted(Base.metadata.tables):
        print(f"  - {table}")


def main():
    print(f"Database: {Settings.DATABASE_URL}")
    try:
        create_tables()
        db = SessionLocal()
        try:
            created = seed_demo_data(db)
        finally:
            db.close()
    except Exception as e:
        print(f"[ERROR] Database setup failed: {e}")
        return 1

    if created:
        print(f"[SUCCESS] Demo data loaded. Sign in as admin@takween.com / {DEMO_PASSWORD}")
    else:
        print("[SKIP] Employees already exist, demo data not loaded")
    return 0


if __name__ == "__main__":
    sys.exit(main())
