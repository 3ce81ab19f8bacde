"""
Script to recreate the database schema and load the demo data.
Development only: every table is dropped first.
"""
from app.core.database import SessionLocal, engine
from app.models import Base
from app.services.seed import DEMO_EMAIL, DEMO_PASSWORD, seed_demo


def recreate_db():
    print("Recreating database...")

    print("Dropping existing tables...")
    Base.metadata.drop_all(bind=engine)

    print("Creating tables...")
    Base.metadata.create_all(bind=engine)

    print("Seeding demo data...")
    db = SessionLocal()
    try:
        seed_demo(db)
    except Exception as e:
        print(f"Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        db.close()

    print("Database recreated successfully!")
    print("\nLogin credentials:")
    print(f"   Email: {DEMO_EMAIL}")
    print(f"   Password: {DEMO_PASSWORD}")


if __name__ == "__main__":
    recreate_db()
