# create_tables.py
import sys

from taskboard.config.security import SecurityConfig
from taskboard.database import Base, SessionLocal, engine, DATABASE_URL
from taskboard.services.bootstrap import create_tables, ensure_admin


def reset_tables():
    """Drop every table known to the models"""
    import taskboard.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    print("🗑️  Existing tables dropped")


def main():
    try:
        if "--reset" in sys.argv:
            reset_tables()

        create_tables()
        print(f"✅ All tables created successfully on {DATABASE_URL.split('://')[0]}")

        db = SessionLocal()
        try:
            admin = ensure_admin(db)
        finally:
            db.close()

        if admin:
            print("✅ Default admin user created!")
            print(f"   Username: {admin.username}")
            print(f"   Password: {SecurityConfig.BOOTSTRAP_ADMIN['password']}")
        else:
            print("ℹ️  Users already exist, admin bootstrap skipped")
    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
