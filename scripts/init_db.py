"""Initialize the database - creates all tables and the default admin user."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eos_api.config import settings
from eos_api.database import Database
from eos_api.models.user import User
from eos_api.services.auth_service import hash_password


def init_db():
    database = Database(settings.DATABASE_URL)
    print("Creating all database tables...")
    database.create_all()

    db = database.SessionLocal()
    try:
        existing = db.query(User).filter(User.login_id == settings.DEFAULT_ADMIN_LOGIN_ID).first()
        if existing:
            print(f"Admin user '{existing.login_id}' already exists. Skipping.")
        else:
            db.add(User(
                name=settings.DEFAULT_ADMIN_NAME,
                login_id=settings.DEFAULT_ADMIN_LOGIN_ID,
                password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
                role="admin",
                department_id=None,
            ))
            db.commit()
            print(f"Admin user created (login id: {settings.DEFAULT_ADMIN_LOGIN_ID})")
    finally:
        db.close()
        database.dispose()
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
