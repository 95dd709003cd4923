"""Seed the database with demo departments, users, jobs and tasks."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime, timedelta

from eos_api.config import settings
from eos_api.database import Database
from eos_api.models.department import Department
from eos_api.models.job import Job
from eos_api.models.task import Task
from eos_api.models.user import User
from eos_api.services.auth_service import hash_password


def seed():
    database = Database(settings.DATABASE_URL)
    database.create_all()
    db = database.SessionLocal()
    try:
        if db.query(Department).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Departments
        engineering = Department(name="Engineering", code="ENG")
        design = Department(name="Design", code="DSN")
        db.add_all([engineering, design])
        db.flush()

        # Users
        user_hash = hash_password(settings.SEED_USER_PASSWORD)
        admin = db.query(User).filter(User.role == "admin").first()
        if admin is None:
            admin = User(
                name=settings.DEFAULT_ADMIN_NAME,
                login_id=settings.DEFAULT_ADMIN_LOGIN_ID,
                password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
                role="admin",
            )
            db.add(admin)
        users = [
            User(name="Budi Santoso", login_id="budi", password_hash=user_hash,
                 role="user", department_id=engineering.id),
            User(name="Sari Wulandari", login_id="sari", password_hash=user_hash,
                 role="user", department_id=engineering.id),
            User(name="Dewi Lestari", login_id="dewi", password_hash=user_hash,
                 role="user", department_id=design.id),
        ]
        db.add_all(users)
        db.flush()

        # Jobs: category -> parent -> sub-parent
        web = Job(user_id=admin.id, category="Web Development", department_id=engineering.id)
        db.add(web)
        db.flush()
        backend = Job(user_id=admin.id, category="Backend", parent=web.id, department_id=engineering.id)
        frontend = Job(user_id=admin.id, category="Frontend", parent=web.id, department_id=engineering.id)
        db.add_all([backend, frontend])
        db.flush()
        api = Job(user_id=admin.id, category="REST API", parent=backend.id, department_id=engineering.id)
        ui = Job(user_id=admin.id, category="UI Design", department_id=design.id)
        db.add_all([api, ui])
        db.flush()

        # Tasks
        now = datetime.utcnow()
        tasks = [
            Task(user_id=users[0].id, plan_by=users[0].id, title="Design login endpoint",
                 priority="high", status="in_progress", job_id=api.id, due_date=now + timedelta(days=3)),
            Task(user_id=users[1].id, plan_by=admin.id, title="Board view layout",
                 priority="medium", status="plan", job_id=frontend.id, due_date=now + timedelta(days=7)),
            Task(user_id=users[2].id, plan_by=users[2].id, title="Dashboard mockups",
                 priority="low", status="completed", job_id=ui.id,
                 completed_by=users[2].id, completed_date=now),
        ]
        db.add_all(tasks)
        db.commit()
        print("Seed data inserted.")
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    seed()
