"""
Create the default admin account for development.

Default credentials: admin / admin123. Change them in production!
"""

import logging

from pymongo.database import Database

from database import DatabaseManager
from env import MONGODB_DATABASE_NAME, MONGODB_URI
from models.admin import Admin
from services.auth import hash_password

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "admin"
DEFAULT_PASSWORD = "admin123"
DEFAULT_DISPLAY_NAME = "Administrator"


def seed_admin(
    database: Database,
    username: str = DEFAULT_USERNAME,
    password: str = DEFAULT_PASSWORD,
    display_name: str = DEFAULT_DISPLAY_NAME,
) -> bool:
    """
    Insert the admin account unless it already exists.

    Args:
        database: MongoDB database instance
        username: Login name
        password: Plain-text password, stored as a bcrypt hash
        display_name: Name shown in the dashboard

    Returns:
        True if the admin was created, False if it already existed
    """
    admins = database["admins"]
    username = username.strip().lower()

    if admins.find_one({"username": username}):
        logger.info("Admin user already exists: %s", username)
        return False

    admin = Admin(
        username=username,
        password_hash=hash_password(password),
        display_name=display_name,
    )
    admins.insert_one(admin.model_dump(by_alias=True, exclude={"id"}))
    logger.info("Admin user created: %s", username)
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    print(f"Database: {MONGODB_DATABASE_NAME}")

    db_manager = DatabaseManager()
    db_manager.connect(MONGODB_URI, MONGODB_DATABASE_NAME)

    if seed_admin(db_manager.database):
        print("\nAdmin user created!")
        print(f"   Username: {DEFAULT_USERNAME}")
        print(f"   Password: {DEFAULT_PASSWORD}")
        print("\n⚠️  CHANGE THESE IN PRODUCTION!")
    else:
        print("\nAdmin user already exists (password not shown)")

    db_manager.disconnect()
