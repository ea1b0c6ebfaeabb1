import logging

from codeqna.config import settings
from codeqna.crud import crud_user
from codeqna.database import Base, SessionLocal, engine
from codeqna.schemas.user import UserCreate
import codeqna.models  # noqa: F401  registers every model on Base.metadata

logger = logging.getLogger(__name__)


def seed_admin(db) -> None:
    """Create the configured admin account if it does not exist yet."""
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        return

    existing = crud_user.get_by_email(db, settings.ADMIN_EMAIL)
    if existing:
        if existing.role != "admin":
            crud_user.update(db, db_obj=existing, obj_in={"role": "admin"})
            logger.info(f"Promoted {existing.email} to admin")
        return

    admin_in = UserCreate(
        name=settings.ADMIN_NAME,
        email=settings.ADMIN_EMAIL,
        password=settings.ADMIN_PASSWORD,
    )
    admin = crud_user.create_user(db, user_in=admin_in, role="admin")
    logger.info(f"Created admin user id={admin.id}")


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")

    db = SessionLocal()
    try:
        seed_admin(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
