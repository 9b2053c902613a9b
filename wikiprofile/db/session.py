import logging
from typing import Any

from sqlmodel import Session, SQLModel, create_engine, select

from wikiprofile.api.user import user_service
from wikiprofile.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(url: str) -> Any:
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    # Configure engine with connection pool and SSL settings
    return create_engine(
        url,
        connect_args={
            "sslmode": settings.POSTGRES_SSL_MODE,
            "connect_timeout": 10,
        },
        pool_pre_ping=True,  # Enable connection health checks
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,  # Recycle connections after 1 hour
    )


engine = build_engine(str(settings.SQLALCHEMY_DATABASE_URI))


def create_tables() -> None:
    # Deployed databases are managed by Alembic; this is for local runs
    import wikiprofile.db.base  # noqa: F401

    SQLModel.metadata.create_all(engine)


def init_db(session: Session) -> None:
    """Make sure the first superuser exists with the admin role."""
    from wikiprofile.api.user.user_model import Role, User
    from wikiprofile.api.user.user_schema import UserCreate

    if not settings.FIRST_SUPERUSER:
        return

    user = session.exec(
        select(User).where(User.username == settings.FIRST_SUPERUSER)
    ).first()
    if not user:
        user_in = UserCreate(
            username=settings.FIRST_SUPERUSER,
            email=f"{settings.FIRST_SUPERUSER}@{settings.LOCAL_EMAIL_DOMAIN}",
            password=settings.FIRST_SUPERUSER_PASSWORD,
            role=Role.ADMIN,
        )
        user = user_service.create_user(session=session, user_create=user_in)
        logger.info(f"Created first superuser '{settings.FIRST_SUPERUSER}'")
    elif user.role != Role.ADMIN:
        user.role = Role.ADMIN
        session.add(user)
        session.commit()
        logger.info(f"Restored admin role for '{settings.FIRST_SUPERUSER}'")
