import contextlib
from collections.abc import Iterator

from alembic import command, config
from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bubble_rsvp.config.settings import settings


def create_engine(url: str) -> Engine:
    connect_args = {}
    if "sqlite" in url:
        # FastAPI runs sync routes in a threadpool
        connect_args = {"check_same_thread": False, "timeout": 15}
    return sa_create_engine(
        url,
        connect_args=connect_args,
    )


engine = create_engine(settings.database_url)

session_factory = sessionmaker(engine, expire_on_commit=False)


def run_upgrade(cfg: config.Config | None = None) -> None:
    command.upgrade(cfg or config.Config("alembic.ini"), "head")


def init_db(bind: Engine | None = None) -> None:
    """Create the tables directly from the ORM metadata."""
    from bubble_rsvp.models.base import BaseModel
    from bubble_rsvp.models import sheet_row  # noqa: F401

    BaseModel.metadata.create_all(bind or engine)


@contextlib.contextmanager
def session_manager(
    auto_commit: bool = True, factory: sessionmaker | None = None
) -> Iterator[Session]:
    with (factory or session_factory)() as session:
        try:
            yield session
        except Exception as e:
            session.rollback()
            raise e
        else:
            if auto_commit:
                session.commit()
