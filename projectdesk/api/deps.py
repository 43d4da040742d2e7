import logging
from collections.abc import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from projectdesk.config.settings import get_settings
from projectdesk.db.repositories.user_repo import UserRepository
from projectdesk.db.session import get_sessionmaker
from projectdesk.services.actor import ANONYMOUS, Actor

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    session_factory = get_sessionmaker()
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_current_actor(request: Request, db: Session = Depends(get_db)) -> Actor:
    """Resolve the acting user from the configured header; unknown logins are anonymous."""
    login = request.headers.get(get_settings().actor_header, "").strip()
    if not login:
        return ANONYMOUS
    user = UserRepository(db).get_by_login(login)
    if user is None:
        logger.info("Unknown login %r in actor header, treating as anonymous", login)
        return ANONYMOUS
    return Actor.from_user(user)
