import contextlib

from database.database import db_session_scope
from database.repositories.center import CenterRepository


@contextlib.contextmanager
def center_uow(session_factory=None):
    """CenterRepository bound to one transaction from db_session_scope.

    Usage:
        with center_uow() as repo:
            centers = repo.fetch_active_centers_near(location, 10_000)
    """
    with db_session_scope(session_factory) as session:
        yield CenterRepository(session)
