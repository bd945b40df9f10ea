from sqlalchemy.orm import Session


class BaseRepository:
    """Holds the session; transactions belong to the caller (see database.uow)."""

    def __init__(self, db: Session):
        self.db = db

    def flush(self) -> None:
        self.db.flush()
