from app.db.session import SessionLocal


def get_db():
    """Request-scoped session; anything left uncommitted by a failed request is rolled back."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
