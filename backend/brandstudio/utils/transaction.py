from contextlib import contextmanager


@contextmanager
def transactional(session):
    """Commit the session on success, roll it back on any error."""
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise
