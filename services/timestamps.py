"""
Timestamp Maintenance

Stamps updated_at on recipe and category updates. Any value assigned by the
caller in the same unit of work is overridden, and the stored value never
moves backwards for a row, even if the clock does.
"""

from sqlalchemy import inspect

from models.base import utcnow


def _stored_updated_at(obj):
    """updated_at as last loaded from the database, ignoring pending assignments."""
    state = inspect(obj)
    if state.transient or state.pending:
        return None
    history = state.attrs.updated_at.load_history()
    if history.deleted:
        return history.deleted[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


def touch(obj, now=None):
    """Stamp obj.updated_at with the current time and return the stamp."""
    if now is None:
        now = utcnow()
    previous = _stored_updated_at(obj)
    if previous is not None and previous > now:
        now = previous
    obj.updated_at = now
    return now
