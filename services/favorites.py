"""
Favorites Service

Saved recipes per visitor. (user_id, recipe_id) is unique.
"""

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from constants.validation import MAX_LENGTHS
from models import db, Recipe, UserFavorite
from .errors import ConstraintViolation, MissingReference
from .transaction import write_transaction


def _check_user_id(user_id):
    user_id = (user_id or '').strip()
    if not user_id or len(user_id) > MAX_LENGTHS['user_id']:
        raise ConstraintViolation("A user id of 1-100 characters is required")
    return user_id


def add_favorite(user_id, recipe_id):
    user_id = _check_user_id(user_id)
    with write_transaction(f"favorite recipe {recipe_id} for {user_id}") as session:
        if session.get(Recipe, recipe_id) is None:
            raise MissingReference(f"Recipe {recipe_id} not found")

        favorite = UserFavorite(user_id=user_id, recipe_id=recipe_id)
        session.add(favorite)
        session.flush()
    return favorite


def remove_favorite(user_id, recipe_id):
    user_id = _check_user_id(user_id)
    with write_transaction(f"unfavorite recipe {recipe_id} for {user_id}") as session:
        favorite = session.scalar(
            select(UserFavorite).where(
                UserFavorite.user_id == user_id,
                UserFavorite.recipe_id == recipe_id,
            )
        )
        if favorite is None:
            raise MissingReference(f"Recipe {recipe_id} is not a favorite of {user_id}")
        session.delete(favorite)


def list_favorites(user_id):
    user_id = _check_user_id(user_id)
    stmt = (
        select(UserFavorite)
        .where(UserFavorite.user_id == user_id)
        .options(joinedload(UserFavorite.recipe).joinedload(Recipe.author))
        .order_by(UserFavorite.created_at.desc(), UserFavorite.id.desc())
    )
    return list(db.session.scalars(stmt))
