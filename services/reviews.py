"""
Review Service

Review writes and review statistics. Every write recomputes the owning
recipe's rating and review_count before committing.
"""

from sqlalchemy import case, func, select

from constants.validation import MIN_RATING, MAX_RATING, VALID_REVIEW_STATUSES, MAX_LENGTHS
from models import db, Recipe, Review
from utils.sanitizer import sanitize_name, sanitize_text
from .aggregates import refresh_recipe_rating
from .errors import ConstraintViolation, MissingReference
from .transaction import write_transaction


def parse_rating(value):
    """Accept 1-5 as int or digit string; anything else is a ConstraintViolation."""
    if isinstance(value, bool):
        raise ConstraintViolation("rating must be an integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int):
        raise ConstraintViolation("rating must be an integer")
    if not MIN_RATING <= value <= MAX_RATING:
        raise ConstraintViolation(f"rating must be between {MIN_RATING} and {MAX_RATING}")
    return value


def _check_status(status):
    if status not in VALID_REVIEW_STATUSES:
        raise ConstraintViolation(f"status must be one of {', '.join(VALID_REVIEW_STATUSES)}")
    return status


def add_review(recipe_id, reviewer_name, rating, reviewer_email=None, title=None,
               comment=None, status='published'):
    """Insert a review and recompute the recipe's rating."""
    rating = parse_rating(rating)
    _check_status(status)
    reviewer_name = sanitize_name(reviewer_name, MAX_LENGTHS['reviewer_name'])
    if not reviewer_name:
        raise ConstraintViolation("reviewer_name is required")

    with write_transaction(f"add review to recipe {recipe_id}") as session:
        if recipe_id is None or session.get(Recipe, recipe_id) is None:
            raise MissingReference(f"Recipe {recipe_id} not found")

        review = Review(
            recipe_id=recipe_id,
            reviewer_name=reviewer_name,
            reviewer_email=sanitize_name(reviewer_email, MAX_LENGTHS['reviewer_email']) or None,
            rating=rating,
            title=sanitize_name(title, MAX_LENGTHS['review_title']) or None,
            comment=sanitize_text(comment, MAX_LENGTHS['review_comment']) or None,
            status=status,
        )
        session.add(review)
        session.flush()

        refresh_recipe_rating(recipe_id)
    return review


def delete_review(review_id):
    with write_transaction(f"delete review {review_id}") as session:
        review = session.get(Review, review_id)
        if review is None:
            raise MissingReference(f"Review {review_id} not found")
        recipe_id = review.recipe_id

        session.delete(review)
        session.flush()

        refresh_recipe_rating(recipe_id)


def set_review_status(review_id, status):
    """Moderate a review (pending/published/rejected)."""
    _check_status(status)
    with write_transaction(f"set review {review_id} status to {status}") as session:
        review = session.get(Review, review_id)
        if review is None:
            raise MissingReference(f"Review {review_id} not found")

        review.status = status
        session.flush()

        refresh_recipe_rating(review.recipe_id)
    return review


def review_statistics(recipe_id):
    """Totals, one-decimal average and star breakdown over published reviews."""
    star_columns = [
        func.count(case((Review.rating == stars, 1))).label(f's{stars}')
        for stars in range(MAX_RATING, MIN_RATING - 1, -1)
    ]
    row = db.session.execute(
        select(func.count(Review.id), func.avg(Review.rating), *star_columns)
        .where(Review.recipe_id == recipe_id, Review.status == 'published')
    ).one()

    total, average = row[0], row[1]
    breakdown = {
        stars: row[2 + i]
        for i, stars in enumerate(range(MAX_RATING, MIN_RATING - 1, -1))
    }
    return {
        'total_reviews': total,
        'average_rating': round(float(average), 1) if average is not None else 0,
        'rating_breakdown': breakdown,
    }
