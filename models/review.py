"""
Review Model

Contains the Review model. Inserting or deleting a review recomputes the
owning recipe's rating and review_count.
"""

from constants.validation import MIN_RATING, MAX_RATING, VALID_REVIEW_STATUSES
from .base import db, utcnow, isoformat, in_list


class Review(db.Model):
    """A reader's 1-5 star review of a recipe."""
    __tablename__ = 'reviews'
    __table_args__ = (
        db.CheckConstraint(f'rating >= {MIN_RATING} AND rating <= {MAX_RATING}', name='ck_reviews_rating'),
        db.CheckConstraint(in_list('status', VALID_REVIEW_STATUSES), name='ck_reviews_status'),
    )

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    reviewer_name = db.Column(db.String(100), nullable=False)
    reviewer_email = db.Column(db.String(200))
    rating = db.Column(db.Integer, nullable=False, index=True)
    title = db.Column(db.String(200))
    comment = db.Column(db.Text)
    helpful_count = db.Column(db.Integer, default=0, nullable=False)
    status = db.Column(db.String(10), default='published', nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    recipe = db.relationship('Recipe', back_populates='reviews')

    def to_dict(self):
        # reviewer_email is never exposed
        return {
            'id': self.id,
            'reviewer_name': self.reviewer_name,
            'rating': self.rating,
            'title': self.title,
            'comment': self.comment,
            'helpful_count': self.helpful_count,
            'created_at': isoformat(self.created_at),
        }
