"""
Favorite Model

Contains the UserFavorite model. user_id is an opaque string (a session id
for anonymous visitors).
"""

from .base import db, utcnow, isoformat


class UserFavorite(db.Model):
    """A recipe saved by a visitor."""
    __tablename__ = 'user_favorites'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'recipe_id', name='uq_user_favorite'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(100), nullable=False, index=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    recipe = db.relationship('Recipe', back_populates='favorites')

    def to_dict(self):
        return {
            'recipe': self.recipe.to_summary(),
            'saved_at': isoformat(self.created_at),
        }
