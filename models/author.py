"""
Author Model
"""

import json

from .base import db, utcnow, isoformat


class Author(db.Model):
    """Recipe author. recipe_count is recounted whenever a recipe changes hands."""
    __tablename__ = 'authors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(200), unique=True)
    bio = db.Column(db.Text)
    avatar_url = db.Column(db.String(500))
    social_links = db.Column(db.Text)  # JSON object
    recipe_count = db.Column(db.Integer, default=0, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    recipes = db.relationship('Recipe', back_populates='author', passive_deletes=True)

    @property
    def social_link_map(self):
        if not self.social_links:
            return {}
        try:
            return json.loads(self.social_links)
        except (ValueError, TypeError):
            return {}

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'bio': self.bio,
            'avatar_url': self.avatar_url,
            'social_links': self.social_link_map,
            'recipe_count': self.recipe_count,
            'created_at': isoformat(self.created_at),
        }
