"""
Search Index Model

One row per recipe holding a lowercased blob of its searchable text.
Rows are replaced wholesale by services.search_index, never edited.
"""

from .base import db, utcnow


class RecipeSearchIndex(db.Model):
    """Flattened, lowercased search text for substring lookups."""
    __tablename__ = 'recipe_search_index'

    id = db.Column(db.Integer, primary_key=True)
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    search_text = db.Column(db.Text, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    recipe = db.relationship('Recipe', back_populates='search_entries')
