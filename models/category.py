"""
Category Model

Contains the Category model. Categories form a tree through parent_id and
carry a denormalized recipe_count kept in step with recipe_categories.
"""

from .base import db, utcnow, isoformat


class Category(db.Model):
    """Recipe category with optional parent and a maintained recipe count."""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(100), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    parent_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True, index=True)
    sort_order = db.Column(db.Integer, default=0, nullable=False)

    # Maintained by services.aggregates, never assigned directly
    recipe_count = db.Column(db.Integer, default=0, nullable=False)

    featured = db.Column(db.Boolean, default=False, nullable=False, index=True)
    meta_title = db.Column(db.String(200))
    meta_description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    parent = db.relationship('Category', remote_side=[id], backref='children')
    recipe_links = db.relationship(
        'RecipeCategory', back_populates='category',
        cascade='all, delete-orphan', passive_deletes=True
    )

    def to_dict(self):
        return {
            'id': self.id,
            'slug': self.slug,
            'name': self.name,
            'description': self.description,
            'image_url': self.image_url,
            'parent_id': self.parent_id,
            'recipe_count': self.recipe_count,
            'featured': bool(self.featured),
            'sort_order': self.sort_order,
            'meta_title': self.meta_title,
            'meta_description': self.meta_description,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
        }

    def to_summary(self):
        return {'id': self.id, 'slug': self.slug, 'name': self.name}
