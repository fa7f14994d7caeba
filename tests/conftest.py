"""
Shared pytest fixtures: a testing app with a fresh in-memory database per
test, a client, and small factories for catalog rows.
"""

import os
import sys

# Configure before the app module reads its config
os.environ['FLASK_ENV'] = 'testing'

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app import app as flask_app
from models import db
from services import create_category, create_recipe, seed_database


@pytest.fixture
def app():
    flask_app.config['RATING_PUBLISHED_ONLY'] = False
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app):
    seed_database()
    return app


@pytest.fixture
def make_category(app):
    def _make(name='Desserts', **fields):
        return create_category(name, **fields)
    return _make


@pytest.fixture
def make_recipe(app):
    def _make(title='Better Than Sex Fruit', **fields):
        fields.setdefault('description', 'A creamy blend of tropical fruits')
        fields.setdefault('ingredients', [
            {'item': 'Pineapple chunks', 'amount': '2', 'unit': 'cups'},
            {'item': 'Coconut flakes', 'amount': '1', 'unit': 'cup', 'notes': 'sweetened'},
        ])
        fields.setdefault('instructions', [
            'Combine the fruit in a large bowl.',
            'Chill for 2 hours before serving.',
        ])
        fields.setdefault('tags', ['no-bake', 'fruity'])
        ingredients = fields.pop('ingredients')
        instructions = fields.pop('instructions')
        return create_recipe(title, ingredients, instructions, **fields)
    return _make
