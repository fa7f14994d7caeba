"""
Tests for category recipe_count, recipe rating/review_count and author
recipe_count maintenance.
"""

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

import services.catalog
import services.reviews
from models import db, Author, Category, Recipe, RecipeCategory, RecipeSearchIndex, Review
from services import (
    ConstraintViolation, MaintenanceError,
    add_recipe_to_category, remove_recipe_from_category,
    add_review, delete_review, set_review_status,
    create_recipe, update_recipe, delete_recipe, delete_category,
    rebuild_all_aggregates, get_search_text,
)


def link_count(category_id):
    return db.session.scalar(
        select(func.count(RecipeCategory.id)).where(RecipeCategory.category_id == category_id)
    )


def test_linking_recipe_sets_category_count(make_category, make_recipe):
    desserts = make_category('Desserts')
    recipe = make_recipe()
    assert desserts.recipe_count == 0

    add_recipe_to_category(recipe.id, desserts.id)

    assert db.session.get(Category, desserts.id).recipe_count == 1


def test_unlinking_returns_count_to_zero(make_category, make_recipe):
    no_bake = make_category('No-Bake')
    recipe = make_recipe()

    add_recipe_to_category(recipe.id, no_bake.id)
    assert db.session.get(Category, no_bake.id).recipe_count == 1

    remove_recipe_from_category(recipe.id, no_bake.id)
    assert db.session.get(Category, no_bake.id).recipe_count == 0


def test_recount_heals_drift(make_category, make_recipe):
    category = make_category('Desserts')
    first = make_recipe('Fruit Salad')
    second = make_recipe('Lemon Cake')
    add_recipe_to_category(first.id, category.id)

    db.session.execute(update(Category).where(Category.id == category.id).values(recipe_count=42))
    db.session.commit()

    add_recipe_to_category(second.id, category.id)
    assert db.session.get(Category, category.id).recipe_count == 2 == link_count(category.id)


def test_duplicate_link_rejected_without_side_effects(make_category, make_recipe):
    category = make_category('Desserts')
    recipe = make_recipe()
    add_recipe_to_category(recipe.id, category.id)

    with pytest.raises(ConstraintViolation):
        add_recipe_to_category(recipe.id, category.id)

    assert db.session.get(Category, category.id).recipe_count == 1
    assert link_count(category.id) == 1


def test_rating_follows_reviews(make_recipe):
    recipe = make_recipe()
    assert (recipe.rating, recipe.review_count) == (0, 0)

    five = add_review(recipe.id, 'Sarah M.', 5)
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.rating == pytest.approx(5.0)
    assert recipe.review_count == 1

    add_review(recipe.id, 'Mike R.', 4)
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.rating == pytest.approx(4.5)
    assert recipe.review_count == 2

    delete_review(five.id)
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.rating == pytest.approx(4.0)
    assert recipe.review_count == 1


def test_rating_is_zero_when_last_review_removed(make_recipe):
    recipe = make_recipe()
    review = add_review(recipe.id, 'Tom K.', 3)

    delete_review(review.id)

    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.rating == 0
    assert recipe.review_count == 0


def test_all_statuses_count_by_default(make_recipe):
    recipe = make_recipe()
    add_review(recipe.id, 'A', 5)
    add_review(recipe.id, 'B', 1, status='pending')

    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.review_count == 2
    assert recipe.rating == pytest.approx(3.0)


def test_published_only_mode(app, make_recipe):
    app.config['RATING_PUBLISHED_ONLY'] = True
    recipe = make_recipe()
    add_review(recipe.id, 'A', 5)
    pending = add_review(recipe.id, 'B', 1, status='pending')

    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.review_count == 1
    assert recipe.rating == pytest.approx(5.0)

    set_review_status(pending.id, 'published')
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.review_count == 2
    assert recipe.rating == pytest.approx(3.0)


def test_failed_recompute_rolls_back_review(make_recipe, monkeypatch):
    recipe = make_recipe()

    def broken_refresh(recipe_id, published_only=None):
        raise OperationalError('UPDATE recipes', {}, Exception('database is locked'))

    monkeypatch.setattr(services.reviews, 'refresh_recipe_rating', broken_refresh)

    with pytest.raises(MaintenanceError):
        add_review(recipe.id, 'Sarah M.', 5)

    assert db.session.scalar(select(func.count(Review.id))) == 0
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.review_count == 0


def test_deleting_recipe_recounts_its_categories(make_category, make_recipe):
    desserts = make_category('Desserts')
    no_bake = make_category('No-Bake')
    keep = make_recipe('Lemon Cake')
    gone = make_recipe('Fruit Salad')
    add_recipe_to_category(keep.id, desserts.id)
    add_recipe_to_category(gone.id, desserts.id)
    add_recipe_to_category(gone.id, no_bake.id)

    delete_recipe(gone.id)

    assert db.session.get(Category, desserts.id).recipe_count == 1
    assert db.session.get(Category, no_bake.id).recipe_count == 0


def test_deleting_category_keeps_recipes(make_category, make_recipe):
    category = make_category('Desserts')
    recipe = make_recipe()
    add_recipe_to_category(recipe.id, category.id)

    delete_category(category.id)

    assert db.session.get(Recipe, recipe.id) is not None
    assert link_count(category.id) == 0


def test_author_recipe_count_follows_recipes(app, make_recipe):
    sarah = Author(name='Sarah Johnson', email='sarah@example.com')
    mike = Author(name='Mike Chen', email='mike@example.com')
    db.session.add_all([sarah, mike])
    db.session.commit()

    recipe = make_recipe(author_id=sarah.id)
    make_recipe('Lemon Cake', author_id=sarah.id)
    assert db.session.get(Author, sarah.id).recipe_count == 2

    update_recipe(recipe.id, author_id=mike.id)
    assert db.session.get(Author, sarah.id).recipe_count == 1
    assert db.session.get(Author, mike.id).recipe_count == 1

    delete_recipe(recipe.id)
    assert db.session.get(Author, mike.id).recipe_count == 0


def test_rebuild_all_aggregates_repairs_everything(make_category, make_recipe):
    category = make_category('Desserts')
    recipe = make_recipe()
    add_recipe_to_category(recipe.id, category.id)
    add_review(recipe.id, 'A', 2)
    add_review(recipe.id, 'B', 4)

    db.session.execute(update(Category).values(recipe_count=7))
    db.session.execute(update(Recipe).values(rating=1.0, review_count=9))
    db.session.commit()

    rebuild_all_aggregates()
    db.session.commit()

    assert db.session.get(Category, category.id).recipe_count == 1
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.review_count == 2
    assert recipe.rating == pytest.approx(3.0)


def test_review_count_matches_rows_after_mixed_writes(make_recipe):
    recipe = make_recipe()
    ratings = [5, 3, 4, 1, 2]
    reviews = [add_review(recipe.id, f'Reader {i}', r) for i, r in enumerate(ratings)]
    delete_review(reviews[0].id)
    delete_review(reviews[3].id)

    remaining = [3, 4, 2]
    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.review_count == len(remaining)
    assert recipe.rating == pytest.approx(sum(remaining) / len(remaining))


def test_create_recipe_requires_existing_author(app):
    from services import MissingReference
    with pytest.raises(MissingReference):
        create_recipe('Ghost Stew', ['water'], ['Boil.'], author_id=999)
    assert db.session.scalar(select(func.count(Recipe.id))) == 0


def test_failed_reindex_rolls_back_recipe_update(make_recipe, monkeypatch):
    recipe = make_recipe('Better Than Sex Fruit')
    before = get_search_text(recipe.id)

    def broken_rebuild(recipe):
        raise OperationalError('INSERT INTO recipe_search_index', {}, Exception('disk I/O error'))

    monkeypatch.setattr(services.catalog, 'rebuild_search_entry', broken_rebuild)

    with pytest.raises(MaintenanceError):
        update_recipe(recipe.id, title='Amazing Fruit Salad')

    assert db.session.get(Recipe, recipe.id).title == 'Better Than Sex Fruit'
    assert get_search_text(recipe.id) == before
    assert db.session.scalar(
        select(func.count(RecipeSearchIndex.id)).where(RecipeSearchIndex.recipe_id == recipe.id)
    ) == 1


def test_failed_recount_rolls_back_link(make_category, make_recipe, monkeypatch):
    category = make_category('Desserts')
    recipe = make_recipe()

    def broken_recount(category_id):
        raise OperationalError('UPDATE categories', {}, Exception('database is locked'))

    monkeypatch.setattr(services.catalog, 'refresh_category_recipe_count', broken_recount)

    with pytest.raises(MaintenanceError):
        add_recipe_to_category(recipe.id, category.id)

    assert link_count(category.id) == 0
    assert db.session.get(Category, category.id).recipe_count == 0
