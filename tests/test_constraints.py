"""
Tests for validation, referential integrity and uniqueness rules on the
write path. A rejected write must leave no rows and no aggregate changes.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from models import db, Category, Recipe, Review, UserFavorite
from services import (
    ConstraintViolation, MissingReference,
    add_favorite, add_review, create_category, create_recipe, delete_category,
    delete_recipe, list_favorites, remove_favorite, remove_recipe_from_category,
    update_category, update_recipe,
)
from services.reviews import parse_rating


def count(model):
    return db.session.scalar(select(func.count(model.id)))


@pytest.mark.parametrize('value', [0, 6, -1, 'five', 4.5, True, None])
def test_parse_rating_rejects_out_of_range(value):
    with pytest.raises(ConstraintViolation):
        parse_rating(value)


@pytest.mark.parametrize('value,expected', [(1, 1), (5, 5), ('4', 4), (3.0, 3)])
def test_parse_rating_accepts_whole_stars(value, expected):
    assert parse_rating(value) == expected


def test_out_of_range_review_leaves_recipe_untouched(make_recipe):
    recipe = make_recipe()

    with pytest.raises(ConstraintViolation):
        add_review(recipe.id, 'Sarah M.', 6)

    assert count(Review) == 0
    recipe = db.session.get(Recipe, recipe.id)
    assert (recipe.rating, recipe.review_count) == (0, 0)


def test_review_check_constraint_enforced_by_database(make_recipe):
    recipe = make_recipe()
    db.session.add(Review(recipe_id=recipe.id, reviewer_name='Direct', rating=9))

    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()

    assert count(Review) == 0


def test_review_for_missing_recipe(app):
    with pytest.raises(MissingReference):
        add_review(999, 'Sarah M.', 5)
    assert count(Review) == 0


def test_review_needs_reviewer_name(make_recipe):
    recipe = make_recipe()
    with pytest.raises(ConstraintViolation):
        add_review(recipe.id, '   ', 5)


def test_review_status_whitelist(make_recipe):
    recipe = make_recipe()
    with pytest.raises(ConstraintViolation):
        add_review(recipe.id, 'Sarah M.', 5, status='spam')


def test_recipe_difficulty_whitelist(app):
    with pytest.raises(ConstraintViolation):
        create_recipe('Hard Cake', ['flour'], ['Bake.'], difficulty='extreme')
    assert count(Recipe) == 0


def test_recipe_status_whitelist(app):
    with pytest.raises(ConstraintViolation):
        create_recipe('Hidden Cake', ['flour'], ['Bake.'], status='hidden')


def test_recipe_unknown_field(app):
    with pytest.raises(ConstraintViolation):
        create_recipe('Cake', ['flour'], ['Bake.'], colour='blue')


def test_derived_fields_are_ignored_on_create(app):
    recipe = create_recipe('Cake', ['flour'], ['Bake.'], rating=5.0, review_count=12)

    recipe = db.session.get(Recipe, recipe.id)
    assert recipe.rating == 0
    assert recipe.review_count == 0


def test_duplicate_recipe_slug(make_recipe):
    make_recipe('Lemon Cake')

    with pytest.raises(ConstraintViolation):
        make_recipe('Lemon Cake')

    assert count(Recipe) == 1


def test_invalid_slug(app):
    with pytest.raises(ConstraintViolation):
        create_recipe('Cake', ['flour'], ['Bake.'], slug='Not A Slug!')


def test_ingredients_must_have_items(app):
    with pytest.raises(ConstraintViolation):
        create_recipe('Cake', [{'amount': '2'}], ['Bake.'])


def test_category_cannot_be_its_own_parent(make_category):
    category = make_category('Desserts')

    with pytest.raises(ConstraintViolation):
        update_category(category.id, parent_id=category.id)

    assert db.session.get(Category, category.id).parent_id is None


def test_category_cycle_rejected(make_category):
    desserts = make_category('Desserts')
    cakes = make_category('Cakes', parent_id=desserts.id)
    cheesecakes = make_category('Cheesecakes', parent_id=cakes.id)

    with pytest.raises(ConstraintViolation):
        update_category(desserts.id, parent_id=cheesecakes.id)

    assert db.session.get(Category, desserts.id).parent_id is None


def test_category_parent_must_exist(app):
    with pytest.raises(MissingReference):
        create_category('Orphans', parent_id=404)
    assert count(Category) == 0


def test_duplicate_category_slug(make_category):
    make_category('Desserts')
    with pytest.raises(ConstraintViolation):
        make_category('Desserts')


def test_delete_category_with_children_refused(make_category):
    desserts = make_category('Desserts')
    make_category('Cakes', parent_id=desserts.id)

    with pytest.raises(ConstraintViolation):
        delete_category(desserts.id)

    assert count(Category) == 2


def test_remove_missing_link(make_category, make_recipe):
    category = make_category()
    recipe = make_recipe()

    with pytest.raises(MissingReference):
        remove_recipe_from_category(recipe.id, category.id)


def test_favorites_are_unique_per_user(make_recipe):
    recipe = make_recipe()
    add_favorite('visitor-1', recipe.id)

    with pytest.raises(ConstraintViolation):
        add_favorite('visitor-1', recipe.id)

    add_favorite('visitor-2', recipe.id)
    assert count(UserFavorite) == 2
    assert [f.recipe_id for f in list_favorites('visitor-1')] == [recipe.id]


def test_remove_favorite(make_recipe):
    recipe = make_recipe()
    add_favorite('visitor-1', recipe.id)

    remove_favorite('visitor-1', recipe.id)

    assert list_favorites('visitor-1') == []
    with pytest.raises(MissingReference):
        remove_favorite('visitor-1', recipe.id)


def test_favorite_needs_user_id(make_recipe):
    recipe = make_recipe()
    with pytest.raises(ConstraintViolation):
        add_favorite('  ', recipe.id)


def test_deleting_recipe_cascades(make_recipe):
    recipe = make_recipe()
    add_review(recipe.id, 'Sarah M.', 5)
    add_favorite('visitor-1', recipe.id)

    delete_recipe(recipe.id)

    assert count(Review) == 0
    assert count(UserFavorite) == 0


def test_delete_missing_recipe(app):
    with pytest.raises(MissingReference):
        delete_recipe(12345)


def test_leading_argument_names_are_plain_unknown_fields(make_category, make_recipe):
    recipe = make_recipe('Lemon Cake')
    category = make_category('Desserts')

    with pytest.raises(ConstraintViolation):
        update_recipe(recipe.id, recipe_id=recipe.id + 1)
    with pytest.raises(ConstraintViolation):
        update_category(category.id, category_id=category.id + 1)

    assert db.session.get(Recipe, recipe.id).title == 'Lemon Cake'
    assert count(Category) == 1


def test_category_slug_fits_its_column(app):
    with pytest.raises(ConstraintViolation):
        create_category('Desserts', slug='a' * 101)

    category = create_category('Desserts', slug='a' * 100)
    assert len(category.slug) == 100

    with pytest.raises(ConstraintViolation):
        update_category(category.id, slug='b' * 101)
    assert db.session.get(Category, category.id).slug == 'a' * 100


def test_long_category_name_gets_short_slug(app):
    category = create_category('Weeknight Dinner Ideas ' * 6)

    assert 0 < len(category.slug) <= 100
    assert not category.slug.endswith('-')
