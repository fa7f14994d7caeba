"""
Tests for the per-recipe search index and substring search.
"""

from sqlalchemy import func, select

from models import db, Recipe, RecipeSearchIndex
from services import (
    add_recipe_to_category, add_review, build_search_text, delete_recipe, get_search_text,
    rebuild_search_entry, rebuild_search_index, search_recipes, update_recipe,
)


def index_rows(recipe_id):
    return db.session.scalar(
        select(func.count(RecipeSearchIndex.id)).where(RecipeSearchIndex.recipe_id == recipe_id)
    )


def expected_text(recipe):
    return ' '.join([
        recipe.title, recipe.description or '', recipe.tags or '',
        recipe.ingredients or '', recipe.instructions or '',
    ]).lower()


def test_created_recipe_has_one_entry(make_recipe):
    recipe = make_recipe()

    assert index_rows(recipe.id) == 1
    assert get_search_text(recipe.id) == expected_text(recipe)


def test_search_text_uses_stored_json_literally(make_recipe):
    recipe = make_recipe(tags=['No-Bake', 'Fruity'])

    text = build_search_text(recipe)

    assert text == text.lower()
    assert '["no-bake", "fruity"]' in text
    assert '"item": "pineapple chunks"' in text
    assert text.startswith('better than sex fruit a creamy blend')


def test_missing_description_contributes_empty_string(make_recipe):
    recipe = make_recipe(description=None)

    assert get_search_text(recipe.id).startswith('better than sex fruit  [')


def test_title_update_replaces_entry(make_recipe):
    recipe = make_recipe('Better Than Sex Fruit')

    update_recipe(recipe.id, title='Amazing Fruit Salad')

    text = get_search_text(recipe.id)
    assert index_rows(recipe.id) == 1
    assert 'amazing fruit salad' in text
    assert 'better than sex fruit' not in text
    assert 'pineapple chunks' in text
    assert 'a creamy blend of tropical fruits' in text


def test_rebuild_is_idempotent(make_recipe):
    recipe = make_recipe()
    first = get_search_text(recipe.id)

    rebuild_search_entry(db.session.get(Recipe, recipe.id))
    db.session.commit()
    rebuild_search_entry(db.session.get(Recipe, recipe.id))
    db.session.commit()

    assert get_search_text(recipe.id) == first
    assert index_rows(recipe.id) == 1


def test_update_without_changes_keeps_text(make_recipe):
    recipe = make_recipe()
    before = get_search_text(recipe.id)

    update_recipe(recipe.id)

    assert get_search_text(recipe.id) == before
    assert index_rows(recipe.id) == 1


def test_delete_recipe_removes_entry(make_recipe):
    recipe = make_recipe()
    recipe_id = recipe.id

    delete_recipe(recipe_id)

    assert index_rows(recipe_id) == 0


def test_rebuild_search_index_covers_all_recipes(make_recipe):
    first = make_recipe('Fruit Salad')
    second = make_recipe('Lemon Cake')
    db.session.execute(RecipeSearchIndex.__table__.delete())
    db.session.commit()

    assert rebuild_search_index() == 2
    db.session.commit()

    assert index_rows(first.id) == 1
    assert index_rows(second.id) == 1


def test_search_is_case_insensitive_substring(make_recipe):
    make_recipe('Better Than Sex Fruit')
    make_recipe('Lemon Cream Cheese Cake', tags=['citrus'], description='Layered lemon filling')

    titles = [r.title for r in search_recipes('PINEAPPLE')]
    assert sorted(titles) == ['Better Than Sex Fruit', 'Lemon Cream Cheese Cake']

    assert [r.title for r in search_recipes('Citrus')] == ['Lemon Cream Cheese Cake']
    assert search_recipes('   ') == []


def test_search_skips_unpublished(make_recipe):
    make_recipe('Secret Stew', status='draft', tags=['secret'])

    assert search_recipes('secret') == []


def test_search_treats_wildcards_literally(make_recipe):
    make_recipe('Fruit Salad')

    assert search_recipes('%') == []
    assert search_recipes('fruit_salad') == []


def test_search_filters_by_category(make_recipe, make_category):
    desserts = make_category('Desserts')
    cake = make_recipe('Lemon Cake', tags=['cake'])
    make_recipe('Fruit Cake', tags=['cake'])
    add_recipe_to_category(cake.id, desserts.id)

    results = search_recipes('cake', category='desserts')
    assert [r.title for r in results] == ['Lemon Cake']


def test_search_orders_by_rating(make_recipe):
    low = make_recipe('Plain Fruit')
    high = make_recipe('Fancy Fruit')
    add_review(low.id, 'A', 2)
    add_review(high.id, 'B', 5)

    assert [r.title for r in search_recipes('fruit')] == ['Fancy Fruit', 'Plain Fruit']
