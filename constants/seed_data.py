"""
Seed Data

Sample categories, authors, recipes, category links and reviews used to
populate a fresh database (flask init-db --seed).
"""

# (slug, name, description, featured, sort_order)
CATEGORIES = [
    ('breakfast', 'Breakfast & Brunch', 'Start your day right with delicious morning meals', True, 1),
    ('lunch', 'Lunch', 'Quick and satisfying midday meals', True, 2),
    ('dinner', 'Dinner', 'Hearty evening meals for the whole family', True, 3),
    ('appetizers', 'Appetizers & Snacks', 'Perfect starters and bite-sized treats', True, 4),
    ('desserts', 'Desserts', 'Sweet treats and indulgent desserts', True, 5),
    ('beverages', 'Beverages', 'Refreshing drinks and cocktails', True, 6),
    ('high-protein', 'High-Protein Meals', 'Protein-rich recipes for fitness enthusiasts', True, 7),
    ('quick-easy', 'Quick & Easy Meals', 'Fast recipes for busy weeknights', True, 8),
    ('healthy', 'Healthy Recipes', 'Nutritious and wholesome meal options', True, 9),
    ('vegetarian', 'Vegetarian', 'Delicious meat-free recipes', False, 10),
    ('vegan', 'Vegan', 'Plant-based recipes for everyone', False, 11),
    ('gluten-free', 'Gluten-Free', 'Safe options for gluten sensitivity', False, 12),
    ('keto', 'Keto', 'Low-carb, high-fat recipes', False, 13),
    ('paleo', 'Paleo', 'Whole foods, ancestral eating', False, 14),
    ('italian', 'Italian', 'Classic pasta, pizza, and Italian favorites', False, 15),
    ('mexican', 'Mexican', 'Spicy and flavorful Mexican cuisine', False, 16),
    ('asian', 'Asian', 'Chinese, Japanese, Thai, and more', False, 17),
    ('american', 'American', 'Classic American comfort food', False, 18),
    ('mediterranean', 'Mediterranean', 'Fresh and healthy Mediterranean dishes', False, 19),
    ('no-bake', 'No-Bake', 'No oven required recipes', False, 20),
    ('slow-cooker', 'Slow Cooker', 'Set it and forget it meals', False, 21),
    ('instant-pot', 'Instant Pot', 'Pressure cooker perfection', False, 22),
]

AUTHORS = [
    {
        'name': 'Sarah Johnson',
        'email': 'sarah@recipewebsite.com',
        'bio': 'A former restaurant chef turned home cooking advocate, Sarah believes that great food should be accessible to everyone.',
        'avatar_url': '/images/authors/sarah.jpg',
        'social_links': {'instagram': '@sarahcooks', 'twitter': '@sarahrecipes'},
    },
    {
        'name': 'Mike Chen',
        'email': 'mike@recipewebsite.com',
        'bio': 'Mike specializes in fusion cuisine and quick weeknight meals.',
        'avatar_url': '/images/authors/mike.jpg',
        'social_links': {'instagram': '@mikechenrecp', 'linkedin': 'mikechen'},
    },
    {
        'name': 'Emma Rodriguez',
        'email': 'emma@recipewebsite.com',
        'bio': 'Emma ensures all our recipes are not just delicious but also nutritionally balanced.',
        'avatar_url': '/images/authors/emma.jpg',
        'social_links': {'instagram': '@emmahealthy', 'blog': 'emmanutrition.com'},
    },
]

RECIPES = [
    {
        'slug': 'better-than-sex-fruit',
        'title': 'Better Than Sex Fruit',
        'description': "A creamy blend of tropical fruits and sweetened condensed milk creating a luscious, chilled fruit mix that's absolutely irresistible!",
        'ingredients': [
            {'item': 'Pineapple chunks', 'amount': '2', 'unit': 'cups', 'notes': 'fresh or canned, drained'},
            {'item': 'Mandarin oranges', 'amount': '1', 'unit': 'can', 'notes': 'drained'},
            {'item': 'Maraschino cherries', 'amount': '1', 'unit': 'cup', 'notes': 'drained and halved'},
            {'item': 'Sweetened condensed milk', 'amount': '1', 'unit': 'can', 'notes': '14 oz'},
            {'item': 'Cool Whip', 'amount': '1', 'unit': 'container', 'notes': '8 oz, thawed'},
            {'item': 'Mini marshmallows', 'amount': '2', 'unit': 'cups'},
            {'item': 'Coconut flakes', 'amount': '1', 'unit': 'cup', 'notes': 'sweetened'},
        ],
        'instructions': [
            'In a large mixing bowl, combine the drained pineapple chunks, mandarin oranges, and halved maraschino cherries.',
            'Add the mini marshmallows and coconut flakes to the fruit mixture.',
            'Pour the sweetened condensed milk over the fruit mixture and gently fold together.',
            'Fold in the thawed Cool Whip until everything is well combined and creamy.',
            'Cover and refrigerate for at least 2 hours before serving to allow flavors to meld.',
            'Serve chilled and enjoy this heavenly fruit salad!',
        ],
        'prep_time': 15, 'cook_time': 0, 'total_time': 15, 'servings': 8,
        'difficulty': 'easy', 'image_url': '/images/recipes/fruit-salad.jpg',
        'calories': 285, 'protein': 4, 'carbs': 52, 'fat': 8, 'fiber': 2, 'sugar': 48,
        'featured': True,
        'tags': ['no-bake', 'fruity', 'creamy', 'summer', 'tropical'],
        'author': 'sarah@recipewebsite.com',
        'meta_title': 'Better Than Sex Fruit Recipe - Easy No-Bake Dessert',
        'meta_description': 'A creamy blend of tropical fruits and sweetened condensed milk. Easy no-bake dessert perfect for any occasion.',
        'categories': ['desserts', 'no-bake'],
    },
    {
        'slug': 'lemon-cream-cheese-cake',
        'title': 'Lemon Cream Cheese Cake',
        'description': "Layered lemon filling with cream cheese and buttery yellow cake for a delightful treat that's perfect for any celebration.",
        'ingredients': [
            {'item': 'Yellow cake mix', 'amount': '1', 'unit': 'box'},
            {'item': 'Cream cheese', 'amount': '8', 'unit': 'oz', 'notes': 'softened'},
            {'item': 'Butter', 'amount': '1/2', 'unit': 'cup', 'notes': 'melted'},
            {'item': 'Powdered sugar', 'amount': '1', 'unit': 'lb'},
            {'item': 'Lemon juice', 'amount': '1/4', 'unit': 'cup', 'notes': 'fresh'},
            {'item': 'Lemon zest', 'amount': '2', 'unit': 'tbsp'},
            {'item': 'Heavy cream', 'amount': '1', 'unit': 'cup'},
            {'item': 'Vanilla extract', 'amount': '1', 'unit': 'tsp'},
        ],
        'instructions': [
            'Preheat oven to 350F. Prepare cake mix according to package directions and bake in two 9-inch round pans.',
            'Let cakes cool completely on wire racks.',
            'Beat cream cheese until smooth. Gradually add powdered sugar, lemon juice, and zest.',
            'In a separate bowl, whip heavy cream with vanilla until stiff peaks form.',
            'Fold whipped cream into cream cheese mixture until combined.',
            'Place one cake layer on serving plate. Spread half the filling on top.',
            'Add second layer and spread remaining filling. Refrigerate for at least 2 hours before serving.',
        ],
        'prep_time': 30, 'cook_time': 25, 'total_time': 55, 'servings': 12,
        'difficulty': 'medium', 'image_url': '/images/recipes/lemon-cake.jpg',
        'calories': 425, 'protein': 6, 'carbs': 65, 'fat': 16, 'fiber': 1, 'sugar': 58,
        'featured': True,
        'tags': ['citrus', 'creamy', 'layered', 'special-occasion', 'cake'],
        'author': 'sarah@recipewebsite.com',
        'meta_title': 'Lemon Cream Cheese Cake Recipe - Perfect for Celebrations',
        'meta_description': 'Layered lemon filling with cream cheese and buttery yellow cake. Perfect celebration cake with bright citrus flavors.',
        'categories': ['desserts', 'breakfast'],
    },
]

# (recipe slug, reviewer_name, reviewer_email, rating, title, comment, helpful_count)
REVIEWS = [
    ('better-than-sex-fruit', 'Sarah M.', 'sarah.m@email.com', 5, 'Absolutely Delicious!',
     'This recipe is amazing! I made it for a family gathering and everyone loved it.', 12),
    ('better-than-sex-fruit', 'Mike R.', 'mike.r@email.com', 4, 'Great summer dessert',
     'Perfect for hot summer days! I added some fresh strawberries and it was even better.', 8),
    ('lemon-cream-cheese-cake', 'Jennifer L.', 'jen.l@email.com', 5, 'Perfect for birthdays!',
     "Made this for my daughter's birthday and it was a hit!", 15),
    ('lemon-cream-cheese-cake', 'Tom K.', 'tom.k@email.com', 4, 'Easy and impressive',
     'Looks much harder to make than it actually is.', 6),
]
