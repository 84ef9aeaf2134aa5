"""Built-in demo catalog: seven meals for each meal slot."""

from dataclasses import dataclass

from meal_swipe.domain.meals import Meal, MealCategory
from meal_swipe.services.catalog import MealCatalogRepository

_B = MealCategory.BREAKFAST
_L = MealCategory.LUNCH
_D = MealCategory.DINNER

DEMO_MEALS: tuple[Meal, ...] = (
    Meal(
        "breakfast_1", "Avocado Toast with Eggs", _B, "American",
        "Creamy avocado on toasted sourdough topped with perfectly poached eggs.",
        calories=420, cook_time_minutes=15,
        ingredients=("1 ripe avocado", "2 eggs", "2 slices sourdough bread",
                     "1 tbsp olive oil", "1 tsp everything bagel seasoning"),
    ),
    Meal(
        "breakfast_2", "Berry Açaí Bowl", _B, "American",
        "Thick açaí blend topped with fresh berries and granola.",
        calories=380, cook_time_minutes=10,
        ingredients=("1 packet frozen açaí (100g)", "1 frozen banana",
                     "1/4 cup almond milk", "1/2 cup mixed berries", "1/4 cup granola"),
    ),
    Meal(
        "breakfast_3", "Classic Pancake Stack", _B, "American",
        "Fluffy buttermilk pancakes with maple syrup and blueberries.",
        calories=520, cook_time_minutes=20,
        ingredients=("1.5 cups flour", "2 tbsp sugar", "2 tsp baking powder",
                     "1.25 cups buttermilk", "1 egg", "3 tbsp melted butter",
                     "1/2 cup blueberries", "1/4 cup maple syrup"),
    ),
    Meal(
        "breakfast_4", "Greek Yogurt Parfait", _B, "Mediterranean",
        "Layers of Greek yogurt, granola, and fresh berries.",
        calories=320, cook_time_minutes=5,
        ingredients=("1 cup Greek yogurt", "1/3 cup granola", "1/2 cup strawberries",
                     "1/4 cup blueberries"),
    ),
    Meal(
        "breakfast_5", "Breakfast Burrito", _B, "Mexican",
        "Scrambled eggs, bacon, and cheese in a flour tortilla.",
        calories=480, cook_time_minutes=15,
        ingredients=("3 eggs", "3 strips bacon", "1/4 cup shredded cheese",
                     "1 large flour tortilla", "2 tbsp salsa"),
    ),
    Meal(
        "breakfast_6", "Overnight Oats", _B, "American",
        "Creamy oats soaked overnight with almond milk.",
        calories=350, cook_time_minutes=5,
        ingredients=("1/2 cup rolled oats", "3/4 cup almond milk", "1 tbsp chia seeds",
                     "1 tbsp maple syrup", "1 banana"),
    ),
    Meal(
        "breakfast_7", "Veggie Omelette", _B, "French",
        "Three-egg omelette with sautéed vegetables.",
        calories=380, cook_time_minutes=12,
        ingredients=("3 eggs", "1/4 cup bell peppers", "1/4 cup onions",
                     "1/2 cup spinach", "1/4 cup cheese", "2 tbsp butter"),
    ),
    Meal(
        "lunch_1", "Chicken Caesar Salad", _L, "Italian",
        "Romaine lettuce with grilled chicken, parmesan, and Caesar dressing.",
        calories=450, cook_time_minutes=20,
        ingredients=("1 chicken breast (6 oz)", "4 cups romaine lettuce",
                     "1/4 cup parmesan", "1/2 cup croutons", "3 tbsp Caesar dressing"),
    ),
    Meal(
        "lunch_2", "Spicy Tuna Poke Bowl", _L, "Japanese",
        "Fresh ahi tuna over sushi rice with vegetables.",
        calories=520, cook_time_minutes=15,
        ingredients=("6 oz ahi tuna", "1 cup sushi rice", "1/2 avocado",
                     "1/2 cup edamame", "1/2 cucumber", "2 tbsp spicy mayo",
                     "1 tbsp soy sauce"),
    ),
    Meal(
        "lunch_3", "Turkey Club Sandwich", _L, "American",
        "Triple-decker with turkey, bacon, lettuce, and tomato.",
        calories=580, cook_time_minutes=10,
        ingredients=("4 oz turkey", "3 strips bacon", "3 slices bread",
                     "2 lettuce leaves", "2 tomato slices", "2 tbsp mayo"),
    ),
    Meal(
        "lunch_4", "Falafel Wrap", _L, "Mediterranean",
        "Crispy falafel with hummus and vegetables in pita.",
        calories=480, cook_time_minutes=25,
        ingredients=("4-5 falafel", "1 pita bread", "3 tbsp hummus", "2 tbsp tahini",
                     "1/2 cup cucumber", "1/2 cup tomatoes"),
    ),
    Meal(
        "lunch_5", "Pad Thai", _L, "Thai",
        "Stir-fried rice noodles with shrimp and peanuts.",
        calories=550, cook_time_minutes=25,
        ingredients=("6 oz rice noodles", "6 shrimp", "1/2 cup tofu",
                     "1 cup bean sprouts", "3 tbsp peanuts", "1 lime",
                     "3 tbsp fish sauce", "2 tbsp tamarind"),
    ),
    Meal(
        "lunch_6", "Margherita Pizza", _L, "Italian",
        "Classic pizza with mozzarella, tomato, and basil.",
        calories=680, cook_time_minutes=20,
        ingredients=("1 pizza dough (12 inch)", "1/2 cup tomato sauce",
                     "8 oz mozzarella", "8-10 basil leaves", "2 tbsp olive oil"),
    ),
    Meal(
        "lunch_7", "Chicken Quesadilla", _L, "Mexican",
        "Grilled tortilla with chicken, cheese, and peppers.",
        calories=520, cook_time_minutes=15,
        ingredients=("1 cup cooked chicken", "1 flour tortilla", "1 cup cheese",
                     "1/2 cup bell peppers", "1/4 cup onions", "1 tsp cumin"),
    ),
    Meal(
        "dinner_1", "Grilled Salmon", _D, "American",
        "Grilled salmon with lemon herb butter and asparagus.",
        calories=480, cook_time_minutes=25,
        ingredients=("1 salmon fillet (6 oz)", "1 bunch asparagus", "2 tbsp butter",
                     "1 lemon", "2 cloves garlic", "1 tbsp olive oil"),
    ),
    Meal(
        "dinner_2", "Beef Stir Fry", _D, "Chinese",
        "Beef and vegetables in ginger soy sauce over rice.",
        calories=520, cook_time_minutes=20,
        ingredients=("8 oz beef sirloin", "2 cups broccoli", "1 bell pepper",
                     "1 cup rice", "3 tbsp soy sauce", "1 tsp ginger",
                     "2 cloves garlic"),
    ),
    Meal(
        "dinner_3", "Chicken Tikka Masala", _D, "Indian",
        "Chicken in creamy tomato curry sauce.",
        calories=580, cook_time_minutes=35,
        ingredients=("1 lb chicken breast", "1 can (14 oz) tomatoes", "1/2 cup cream",
                     "1 onion", "2 tbsp garam masala", "3 cloves garlic", "2 cups rice"),
    ),
    Meal(
        "dinner_4", "Spaghetti Carbonara", _D, "Italian",
        "Pasta with pancetta, egg, and parmesan.",
        calories=620, cook_time_minutes=25,
        ingredients=("12 oz spaghetti", "6 oz pancetta", "3 egg yolks",
                     "1 cup parmesan", "1 tsp black pepper"),
    ),
    Meal(
        "dinner_5", "Korean BBQ Bowl", _D, "Korean",
        "Marinated beef over rice with kimchi.",
        calories=560, cook_time_minutes=30,
        ingredients=("8 oz beef", "2 cups rice", "1/2 cup kimchi", "3 tbsp soy sauce",
                     "2 tbsp sesame oil", "1 tbsp gochujang", "2 green onions"),
    ),
    Meal(
        "dinner_6", "Shrimp Tacos", _D, "Mexican",
        "Grilled shrimp tacos with cabbage slaw.",
        calories=420, cook_time_minutes=20,
        ingredients=("12 shrimp", "4 corn tortillas", "1 cup cabbage", "1 avocado",
                     "1/4 cup sour cream", "1 lime", "1 tsp chili powder"),
    ),
    Meal(
        "dinner_7", "Mushroom Risotto", _D, "Italian",
        "Creamy arborio rice with mushrooms and parmesan.",
        calories=480, cook_time_minutes=40,
        ingredients=("1.5 cups arborio rice", "2 cups mushrooms", "4 cups broth",
                     "1/2 cup white wine", "1/2 cup parmesan", "1 shallot",
                     "3 tbsp butter"),
    ),
)


@dataclass
class StaticMealCatalogRepository(MealCatalogRepository):
    """Catalog served from memory when no backend is configured."""

    meals: tuple[Meal, ...] = DEMO_MEALS

    def list_meals(self) -> list[Meal]:
        return list(self.meals)
