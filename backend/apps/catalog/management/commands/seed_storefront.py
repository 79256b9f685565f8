from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.container import build_product_service
from apps.catalog.models import Category, Product, ProductImage
from apps.users.models import User

PEXELS = "https://images.pexels.com/photos"

CATEGORIES = [
    ("Fresh Fruits", "fresh-fruits", f"{PEXELS}/1132047/pexels-photo-1132047.jpeg"),
    ("Vegetables", "vegetables", f"{PEXELS}/1435904/pexels-photo-1435904.jpeg"),
    ("Dairy & Eggs", "dairy-eggs", f"{PEXELS}/248412/pexels-photo-248412.jpeg"),
    ("Bakery", "bakery", f"{PEXELS}/1070946/pexels-photo-1070946.jpeg"),
    ("Snacks", "snacks", f"{PEXELS}/1536871/pexels-photo-1536871.jpeg"),
]

# (category slug, name, slug, description, price, discount, stock, featured, images)
PRODUCTS = [
    (
        "fresh-fruits",
        "Fresh Apples",
        "fresh-apples",
        "Crisp and juicy apples freshly picked from organic farms. Rich in antioxidants and fiber, these apples are perfect for snacking or baking.",
        "149.99",
        "0.10",
        100,
        True,
        [
            f"{PEXELS}/1453713/pexels-photo-1453713.jpeg",
            f"{PEXELS}/918643/pexels-photo-918643.jpeg",
        ],
    ),
    (
        "fresh-fruits",
        "Organic Bananas",
        "organic-bananas",
        "Sweet and nutritious organic bananas. Excellent source of potassium and vitamin B6.",
        "79.99",
        None,
        150,
        False,
        [
            f"{PEXELS}/1093038/pexels-photo-1093038.jpeg",
            f"{PEXELS}/2116020/pexels-photo-2116020.jpeg",
        ],
    ),
    (
        "fresh-fruits",
        "Sweet Oranges",
        "sweet-oranges",
        "Juicy and tangy oranges packed with vitamin C. Perfect for juicing or eating fresh.",
        "99.99",
        "0.05",
        80,
        True,
        [
            f"{PEXELS}/691166/pexels-photo-691166.jpeg",
            f"{PEXELS}/327098/pexels-photo-327098.jpeg",
        ],
    ),
    (
        "vegetables",
        "Fresh Tomatoes",
        "fresh-tomatoes",
        "Ripe and juicy tomatoes perfect for salads, sauces, or sandwiches. Grown in our partner farms with care.",
        "59.99",
        None,
        120,
        True,
        [
            f"{PEXELS}/533280/pexels-photo-533280.jpeg",
            f"{PEXELS}/1327838/pexels-photo-1327838.jpeg",
        ],
    ),
    (
        "vegetables",
        "Organic Spinach",
        "organic-spinach",
        "Fresh leafy spinach rich in iron and vitamins. Perfect for salads, smoothies, or cooking.",
        "69.99",
        "0.10",
        90,
        False,
        [
            f"{PEXELS}/2325843/pexels-photo-2325843.jpeg",
            f"{PEXELS}/2255925/pexels-photo-2255925.jpeg",
        ],
    ),
    (
        "dairy-eggs",
        "Farm Fresh Eggs",
        "farm-fresh-eggs",
        "Free-range eggs from ethically raised hens. Rich in protein and perfect for breakfast or baking.",
        "119.99",
        None,
        100,
        True,
        [
            f"{PEXELS}/162712/egg-white-food-protein-162712.jpeg",
            f"{PEXELS}/7815371/pexels-photo-7815371.jpeg",
        ],
    ),
    (
        "dairy-eggs",
        "Organic Milk",
        "organic-milk",
        "Fresh organic milk from grass-fed cows. Rich and creamy texture with no additives.",
        "89.99",
        "0.05",
        50,
        True,
        [
            f"{PEXELS}/5067565/pexels-photo-5067565.jpeg",
            f"{PEXELS}/3735153/pexels-photo-3735153.jpeg",
        ],
    ),
    (
        "bakery",
        "Whole Wheat Bread",
        "whole-wheat-bread",
        "Freshly baked whole wheat bread made with organic flour. Soft, nutritious, and perfect for sandwiches.",
        "69.99",
        None,
        40,
        False,
        [
            f"{PEXELS}/1756061/pexels-photo-1756061.jpeg",
            f"{PEXELS}/1070946/pexels-photo-1070946.jpeg",
        ],
    ),
    (
        "bakery",
        "Butter Croissants",
        "butter-croissants",
        "Flaky, buttery croissants baked fresh daily. Perfect for breakfast or as a snack.",
        "129.99",
        "0.10",
        30,
        True,
        [
            f"{PEXELS}/3724/food-morning-breakfast-orange-juice.jpg",
            f"{PEXELS}/2135/food-france-morning-breakfast.jpg",
        ],
    ),
    (
        "snacks",
        "Mixed Nuts",
        "mixed-nuts",
        "Premium selection of roasted almonds, cashews, and walnuts. High in protein and healthy fats.",
        "249.99",
        "0.15",
        70,
        True,
        [
            f"{PEXELS}/1295572/pexels-photo-1295572.jpeg",
            f"{PEXELS}/1049509/pexels-photo-1049509.jpeg",
        ],
    ),
    (
        "snacks",
        "Potato Chips",
        "potato-chips",
        "Crispy potato chips with a perfect blend of salt and spices. Great for snacking or parties.",
        "99.99",
        None,
        120,
        False,
        [
            f"{PEXELS}/568805/pexels-photo-568805.jpeg",
            f"{PEXELS}/4085109/pexels-photo-4085109.jpeg",
        ],
    ),
]

TEST_USER = {
    "email": "test@example.com",
    "name": "Test User",
    "password": "password123",
}


class Command(BaseCommand):
    help = "Seed the storefront catalog and a test customer. Does nothing if categories exist."

    @transaction.atomic
    def handle(self, *args, **options):
        if Category.objects.exists():
            self.stdout.write("Storefront already seeded.")
            return

        self.stdout.write("Seeding categories...")
        slug_to_cat = {}
        for name, slug, image_url in CATEGORIES:
            slug_to_cat[slug] = Category.objects.create(
                name=name, slug=slug, image_url=image_url
            )

        self.stdout.write("Seeding products...")
        for (
            cat_slug,
            name,
            slug,
            description,
            price,
            discount,
            stock,
            featured,
            image_urls,
        ) in PRODUCTS:
            product = Product.objects.create(
                name=name,
                slug=slug,
                description=description,
                price=Decimal(price),
                discount=Decimal(discount) if discount is not None else None,
                stock=stock,
                featured=featured,
                category=slug_to_cat[cat_slug],
            )
            ProductImage.objects.bulk_create(
                [ProductImage(product=product, url=url) for url in image_urls]
            )

        self.stdout.write("Seeding test customer...")
        if not User.objects.filter(email=TEST_USER["email"]).exists():
            User.objects.create_user(**TEST_USER)

        build_product_service().bump_cache_version()
        self.stdout.write(self.style.SUCCESS("Storefront seed completed."))
