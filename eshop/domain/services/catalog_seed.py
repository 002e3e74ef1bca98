import logging

logger = logging.getLogger(__name__)

BASE_IMAGE_URL = "https://raw.githubusercontent.com/MicrosoftDocs/mslearn-dotnet-cloudnative/main/dotnet-docker/Products/wwwroot/images/"


def _image(name: str) -> str:
    return f"{BASE_IMAGE_URL}{name}"


SEED_PRODUCTS = [
    {"name": "Solar Powered Flashlight", "description": "A fantastic product for outdoor enthusiasts", "price": "19.99", "image_url": _image("product1.png")},
    {"name": "Hiking Poles", "description": "Ideal for camping and hiking trips", "price": "24.99", "image_url": _image("product2.png")},
    {"name": "Outdoor Rain Jacket", "description": "This product will keep you warm and dry in all weathers", "price": "49.99", "image_url": _image("product3.png")},
    {"name": "Survival Kit", "description": "A must-have for any outdoor adventurer", "price": "99.99", "image_url": _image("product4.png")},
    {"name": "Outdoor Backpack", "description": "This backpack is perfect for carrying all your outdoor essentials", "price": "39.99", "image_url": _image("product5.png")},
    {"name": "Camping Cookware", "description": "This cookware set is ideal for cooking outdoors", "price": "29.99", "image_url": _image("product6.png")},
    {"name": "Camping Stove", "description": "This stove is perfect for cooking outdoors", "price": "49.99", "image_url": _image("product7.png")},
    {"name": "Camping Lantern", "description": "This lantern is perfect for lighting up your campsite", "price": "19.99", "image_url": _image("product8.png")},
    {"name": "Camping Tent", "description": "This tent is perfect for camping trips", "price": "99.99", "image_url": _image("product9.png")},
]


async def seed_catalog(product_repo) -> int:
    """Insert the demo catalog when the products collection is empty."""
    if await product_repo.count() > 0:
        logger.debug("Catalog already populated, skipping seed")
        return 0
    inserted = await product_repo.insert_many(SEED_PRODUCTS)
    logger.info(f"Seeded catalog with {inserted} products")
    return inserted
