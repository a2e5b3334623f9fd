"""
Baseline catalog seeding for the Products service.

The seeder runs once at startup. It only inserts when the catalog is empty,
and it never lets a failure escape: bootstrap data is best-effort.
"""
import logging
from decimal import Decimal
from sqlalchemy.orm import Session
from . import models

logger = logging.getLogger(__name__)

# Baseline catalog, three products per category
BASELINE_PRODUCTS = (
    {
        "name": "X-Burger",
        "price": Decimal("25.90"),
        "category": models.Category.SANDWICH,
        "description": "Beef burger (150g) with cheese, lettuce, tomato and house sauce",
        "image_url": "https://example.com/images/x-burger.jpg",
    },
    {
        "name": "X-Bacon",
        "price": Decimal("29.90"),
        "category": models.Category.SANDWICH,
        "description": "Beef burger (150g) with crispy bacon, cheddar and barbecue sauce",
        "image_url": "https://example.com/images/x-bacon.jpg",
    },
    {
        "name": "X-Egg",
        "price": Decimal("27.90"),
        "category": models.Category.SANDWICH,
        "description": "Beef burger (150g) with fried egg, cheese, ham and mayonnaise",
        "image_url": "https://example.com/images/x-egg.jpg",
    },
    {
        "name": "Large French Fries",
        "price": Decimal("15.90"),
        "category": models.Category.SIDE,
        "description": "Generous portion of crispy salted fries",
        "image_url": "https://example.com/images/large-fries.jpg",
    },
    {
        "name": "Onion Rings",
        "price": Decimal("17.90"),
        "category": models.Category.SIDE,
        "description": "Breaded onion rings fried until golden",
        "image_url": "https://example.com/images/onion-rings.jpg",
    },
    {
        "name": "Chicken Nuggets (10 pieces)",
        "price": Decimal("18.90"),
        "category": models.Category.SIDE,
        "description": "Crispy breaded chicken nuggets",
        "image_url": "https://example.com/images/nuggets.jpg",
    },
    {
        "name": "Coca-Cola 350ml",
        "price": Decimal("6.50"),
        "category": models.Category.DRINK,
        "description": "Chilled 350ml can of Coca-Cola",
        "image_url": "https://example.com/images/coke-can.jpg",
    },
    {
        "name": "Fresh Orange Juice",
        "price": Decimal("9.90"),
        "category": models.Category.DRINK,
        "description": "Freshly squeezed orange juice, 400ml",
        "image_url": "https://example.com/images/orange-juice.jpg",
    },
    {
        "name": "Soda 2L",
        "price": Decimal("12.90"),
        "category": models.Category.DRINK,
        "description": "2 litre soda bottle, assorted flavours",
        "image_url": "https://example.com/images/soda-2l.jpg",
    },
    {
        "name": "Chocolate Sundae",
        "price": Decimal("10.90"),
        "category": models.Category.DESSERT,
        "description": "Creamy vanilla ice cream with chocolate topping",
        "image_url": "https://example.com/images/chocolate-sundae.jpg",
    },
    {
        "name": "Apple Pie",
        "price": Decimal("12.90"),
        "category": models.Category.DESSERT,
        "description": "Warm apple pie with cinnamon",
        "image_url": "https://example.com/images/apple-pie.jpg",
    },
    {
        "name": "Strawberry Milkshake",
        "price": Decimal("14.90"),
        "category": models.Category.DESSERT,
        "description": "Creamy strawberry milkshake, 400ml",
        "image_url": "https://example.com/images/strawberry-milkshake.jpg",
    },
)


class DatabaseSeeder:
    """Populates an empty catalog with BASELINE_PRODUCTS."""

    def __init__(self, db: Session):
        self.db = db

    async def seed(self) -> bool:
        """
        Insert the baseline catalog unless products already exist.

        Errors are logged and suppressed so a failed seed never blocks startup.

        Returns:
            True if the catalog was seeded or already populated, False on error
        """
        try:
            if self.db.query(models.Product.id).first() is not None:
                logger.info("Catalog already contains products, skipping seed")
                return True

            logger.info("Seeding baseline catalog...")
            products = [models.Product(active=True, **data) for data in BASELINE_PRODUCTS]
            self.db.add_all(products)
            self.db.commit()
            logger.info(f"Seeded {len(products)} products")
            return True
        except Exception:
            self.db.rollback()
            logger.exception("Failed to seed baseline catalog")
            return False
