from __future__ import annotations
import logging

from database import PRODUCTS, DocumentStore
from schemas import Product

logger = logging.getLogger(__name__)

# Initial catalog, inserted only into an empty products collection
SEED_PRODUCTS: list[dict] = [
    {
        "name": "Royal OUD", "brand": "Tihamis", "price": 1600, "original_price": 2000,
        "description": "A sophisticated blend of dark florals and woody notes, perfect for evening wear. This luxurious fragrance embodies elegance and mystery.",
        "category": "oriental", "image": "Royal OUD1.jpg", "rating": 4.8, "reviews": 342, "size": "100ml",
        "notes": {"top": ["Bergamot", "Pink Pepper", "Saffron"], "heart": ["Rose", "Jasmine", "Violet"], "base": ["Oud", "Vanilla", "Amber"]},
        "featured": True,
    },
    {
        "name": "Citrus Dream", "brand": "Fresh Essence", "price": 64.99, "original_price": 84.99,
        "description": "A refreshing citrus fragrance that captures the essence of summer. Light, energetic, and perfect for daily wear.",
        "category": "fresh", "image": "https://images.unsplash.com/photo-1594035910387-fea47794261f?w=500", "rating": 4.6, "reviews": 218, "size": "75ml",
        "notes": {"top": ["Lemon", "Orange", "Grapefruit"], "heart": ["Neroli", "Mint", "Green Tea"], "base": ["Cedarwood", "Musk"]},
        "featured": True,
    },
    {
        "name": "Midnight Rose", "brand": "Fleur de Paris", "price": 119.99,
        "description": "An enchanting floral masterpiece with a hint of spice. Romantic and timeless, perfect for special occasions.",
        "category": "floral", "image": "https://images.unsplash.com/photo-1588405748880-12d1d2a59cce?w=500", "rating": 4.9, "reviews": 467, "size": "100ml",
        "notes": {"top": ["Turkish Rose", "Blackcurrant", "Litchi"], "heart": ["Peony", "Magnolia", "Freesia"], "base": ["Patchouli", "White Musk", "Sandalwood"]},
    },
    {
        "name": "Ocean Breeze", "brand": "Aqua Vitae", "price": 54.99, "original_price": 74.99,
        "description": "Feel the refreshing ocean spray with this aquatic fragrance. Clean, crisp, and invigorating.",
        "category": "fresh", "image": "https://images.unsplash.com/photo-1563170351-be82bc888aa4?w=500", "rating": 4.4, "reviews": 156, "size": "75ml",
        "notes": {"top": ["Sea Salt", "Mint", "Bergamot"], "heart": ["Lavender", "Rosemary", "Sage"], "base": ["Driftwood", "Ambergris", "Oakmoss"]},
    },
    {
        "name": "Amber Mystique", "brand": "Oriental Treasures", "price": 149.99,
        "description": "A rich, warm amber fragrance with exotic spices. Luxurious and captivating, for those who dare to be different.",
        "category": "oriental", "image": "https://images.unsplash.com/photo-1592945403244-b3fbafd7f539?w=500", "rating": 4.7, "reviews": 289, "size": "100ml",
        "notes": {"top": ["Cardamom", "Cinnamon", "Bergamot"], "heart": ["Iris", "Orange Blossom", "Honey"], "base": ["Amber", "Vanilla", "Tonka Bean"]},
        "featured": True,
    },
    {
        "name": "Garden Paradise", "brand": "Bloom & Co", "price": 74.99,
        "description": "Step into a blooming garden with this fresh floral fragrance. Light, airy, and perfect for spring days.",
        "category": "floral", "image": "https://images.unsplash.com/photo-1619994351824-4f6aebf7dd97?w=500", "rating": 4.5, "reviews": 193, "size": "75ml",
        "notes": {"top": ["Apple Blossom", "Pear", "Mandarin"], "heart": ["Lily of the Valley", "Jasmine", "Peach"], "base": ["White Musk", "Blonde Woods"]},
    },
]


async def seed_products(store: DocumentStore) -> int:
    """Insert the initial catalog if the products collection is empty."""
    count = await store.count(PRODUCTS)
    if count > 0:
        return 0
    inserted = await store.insert_many(PRODUCTS, [Product(**p).model_dump() for p in SEED_PRODUCTS])
    logger.info("Seeded %d products", inserted)
    return inserted
