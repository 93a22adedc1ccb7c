"""
Project: Tableside
Description:
Mock data loaded into a fresh store at start-up. Run this module directly
to print the seeded ids.
"""

import logging

from werkzeug.security import generate_password_hash

from .models import new_id, now_iso

log = logging.getLogger(__name__)


def _size(name, price, available=True):
    return {"id": new_id(), "name": name, "currentPrice": price, "isAvailable": available}


def _product(name, description, category, brand, section, sizes, product_type="spirit"):
    return {
        "id": new_id(),
        "name": name,
        "description": description,
        "category": category,
        "brand": brand,
        "brandId": new_id(),
        "section": section,
        "type": product_type,
        "status": "available",
        "image": "",
        "price": sizes[0]["currentPrice"],
        "inventory": {"current": 100, "minimum": 20, "maximum": 200},
        "sizes": sizes,
    }


def _table(venue_id, number, category, section, minimum, maximum, position, x, y):
    return {
        "id": new_id(),
        "venueId": venue_id,
        "number": number,
        "qrCode": f"https://tableside.example.com/qr/{number}",
        "category": category,
        "section": section,
        "capacity": {"minimum": minimum, "maximum": maximum},
        "location": {"floor": 1, "position": position, "coordinates": {"x": x, "y": y}},
        "status": "available",
        "reservation": None,
        "currentOrder": None,
        "reservationHistory": [],
    }


def seed_store(store):
    """Fill an empty store with the demo venue. Returns the seeded documents by collection."""
    if len(store.venues):
        log.info("Store already seeded, skipping")
        return None

    user = {
        "id": new_id(),
        "firstName": "John",
        "lastName": "Doe",
        "name": "John Doe",
        "email": "john@example.com",
        "phone": "123-456-7890",
        "role": "customer",
        "passwordHash": generate_password_hash("password"),
        "paymentMethods": [],
        "favorites": [],
        "createdAt": now_iso(),
        "updatedAt": now_iso(),
        "lastLoginAt": None,
    }

    venue = {
        "id": new_id(),
        "name": "Luxury Lounge",
        "address": "123 Main St",
        "city": "New York",
        "state": "NY",
        "zipCode": "10001",
        "phoneNumber": "212-555-0123",
        "timezone": "America/New_York",
        "email": "hello@luxurylounge.example.com",
        "website": "https://luxurylounge.example.com",
        "operatingHours": [
            {"dayOfWeek": day, "open": "16:00", "close": "02:00", "isOpen": day in (4, 5, 6)}
            for day in range(7)
        ],
        "taxRate": 0.18,
        "pricingRules": {"vip-lounge": 500, "main-floor": 0},
        "minimumSpend": {"regular": 0, "vip": 500, "event": 1000},
        "dressCode": "Smart Casual",
        "paymentAccepted": [
            {"id": new_id(), "name": "Card", "type": "credit_card", "isActive": True},
            {"id": new_id(), "name": "Cash", "type": "cash", "isActive": True},
        ],
        "status": "Active",
    }

    categories = [
        {"id": "spirits", "name": "Spirits", "code": "SPR", "displayOrder": 1, "isActive": True, "type": "beverage"},
        {"id": "champagne", "name": "Champagne", "code": "CHP", "displayOrder": 2, "isActive": True, "type": "beverage"},
        {"id": "cocktails", "name": "Cocktails", "code": "CKT", "displayOrder": 3, "isActive": True, "type": "beverage"},
        {"id": "bites", "name": "Bites", "code": "BIT", "displayOrder": 4, "isActive": True, "type": "food"},
    ]

    products = [
        _product("Grey Goose Vodka", "French premium vodka", "spirits", "Grey Goose", "bar",
                 [_size("Shot", 14), _size("Double", 24), _size("Bottle", 450)]),
        _product("Premium Vodka", "Smooth, premium vodka", "spirits", "House", "bar",
                 [_size("Shot", 12), _size("Double", 20)]),
        _product("Moet & Chandon Imperial", "Brut champagne", "champagne", "Moet", "bottle-service",
                 [_size("Glass", 28), _size("Bottle", 320)], product_type="wine"),
        _product("Espresso Martini", "Vodka, coffee liqueur, espresso", "cocktails", "House", "bar",
                 [_size("Regular", 18)], product_type="cocktail"),
        _product("Truffle Fries", "Parmesan, truffle oil", "bites", "Kitchen", "kitchen",
                 [_size("Regular", 16)], product_type="food"),
    ]

    staff = [
        {
            "id": new_id(),
            "firstName": "Jane",
            "lastName": "Smith",
            "role": "bartender",
            "sections": ["main-bar"],
            "isActive": True,
            "status": "active",
            "metrics": {"averageRating": 4.8, "ordersServed": 150, "salesVolume": 15000},
        }
    ]

    tables = [
        _table(venue["id"], "101", "vip", "vip-lounge", 2, 6, "center", 100, 100),
        _table(venue["id"], "102", "regular", "main-floor", 2, 4, "window", 220, 80),
        _table(venue["id"], "103", "regular", "main-floor", 1, 2, "bar", 300, 40),
    ]

    store.users.add(user)
    store.venues.add(venue)
    for c in categories:
        store.categories.add(c)
    for p in products:
        store.products.add(p)
    for s in staff:
        store.staff.add(s)
    for t in tables:
        store.tables.add(t)

    log.info("Seeded venue %s with %d products and %d tables", venue["name"], len(products), len(tables))
    return {
        "users": [user],
        "venues": [venue],
        "categories": categories,
        "products": products,
        "staff": staff,
        "tables": tables,
    }


if __name__ == "__main__":
    from .app import create_app
    from .store import get_store

    app = create_app()
    with app.app_context():
        for t in get_store().tables.list():
            print(f"Table {t['number']} ({t['category']}): {t['id']}")
        print("Seeded. Email=john@example.com, Password=password")
