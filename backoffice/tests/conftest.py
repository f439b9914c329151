"""Pytest fixtures for the back-office dashboard tests."""

from unittest.mock import MagicMock

import pytest

from storeapi.services import StoreAPIService

# Modules that build their own StoreAPIService
API_CONSUMERS = (
    "catalog.views",
    "admin_dashboard.views",
    "orders.views",
    "catalog.management.commands.check_category_tree",
    "orders.management.commands.export_orders",
)


@pytest.fixture
def store_api(monkeypatch):
    """Replace the store API client everywhere with one mock."""
    api = MagicMock(spec=StoreAPIService)
    for module in API_CONSUMERS:
        monkeypatch.setattr(f"{module}.StoreAPIService", lambda: api)
    return api


@pytest.fixture
def categories():
    """Flat category list as the API returns it."""
    return [
        {"_id": "1", "name": "Men", "parent": None},
        {"_id": "2", "name": "Shirts", "parent": {"_id": "1", "name": "Men"}},
        {"_id": "3", "name": "Orphan", "parent": "99"},
        {"_id": "4", "name": "Women", "parent": None},
        {"_id": "5", "name": "Kurtis", "parent": "4"},
        {"_id": "6", "name": "Sarees", "parent": "4"},
        {"_id": "7", "name": "Casual Shirts", "parent": "2"},
    ]


@pytest.fixture
def customers():
    """Customer payloads as the API returns them."""
    return [
        {"_id": "c1", "name": "Bob", "email": "bob@example.com", "phone": "9000000001",
         "firebaseUID": "uid-bob", "country": "India", "isActive": True,
         "joinedAt": "2024-01-10T10:00:00Z"},
        {"_id": "c2", "name": "alice", "email": "alice@example.com", "phone": "9000000002",
         "firebaseUID": "uid-alice", "country": "USA", "isActive": False,
         "joinedAt": "2024-03-05T08:30:00Z"},
        {"_id": "c3", "name": "Carol", "email": "carol@shop.in", "phone": "9000000003",
         "firebaseUID": "uid-carol", "country": "India", "isActive": True,
         "joinedAt": "2024-02-20T12:00:00Z"},
        {"_id": "c4", "name": "Dan", "email": "dan@example.com", "phone": "",
         "country": "India", "joinedAt": "not a date"},
    ]


@pytest.fixture
def orders():
    """Order payloads with populated customers and product snapshots."""
    return [
        {
            "_id": "o1",
            "orderNumber": "ORD-1001",
            "customerId": {"name": "Bob", "email": "bob@example.com", "phone": "9000000001"},
            "paymentMethod": "COD",
            "paymentStatus": "pending",
            "fulfillmentStatus": "processing",
            "finalPayable": 1499.0,
            "subtotal": 1499,
            "createdAt": "2024-05-01T10:30:00Z",
            "shippingAddressSnapshot": {"fullName": "Bob", "city": "Pune", "pincode": "411001"},
            "coupon": {"_id": "k1", "code": "SAVE10", "discountType": "percentage", "discountValue": 10},
            "items": [
                {
                    "productId": {"_id": "p1"},
                    "quantity": 1,
                    "price": 999,
                    "subtotal": 999,
                    "productSnapshot": {"title": "Cotton Kurta", "slug": "cotton-kurta",
                                        "tags": ["cotton", "ethnic wear"], "sku": "KUR-1"},
                    "variant": {"variantId": "v1", "attributes": [{"key": "size", "value": "M"}]},
                },
                {
                    "productId": "p2",
                    "quantity": 2,
                    "price": 250,
                    "subtotal": 500,
                    "productSnapshot": {"title": "Silk \"Stole\"", "slug": "silk-stole"},
                },
            ],
        },
        {
            "_id": "o2",
            "orderNumber": "ORD-1002",
            "customerId": None,
            "paymentMethod": "UPI",
            "paymentStatus": "paid",
            "fulfillmentStatus": "delivered",
            "finalPayable": 250.5,
            "createdAt": "2024-05-02T09:00:00Z",
            "isGiftOrder": True,
            "items": [],
        },
    ]
