# mock data the storefront starts from; stands in for a backend
from __future__ import annotations

from typing import List, Tuple

from stores.models import (
    Account,
    Order,
    Product,
    Role,
    User,
    order_from_dict,
    product_to_dict,
)

_UNSPLASH = "https://images.unsplash.com/photo-{}?q=80&w=500"

PRODUCTS: Tuple[Product, ...] = (
    Product(
        id="1",
        name="Premium Wireless Headphones",
        price=199.99,
        description="Premium noise-cancelling wireless headphones with 30-hour battery life and crystal clear sound quality.",
        image=_UNSPLASH.format("1505740420928-5e560c06d30e"),
        category="electronics",
    ),
    Product(
        id="2",
        name="Smart Watch Series 5",
        price=299.99,
        description="Latest generation smartwatch with heart rate monitoring, sleep tracking, and a beautiful OLED display.",
        image=_UNSPLASH.format("1523275335684-37898b6baf30"),
        category="electronics",
    ),
    Product(
        id="3",
        name="Professional Camera",
        price=1299.99,
        description="Professional-grade camera with 4K video recording, 30x optical zoom, and advanced image stabilization.",
        image=_UNSPLASH.format("1526170375885-4d8ecf77b99f"),
        category="electronics",
    ),
    Product(
        id="4",
        name="Designer Backpack",
        price=89.99,
        description="Stylish, water-resistant backpack with multiple compartments and laptop sleeve. Perfect for work or travel.",
        image=_UNSPLASH.format("1491637639811-60e2756cc1c7"),
        category="fashion",
    ),
    Product(
        id="5",
        name="Running Shoes",
        price=129.99,
        description="Lightweight, breathable running shoes with responsive cushioning for maximum comfort and performance.",
        image=_UNSPLASH.format("1542291026-7eec264c27ff"),
        category="fashion",
    ),
    Product(
        id="6",
        name="Smart Home Speaker",
        price=149.99,
        description="Smart speaker with voice assistant, premium sound quality, and home automation capabilities.",
        image=_UNSPLASH.format("1589003077984-894e133dabab"),
        category="electronics",
    ),
    Product(
        id="7",
        name="Leather Wallet",
        price=49.99,
        description="Genuine leather wallet with RFID protection, multiple card slots, and sleek minimalist design.",
        image=_UNSPLASH.format("1601592996763-f05c9ce5add6"),
        category="fashion",
    ),
    Product(
        id="8",
        name="Stainless Steel Watch",
        price=179.99,
        description="Classic stainless steel watch with sapphire crystal, Japanese movement, and 100m water resistance.",
        image=_UNSPLASH.format("1542496658-e33a6d0d50f6"),
        category="fashion",
    ),
    Product(
        id="9",
        name="Wireless Earbuds",
        price=129.99,
        description="Truly wireless earbuds with active noise cancellation, transparency mode, and 24-hour battery life.",
        image=_UNSPLASH.format("1606220588913-b3aacb4d2f37"),
        category="electronics",
    ),
    Product(
        id="10",
        name="Portable Power Bank",
        price=59.99,
        description="20,000mAh power bank with fast charging, dual USB ports, and compact design for on-the-go charging.",
        image=_UNSPLASH.format("1620288627223-53302f4e8c74"),
        category="electronics",
    ),
    Product(
        id="11",
        name="Designer Sunglasses",
        price=159.99,
        description="Polarized designer sunglasses with UV protection, durable frame, and premium case included.",
        image=_UNSPLASH.format("1572635196237-14b3f281503f"),
        category="fashion",
    ),
    Product(
        id="12",
        name="Bluetooth Speaker",
        price=79.99,
        description="Waterproof Bluetooth speaker with 360° sound, 12-hour battery life, and rugged design for outdoor use.",
        image=_UNSPLASH.format("1608043152269-423dbba4e7e1"),
        category="electronics",
    ),
)

ACCOUNTS: Tuple[Account, ...] = (
    Account(
        user=User(id="1", name="John Doe", email="user@example.com", role=Role.USER),
        password="password",
    ),
    Account(
        user=User(
            id="2", name="Admin User", email="admin@example.com", role=Role.ADMIN
        ),
        password="admin123",
    ),
)

_JOHN_ADDRESS = {
    "name": "John Doe",
    "street": "123 Main Street",
    "city": "Anytown",
    "state": "CA",
    "zipCode": "12345",
    "country": "USA",
}


def _line(pid: str, qty: int = 1) -> dict:
    product = next(p for p in PRODUCTS if p.id == pid)
    return {"product": product_to_dict(product), "quantity": qty}


_ORDERS = [
    {
        "id": "ord-001",
        "userId": "1",
        "items": [_line("1"), _line("5")],
        "totalAmount": 329.98,
        "status": "delivered",
        "date": "2023-12-12T10:30:00Z",
        "shippingAddress": _JOHN_ADDRESS,
        "paymentMethod": {"type": "credit_card", "lastFour": "4242"},
    },
    {
        "id": "ord-002",
        "userId": "1",
        "items": [_line("3")],
        "totalAmount": 1299.99,
        "status": "shipped",
        "date": "2024-01-05T14:20:00Z",
        "shippingAddress": _JOHN_ADDRESS,
        "paymentMethod": {"type": "paypal"},
    },
    {
        "id": "ord-003",
        "userId": "1",
        "items": [_line("7"), _line("11")],
        "totalAmount": 209.98,
        "status": "processing",
        "date": "2024-03-18T09:45:00Z",
        "shippingAddress": _JOHN_ADDRESS,
        "paymentMethod": {"type": "credit_card", "lastFour": "1234"},
    },
]


def seed_orders() -> List[Order]:
    """Fresh list of the historical orders, safe for a store to append to."""
    return [order_from_dict(data) for data in _ORDERS]
