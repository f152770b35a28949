# provide dataclass models, plus conversion to and from snapshot dicts
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from stores.errors import PersistedDataCorrupt


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentType(str, Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    description: str
    image: str
    category: str


@dataclass(frozen=True)
class CartLine:
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


@dataclass(frozen=True)
class Account:
    """Credential record. Lives in memory only, never written to a snapshot."""

    user: User
    password: str = field(repr=False)


@dataclass(frozen=True)
class ShippingAddress:
    name: str
    street: str
    city: str
    state: str
    zip_code: str
    country: str


@dataclass(frozen=True)
class PaymentMethod:
    type: PaymentType
    last_four: Optional[str] = None

    def __post_init__(self):
        if self.last_four is None:
            return
        if self.type != PaymentType.CREDIT_CARD:
            raise ValueError("Only card payments carry last four digits.")
        if len(self.last_four) != 4 or not self.last_four.isdigit():
            raise ValueError("last_four must be exactly 4 digits.")

    def describe(self) -> str:
        label = self.type.value.replace("_", " ").title()
        if self.last_four:
            return f"{label} ending in {self.last_four}"
        return label


@dataclass(frozen=True)
class Order:
    id: str
    user_id: str
    items: Tuple[CartLine, ...]
    total_amount: float
    status: OrderStatus
    date: datetime
    shipping_address: ShippingAddress
    payment_method: PaymentMethod

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)


# ---------------------------
# Snapshot conversion
# ---------------------------


def product_to_dict(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "description": product.description,
        "image": product.image,
        "category": product.category,
    }


def product_from_dict(data: Dict[str, Any]) -> Product:
    try:
        price = data["price"]
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise PersistedDataCorrupt(f"bad price {price!r}")
        return Product(
            id=str(data["id"]),
            name=str(data["name"]),
            price=float(price),
            description=str(data.get("description", "")),
            image=str(data.get("image", "")),
            category=str(data["category"]),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise PersistedDataCorrupt(f"bad product record: {e}") from e


def line_to_dict(line: CartLine) -> Dict[str, Any]:
    return {"product": product_to_dict(line.product), "quantity": line.quantity}


def line_from_dict(data: Dict[str, Any]) -> CartLine:
    try:
        qty = data["quantity"]
        product = product_from_dict(data["product"])
    except (KeyError, TypeError) as e:
        raise PersistedDataCorrupt(f"bad cart line: {e}") from e
    if isinstance(qty, bool) or not isinstance(qty, int) or qty < 1:
        raise PersistedDataCorrupt(f"bad quantity {qty!r}")
    return CartLine(product=product, quantity=qty)


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
    }


def user_from_dict(data: Dict[str, Any]) -> User:
    try:
        return User(
            id=str(data["id"]),
            name=str(data["name"]),
            email=str(data["email"]),
            role=Role(data["role"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PersistedDataCorrupt(f"bad user record: {e}") from e


def address_to_dict(address: ShippingAddress) -> Dict[str, Any]:
    return {
        "name": address.name,
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zipCode": address.zip_code,
        "country": address.country,
    }


def order_from_dict(data: Dict[str, Any]) -> Order:
    """Build an Order from the storefront's JSON shape (used for seed orders)."""
    try:
        address = data["shippingAddress"]
        payment = data["paymentMethod"]
        return Order(
            id=data["id"],
            user_id=data["userId"],
            items=tuple(line_from_dict(item) for item in data["items"]),
            total_amount=float(data["totalAmount"]),
            status=OrderStatus(data["status"]),
            date=datetime.fromisoformat(data["date"].replace("Z", "+00:00")),
            shipping_address=ShippingAddress(
                name=address["name"],
                street=address["street"],
                city=address["city"],
                state=address["state"],
                zip_code=address["zipCode"],
                country=address["country"],
            ),
            payment_method=PaymentMethod(
                type=PaymentType(payment["type"]),
                last_four=payment.get("lastFour"),
            ),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise PersistedDataCorrupt(f"bad order record: {e}") from e


def order_to_dict(order: Order) -> Dict[str, Any]:
    payment: Dict[str, Any] = {"type": order.payment_method.type.value}
    if order.payment_method.last_four:
        payment["lastFour"] = order.payment_method.last_four
    return {
        "id": order.id,
        "userId": order.user_id,
        "items": [line_to_dict(line) for line in order.items],
        "totalAmount": order.total_amount,
        "status": order.status.value,
        "date": order.date.isoformat(),
        "shippingAddress": address_to_dict(order.shipping_address),
        "paymentMethod": payment,
    }
