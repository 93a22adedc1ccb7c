"""
Project: Tableside
Description:
Domain types for orders and tables plus the SQLAlchemy row used when the
document store runs on a database instead of process memory.
"""

import copy
import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow():
    return datetime.now(timezone.utc)


def now_iso():
    return utcnow().isoformat()


def new_id():
    return str(uuid.uuid4())


class OrderStatus(str, enum.Enum):
    DRAFT = "draft"
    PAID = "paid"
    ACCEPTED = "accepted"
    PREPARING = "preparing"
    SERVING = "serving"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def is_terminal(self):
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


# Forward path; cancelled is reachable from every non-terminal state.
STATUS_FLOW = [
    OrderStatus.DRAFT,
    OrderStatus.PAID,
    OrderStatus.ACCEPTED,
    OrderStatus.PREPARING,
    OrderStatus.SERVING,
    OrderStatus.COMPLETED,
]


class TableStatus(str, enum.Enum):
    AVAILABLE = "available"
    RESERVED = "reserved"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


def size_key(size):
    """Comparable key for an item size, which may be a Size object or a plain name."""
    if isinstance(size, dict):
        return size.get("id") or size.get("name")
    return size


@dataclass
class OrderItem:
    product_id: str
    name: str
    price: float
    quantity: int = 1
    total_price: float = None
    size: object = None
    options: dict = field(default_factory=dict)
    status: str = "pending"
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        self.price = float(self.price)
        if self.total_price is None:
            self.total_price = self.price
        self.total_price = float(self.total_price)
        self.quantity = int(self.quantity)

    @property
    def line_total(self):
        return self.total_price * self.quantity

    def same_line(self, other):
        return self.product_id == other.product_id and size_key(self.size) == size_key(other.size)

    def to_dict(self):
        return {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "price": self.price,
            "totalPrice": self.total_price,
            "quantity": self.quantity,
            "size": self.size,
            "options": self.options,
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data):
        kwargs = {
            "product_id": data.get("productId"),
            "name": data.get("name") or "Item",
            "price": data.get("price", 0),
            "quantity": data.get("quantity", 1),
            "total_price": data.get("totalPrice"),
            "size": data.get("size"),
            "options": dict(data.get("options") or {}),
            "status": data.get("status") or "pending",
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)


@dataclass
class Order:
    order_number: str
    id: str = field(default_factory=new_id)
    venue_id: str = None
    user_id: str = None
    table_id: str = None
    type: str = None
    items: list = field(default_factory=list)
    status: OrderStatus = OrderStatus.DRAFT
    total: float = 0.0
    tip: float = 0.0
    additional_tip: float = 0.0
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)
    extra: dict = field(default_factory=dict)

    def recompute_total(self):
        self.total = round(sum(item.line_total for item in self.items), 2)
        return self.total

    def touch(self):
        self.updated_at = now_iso()

    def find_item(self, item_id):
        return next((i for i in self.items if i.id == item_id), None)

    def to_dict(self):
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "orderNumber": self.order_number,
            "venueId": self.venue_id,
            "userId": self.user_id,
            "tableId": self.table_id,
            "type": self.type,
            "items": [i.to_dict() for i in self.items],
            "status": self.status.value,
            "total": self.total,
            "tip": self.tip,
            "additionalTip": self.additional_tip,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        })
        return data

    @classmethod
    def from_dict(cls, data):
        known = {
            "id", "orderNumber", "venueId", "userId", "tableId", "type", "items",
            "status", "total", "tip", "additionalTip", "createdAt", "updatedAt",
        }
        order = cls(
            id=data["id"],
            order_number=data.get("orderNumber"),
            venue_id=data.get("venueId"),
            user_id=data.get("userId"),
            table_id=data.get("tableId"),
            type=data.get("type"),
            items=[OrderItem.from_dict(i) for i in data.get("items") or []],
            status=OrderStatus(data.get("status") or OrderStatus.DRAFT.value),
            total=float(data.get("total") or 0),
            tip=float(data.get("tip") or 0),
            additional_tip=float(data.get("additionalTip") or 0),
            created_at=data.get("createdAt") or now_iso(),
            updated_at=data.get("updatedAt") or now_iso(),
            extra={k: v for k, v in data.items() if k not in known},
        )
        return order


class Record(db.Model):
    """One stored document; `kind` names the collection it belongs to."""

    __tablename__ = "records"

    kind = db.Column(db.String(40), primary_key=True)
    id = db.Column(db.String(64), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    payload = db.Column(db.JSON, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return copy.deepcopy(self.payload)
