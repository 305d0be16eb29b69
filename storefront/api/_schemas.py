"""
HTTP codec: pydantic request/response models.

Request models convert inward with to_domain(); response models are built
with from_domain() and carry the {"status": "success", "data": ...} envelope.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from storefront.accounts import MAX_PASSWORD_BYTES, Registration, Role, Session, User
from storefront.cart import Cart, CartItem
from storefront.catalog import Product, ProductDraft, ProductPatch
from storefront.orders import CancelOutcome, Order, OrderItem, OrderStatus

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterIn(BaseModel):
    name: str = Field(min_length=2, max_length=80)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(min_length=6, max_length=72)
    role: Literal["customer", "admin"] = "customer"

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return value

    def to_domain(self) -> Registration:
        return Registration(
            name=self.name,
            email=self.email,
            password=self.password,
            role=Role(self.role),
        )


class LoginIn(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: str
    is_blocked: bool
    cancellation_count: int
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            is_blocked=user.fraud.is_blocked,
            cancellation_count=user.fraud.cancellation_count,
            created_at=user.created_at,
        )


class UserData(BaseModel):
    user: UserOut


class SessionOut(BaseModel):
    status: Literal["success"] = "success"
    token: str
    data: UserData

    @classmethod
    def from_domain(cls, session: Session) -> SessionOut:
        return cls(token=session.token, data=UserData(user=UserOut.from_domain(session.user)))


class UserEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: UserData

    @classmethod
    def from_domain(cls, user: User) -> UserEnvelope:
        return cls(data=UserData(user=UserOut.from_domain(user)))


# ═══════════════════════════════════════════════════════════════════════════════
# Products
# ═══════════════════════════════════════════════════════════════════════════════


class ProductIn(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    price: int = Field(ge=0, description="Price in cents")
    stock: int = Field(ge=0)
    category: str = Field(min_length=1, max_length=80)

    def to_domain(self) -> ProductDraft:
        return ProductDraft(
            title=self.title,
            description=self.description,
            price=self.price,
            stock=self.stock,
            category=self.category,
        )


class ProductPatchIn(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    price: int | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, min_length=1, max_length=80)

    def to_domain(self) -> ProductPatch:
        return ProductPatch(
            title=self.title,
            description=self.description,
            price=self.price,
            stock=self.stock,
            category=self.category,
        )


class ProductOut(BaseModel):
    id: str
    title: str
    description: str
    price: int
    stock: int
    category: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, p: Product) -> ProductOut:
        return cls(
            id=p.id,
            title=p.title,
            description=p.description,
            price=p.price,
            stock=p.stock,
            category=p.category,
            created_at=p.created_at,
            updated_at=p.updated_at,
        )


class ProductData(BaseModel):
    product: ProductOut


class ProductEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: ProductData

    @classmethod
    def from_domain(cls, p: Product) -> ProductEnvelope:
        return cls(data=ProductData(product=ProductOut.from_domain(p)))


class ProductsData(BaseModel):
    products: list[ProductOut]


class ProductListEnvelope(BaseModel):
    status: Literal["success"] = "success"
    results: int
    data: ProductsData

    @classmethod
    def from_domain(cls, products: list[Product]) -> ProductListEnvelope:
        return cls(
            results=len(products),
            data=ProductsData(products=[ProductOut.from_domain(p) for p in products]),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Cart
# ═══════════════════════════════════════════════════════════════════════════════


class CartItemIn(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class CartQuantityIn(BaseModel):
    quantity: int = Field(ge=0)


class CartItemOut(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: int
    name: str

    @classmethod
    def from_domain(cls, item: CartItem) -> CartItemOut:
        return cls(
            id=item.id,
            product_id=item.product_id,
            quantity=item.quantity,
            price=item.price,
            name=item.name,
        )


class CartOut(BaseModel):
    user_id: str
    items: list[CartItemOut]
    total_price: int


class CartData(BaseModel):
    cart: CartOut


class CartEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: CartData

    @classmethod
    def from_domain(cls, cart: Cart) -> CartEnvelope:
        return cls(
            data=CartData(
                cart=CartOut(
                    user_id=cart.user_id,
                    items=[CartItemOut.from_domain(i) for i in cart.items],
                    total_price=cart.total_price,
                )
            )
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatusIn(BaseModel):
    status: OrderStatus


class OrderItemOut(BaseModel):
    product_id: str
    name: str
    price: int
    quantity: int

    @classmethod
    def from_domain(cls, item: OrderItem) -> OrderItemOut:
        return cls(
            product_id=item.product_id,
            name=item.name,
            price=item.price,
            quantity=item.quantity,
        )


class OrderOut(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemOut]
    total_amount: int
    status: str
    payment_status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> OrderOut:
        return cls(
            id=order.id,
            user_id=order.user_id,
            items=[OrderItemOut.from_domain(i) for i in order.items],
            total_amount=order.total_amount,
            status=order.status.value,
            payment_status=order.payment_status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderData(BaseModel):
    order: OrderOut


class OrderEnvelope(BaseModel):
    status: Literal["success"] = "success"
    data: OrderData

    @classmethod
    def from_domain(cls, order: Order) -> OrderEnvelope:
        return cls(data=OrderData(order=OrderOut.from_domain(order)))


class OrdersData(BaseModel):
    orders: list[OrderOut]


class OrderListEnvelope(BaseModel):
    status: Literal["success"] = "success"
    results: int
    data: OrdersData

    @classmethod
    def from_domain(cls, orders: list[Order]) -> OrderListEnvelope:
        return cls(
            results=len(orders),
            data=OrdersData(orders=[OrderOut.from_domain(o) for o in orders]),
        )


class CancelData(BaseModel):
    order: OrderOut
    account_suspended: bool


class CancelEnvelope(BaseModel):
    status: Literal["success"] = "success"
    message: str
    data: CancelData

    @classmethod
    def from_domain(cls, outcome: CancelOutcome) -> CancelEnvelope:
        return cls(
            message=outcome.message,
            data=CancelData(
                order=OrderOut.from_domain(outcome.order),
                account_suspended=outcome.account_suspended,
            ),
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Misc
# ═══════════════════════════════════════════════════════════════════════════════


class MessageOut(BaseModel):
    status: Literal["success"] = "success"
    message: str


__all__ = (
    "RegisterIn",
    "LoginIn",
    "UserOut",
    "SessionOut",
    "UserEnvelope",
    "ProductIn",
    "ProductPatchIn",
    "ProductOut",
    "ProductEnvelope",
    "ProductListEnvelope",
    "CartItemIn",
    "CartQuantityIn",
    "CartEnvelope",
    "OrderStatusIn",
    "OrderOut",
    "OrderEnvelope",
    "OrderListEnvelope",
    "CancelEnvelope",
    "MessageOut",
)
