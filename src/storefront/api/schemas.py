"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Shared ---


class SizeQuantity(BaseModel):
    size: str = Field(..., max_length=50)
    quantity: int = 0


class ColorStock(BaseModel):
    name: str = Field(..., max_length=100)
    hex_code: str | None = Field(None, max_length=9)
    inventory: list[SizeQuantity] = []


class OwnerFields(BaseModel):
    """Exactly one of ``customer_id`` or ``session_id`` names the cart owner."""

    customer_id: str | None = None
    session_id: str | None = Field(None, max_length=255)


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Rainbow Hoodie",
                    "price": 1000.0,
                    "discount": 10,
                    "gender": "unisex",
                    "category": "hoodies",
                    "brand": "Little Acme",
                    "stock": [
                        {"name": "red", "hex_code": "#FF0000", "inventory": [{"size": "S", "quantity": 5}]},
                    ],
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    price: float = Field(..., ge=0)
    discount: float = Field(0.0, ge=0, le=100)
    gender: str = Field(..., max_length=10)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    image: str | None = Field(None, max_length=500)
    # ``[{size, quantity}]`` in sized mode, ``[{name, hex_code, inventory}]`` in colored mode
    stock: list[dict] = []


class UpdateProductDetailsRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    price: float | None = Field(None, ge=0)
    discount: float | None = Field(None, ge=0, le=100)
    gender: str | None = Field(None, max_length=10)
    description: str | None = None
    category: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    image: str | None = Field(None, max_length=500)


class VariantQuantityRequest(BaseModel):
    size: str = Field(..., max_length=50)
    color: str | None = Field(None, max_length=100)
    quantity: int


class ReplaceColorStockRequest(BaseModel):
    inventory: list[SizeQuantity]


class AddColorRequest(ColorStock):
    hex_code: str = Field(..., max_length=9)


# --- Customer Request Schemas ---


class RegisterCustomerRequest(BaseModel):
    name: str = Field(..., max_length=150)
    email: str = Field(..., max_length=254)
    role: str | None = Field(None, max_length=20)


# --- Cart Request Schemas ---


class CartItemRequest(OwnerFields):
    product_id: str
    size: str = Field(..., max_length=50)
    color: str | None = Field(None, max_length=100)
    quantity: int = 1


# --- Order Request Schemas ---


class PlaceOrderRequest(OwnerFields):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "session_id": "sess-8f2c",
                    "guest_email": "guest@example.com",
                    "guest_name": "Sam Guest",
                    "address": "1 Main St, Springfield",
                    "phone_number": "+1-555-0100",
                }
            ]
        }
    }

    guest_email: str | None = Field(None, max_length=254)
    guest_name: str | None = Field(None, max_length=150)
    address: str | None = Field(None, max_length=500)
    phone_number: str | None = Field(None, max_length=30)


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class CustomerIdResponse(BaseModel):
    customer_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ColorAvailability(BaseModel):
    name: str
    hex_code: str | None = None
    available_sizes: list[SizeQuantity]


class ProductResponse(BaseModel):
    product_id: str
    title: str
    description: str | None = None
    price: float
    discount: float
    discounted_price: float
    savings: float
    is_on_sale: bool
    gender: str
    category: str | None = None
    brand: str | None = None
    image: str | None = None
    total_quantity: int
    available_sizes: list[str]
    available_colors: list[ColorAvailability]

    @classmethod
    def of(cls, product) -> ProductResponse:
        return cls(
            product_id=str(product.id),
            title=product.title,
            description=product.description,
            price=product.price,
            discount=product.discount or 0.0,
            discounted_price=product.discounted_price,
            savings=product.savings,
            is_on_sale=product.is_on_sale,
            gender=product.gender,
            category=product.category,
            brand=product.brand,
            image=product.image,
            total_quantity=product.total_quantity,
            available_sizes=product.available_sizes,
            available_colors=product.available_colors,
        )


class CartItemResponse(BaseModel):
    product_id: str
    size: str
    color: str | None = None
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    customer_id: str | None = None
    session_id: str | None = None
    is_guest: bool
    items: list[CartItemResponse]
    total_amount: float

    @classmethod
    def of(cls, cart) -> CartResponse:
        return cls(
            cart_id=str(cart.id),
            customer_id=str(cart.customer_id) if cart.customer_id else None,
            session_id=cart.session_id,
            is_guest=cart.is_guest,
            items=[
                CartItemResponse(product_id=str(i.product_id), size=i.size, color=i.color, quantity=i.quantity)
                for i in cart.items
            ],
            total_amount=cart.total_amount,
        )


class OrderLineResponse(BaseModel):
    product_id: str
    title: str
    size: str
    color: str | None = None
    quantity: int
    unit_price: float
    line_total: float


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str | None = None
    is_guest: bool
    guest_email: str | None = None
    guest_name: str | None = None
    lines: list[OrderLineResponse]
    total_price: float
    status: str
    address: str | None = None
    phone_number: str | None = None
    new_customer_discount: bool

    @classmethod
    def of(cls, order) -> OrderResponse:
        contact = order.guest_contact
        return cls(
            order_id=str(order.id),
            customer_id=str(order.customer_id) if order.customer_id else None,
            is_guest=order.is_guest,
            guest_email=contact.email if contact else None,
            guest_name=contact.name if contact else None,
            lines=[
                OrderLineResponse(
                    product_id=str(line.product_id),
                    title=line.title,
                    size=line.size,
                    color=line.color,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    line_total=line.line_total,
                )
                for line in order.lines
            ],
            total_price=order.total_price,
            status=order.status,
            address=order.address,
            phone_number=order.phone_number,
            new_customer_discount=order.new_customer_discount,
        )
