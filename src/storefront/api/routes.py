"""FastAPI routes for the Storefront — products, customers, carts and orders."""

import json

from fastapi import APIRouter, BackgroundTasks
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddColorRequest,
    CartItemRequest,
    CartResponse,
    CreateProductRequest,
    CustomerIdResponse,
    OrderResponse,
    OwnerFields,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductResponse,
    RegisterCustomerRequest,
    ReplaceColorStockRequest,
    StatusResponse,
    UpdateProductDetailsRequest,
    VariantQuantityRequest,
)
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.cart.reconciliation import ReconcileCart
from storefront.catalogue.creation import CreateProduct, DeleteProduct, UpdateProductDetails
from storefront.catalogue.inventory import (
    AddColor,
    AddStock,
    ReduceStock,
    RemoveColor,
    ReplaceColorStock,
    SetStock,
)
from storefront.catalogue.product import Product
from storefront.customer.registration import RegisterCustomer
from storefront.notification.confirmation import notify_order_placed_in_background
from storefront.order.checkout import submit_order
from storefront.order.modification import update_order
from storefront.order.order import Order
from storefront.order.removal import DeleteOrder


def _cart_response(cart_id) -> CartResponse:
    return CartResponse.of(current_domain.repository_for(Cart).get(cart_id))


def _order_response(order_id) -> OrderResponse:
    return OrderResponse.of(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        title=body.title,
        price=body.price,
        discount=body.discount,
        gender=body.gender,
        description=body.description,
        category=body.category,
        brand=body.brand,
        image=body.image,
        stock=json.dumps(body.stock),
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.of(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product_details(product_id: str, body: UpdateProductDetailsRequest) -> StatusResponse:
    command = UpdateProductDetails(product_id=product_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/inventory", response_model=ProductResponse)
async def set_stock(product_id: str, body: VariantQuantityRequest) -> ProductResponse:
    command = SetStock(product_id=product_id, size=body.size, color=body.color, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return await get_product(product_id)


@product_router.put("/{product_id}/inventory/colors/{color}", response_model=ProductResponse)
async def replace_color_stock(product_id: str, color: str, body: ReplaceColorStockRequest) -> ProductResponse:
    command = ReplaceColorStock(
        product_id=product_id,
        color=color,
        inventory=json.dumps([entry.model_dump() for entry in body.inventory]),
    )
    current_domain.process(command, asynchronous=False)
    return await get_product(product_id)


@product_router.post("/{product_id}/inventory/add", response_model=ProductResponse)
async def add_stock(product_id: str, body: VariantQuantityRequest) -> ProductResponse:
    command = AddStock(product_id=product_id, size=body.size, color=body.color, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return await get_product(product_id)


@product_router.post("/{product_id}/inventory/reduce", response_model=ProductResponse)
async def reduce_stock(product_id: str, body: VariantQuantityRequest) -> ProductResponse:
    command = ReduceStock(product_id=product_id, size=body.size, color=body.color, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return await get_product(product_id)


@product_router.post("/{product_id}/colors", status_code=201, response_model=ProductResponse)
async def add_color(product_id: str, body: AddColorRequest) -> ProductResponse:
    command = AddColor(
        product_id=product_id,
        name=body.name,
        hex_code=body.hex_code,
        inventory=json.dumps([entry.model_dump() for entry in body.inventory]),
    )
    current_domain.process(command, asynchronous=False)
    return await get_product(product_id)


@product_router.delete("/{product_id}/colors/{name}", response_model=ProductResponse)
async def remove_color(product_id: str, name: str) -> ProductResponse:
    current_domain.process(RemoveColor(product_id=product_id, name=name), asynchronous=False)
    return await get_product(product_id)


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/customers", tags=["customers"])


@customer_router.post("", status_code=201, response_model=CustomerIdResponse)
async def register_customer(body: RegisterCustomerRequest) -> CustomerIdResponse:
    command = RegisterCustomer(name=body.name, email=body.email, role=body.role)
    result = current_domain.process(command, asynchronous=False)
    return CustomerIdResponse(customer_id=result)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/customer/{customer_id}", response_model=CartResponse)
async def get_customer_cart(customer_id: str) -> CartResponse:
    cart_id = current_domain.process(ReconcileCart(customer_id=customer_id), asynchronous=False)
    return _cart_response(cart_id)


@cart_router.get("/guest/{session_id}", response_model=CartResponse)
async def get_guest_cart(session_id: str) -> CartResponse:
    cart_id = current_domain.process(ReconcileCart(session_id=session_id), asynchronous=False)
    return _cart_response(cart_id)


@cart_router.post("/items", response_model=CartResponse)
async def add_to_cart(body: CartItemRequest) -> CartResponse:
    command = AddToCart(
        customer_id=body.customer_id,
        session_id=body.session_id,
        product_id=body.product_id,
        size=body.size,
        color=body.color,
        quantity=body.quantity,
    )
    return _cart_response(current_domain.process(command, asynchronous=False))


@cart_router.put("/items", response_model=CartResponse)
async def update_cart_item(body: CartItemRequest) -> CartResponse:
    command = UpdateCartItem(
        customer_id=body.customer_id,
        session_id=body.session_id,
        product_id=body.product_id,
        size=body.size,
        color=body.color,
        quantity=body.quantity,
    )
    return _cart_response(current_domain.process(command, asynchronous=False))


@cart_router.delete("/items", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    size: str,
    color: str | None = None,
    customer_id: str | None = None,
    session_id: str | None = None,
) -> CartResponse:
    command = RemoveFromCart(
        customer_id=customer_id,
        session_id=session_id,
        product_id=product_id,
        size=size,
        color=color,
    )
    return _cart_response(current_domain.process(command, asynchronous=False))


@cart_router.post("/clear", response_model=CartResponse)
async def clear_cart(body: OwnerFields) -> CartResponse:
    command = ClearCart(customer_id=body.customer_id, session_id=body.session_id)
    return _cart_response(current_domain.process(command, asynchronous=False))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: PlaceOrderRequest, background_tasks: BackgroundTasks) -> OrderResponse:
    order_id = submit_order(**body.model_dump(exclude_none=True))
    background_tasks.add_task(notify_order_placed_in_background, order_id)
    return _order_response(order_id)


@order_router.get("/customer/{customer_id}", response_model=list[OrderResponse])
async def list_customer_orders(customer_id: str) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_customer(customer_id)
    return [OrderResponse.of(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    return _order_response(order_id)


@order_router.patch("/{order_id}", response_model=OrderResponse)
async def modify_order(order_id: str, body: dict) -> OrderResponse:
    update_order(order_id, body)
    return _order_response(order_id)


@order_router.delete("/{order_id}", response_model=StatusResponse)
async def delete_order(order_id: str) -> StatusResponse:
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()
