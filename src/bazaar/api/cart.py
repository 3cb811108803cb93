"""Cart endpoints. Every route works on the caller's own cart."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from bazaar.api.dependencies import current_user
from bazaar.api.schemas import AddToCartRequest, CartLineResponse, CartResponse, UpdateCartItemRequest
from bazaar.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from bazaar.cart.snapshot import cart_snapshot
from bazaar.user.user import User

router = APIRouter(prefix="/cart", tags=["cart"])


def _line_response(user_id: str, item_id: str) -> CartLineResponse:
    line = next(line for line in cart_snapshot(user_id).lines if line.item_id == item_id)
    return CartLineResponse.from_line(line)


@router.get("", response_model=CartResponse)
async def get_cart(user: User = Depends(current_user)) -> CartResponse:
    return CartResponse.from_snapshot(cart_snapshot(str(user.id)))


@router.post("/items", response_model=CartLineResponse)
async def add_item(body: AddToCartRequest, user: User = Depends(current_user)) -> CartLineResponse:
    command = AddToCart(
        user_id=str(user.id),
        product_id=body.product_id,
        quantity=body.quantity,
        session_id=body.session_id,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return _line_response(str(user.id), item_id)


@router.put("/items/{item_id}", response_model=CartLineResponse)
async def update_item(item_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)) -> CartLineResponse:
    command = UpdateCartItem(user_id=str(user.id), item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _line_response(str(user.id), item_id)


@router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_item(item_id: str, user: User = Depends(current_user)) -> CartResponse:
    current_domain.process(RemoveFromCart(user_id=str(user.id), item_id=item_id), asynchronous=False)
    return CartResponse.from_snapshot(cart_snapshot(str(user.id)))


@router.delete("", response_model=CartResponse)
async def clear_cart(user: User = Depends(current_user)) -> CartResponse:
    current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return CartResponse.from_snapshot(cart_snapshot(str(user.id)))
