"""Checkout, order history and order lifecycle endpoints."""

import json

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from bazaar.api.dependencies import current_user, require_admin
from bazaar.api.schemas import (
    AssignPartnerRequest,
    CancelOrderRequest,
    OrderResponse,
    PlaceOrderRequest,
    RecordPaymentRequest,
    UpdateOrderStatusRequest,
)
from bazaar.order.checkout import PlaceOrder
from bazaar.order.history import list_for_user, order_for_user
from bazaar.order.lifecycle import AssignDeliveryPartner, CancelOrder, RecordPayment, UpdateOrderStatus
from bazaar.order.order import Order
from bazaar.user.user import User

router = APIRouter(prefix="/orders", tags=["orders"])


def _order_response(order_id) -> OrderResponse:
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))


@router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, user: User = Depends(current_user)):
    command = PlaceOrder(
        user_id=str(user.id),
        payment_method=body.payment_method,
        delivery_address=json.dumps(body.delivery_address.model_dump()),
        delivery_instructions=body.delivery_instructions,
        promo_code=body.promo_code,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return JSONResponse(status_code=201, content=_order_response(order_id).model_dump(mode="json"))


# Declared before /{order_id} so "me" is not read as an id.
@router.get("/me", response_model=list[OrderResponse])
async def my_orders(user: User = Depends(current_user)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in list_for_user(str(user.id))]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_order(order_for_user(str(user.id), order_id))


@router.post("/{order_id}/status", response_model=OrderResponse)
async def update_status(
    order_id: str, body: UpdateOrderStatusRequest, user: User = Depends(current_user)
) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        actor_id=str(user.id),
        message=body.message,
        message_hindi=body.message_hindi,
        location=body.location,
        estimated_delivery_at=body.estimated_delivery_at,
    )
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id)


@router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str, body: CancelOrderRequest | None = None, user: User = Depends(current_user)
) -> OrderResponse:
    command = CancelOrder(order_id=order_id, actor_id=str(user.id), reason=body.reason if body else None)
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id)


@router.post("/{order_id}/assign", response_model=OrderResponse)
async def assign_partner(
    order_id: str, body: AssignPartnerRequest, admin: User = Depends(require_admin)
) -> OrderResponse:
    command = AssignDeliveryPartner(order_id=order_id, partner_id=body.partner_id, actor_id=str(admin.id))
    current_domain.process(command, asynchronous=False)
    return _order_response(order_id)


@router.post("/{order_id}/payment", response_model=OrderResponse)
async def record_payment(
    order_id: str, body: RecordPaymentRequest, admin: User = Depends(require_admin)
) -> OrderResponse:
    current_domain.process(
        RecordPayment(order_id=order_id, payment_status=body.payment_status), asynchronous=False
    )
    return _order_response(order_id)
