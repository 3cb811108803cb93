"""Delivery partner onboarding and delivery area endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from protean.utils.globals import current_domain

from bazaar.api.dependencies import current_user, require_admin
from bazaar.api.schemas import (
    DeliveryAreaRequest,
    DeliveryAreaResponse,
    PartnerResponse,
    RegisterPartnerRequest,
    RejectRequest,
)
from bazaar.delivery.area import DeliveryArea
from bazaar.delivery.management import (
    AddDeliveryArea,
    ApproveDeliveryPartner,
    RegisterDeliveryPartner,
    RejectDeliveryPartner,
    SetPartnerAvailability,
    area_for_pincode,
)
from bazaar.delivery.partner import DeliveryPartner
from bazaar.user.user import User

router = APIRouter(tags=["delivery"])


class AvailabilityRequest(BaseModel):
    is_available: bool


def _partner_response(partner_id) -> PartnerResponse:
    return PartnerResponse.from_partner(current_domain.repository_for(DeliveryPartner).get(partner_id))


# --- Partners ---


@router.post("/delivery-partners/register", status_code=201, response_model=PartnerResponse)
async def register_partner(body: RegisterPartnerRequest, user: User = Depends(current_user)):
    command = RegisterDeliveryPartner(
        user_id=str(user.id),
        vehicle_type=body.vehicle_type,
        vehicle_number=body.vehicle_number,
        license_number=body.license_number,
    )
    partner_id = current_domain.process(command, asynchronous=False)
    return JSONResponse(status_code=201, content=_partner_response(partner_id).model_dump(mode="json"))


@router.patch("/delivery-partners/me/availability", response_model=PartnerResponse)
async def set_availability(body: AvailabilityRequest, user: User = Depends(current_user)) -> PartnerResponse:
    command = SetPartnerAvailability(partner_id=str(user.id), is_available=body.is_available)
    current_domain.process(command, asynchronous=False)
    return _partner_response(str(user.id))


@router.post("/admin/delivery-partners/{partner_id}/approve", response_model=PartnerResponse)
async def approve_partner(partner_id: str, admin: User = Depends(require_admin)) -> PartnerResponse:
    command = ApproveDeliveryPartner(partner_id=partner_id, admin_id=str(admin.id))
    current_domain.process(command, asynchronous=False)
    return _partner_response(partner_id)


@router.post("/admin/delivery-partners/{partner_id}/reject", response_model=PartnerResponse)
async def reject_partner(
    partner_id: str, body: RejectRequest, admin: User = Depends(require_admin)
) -> PartnerResponse:
    command = RejectDeliveryPartner(partner_id=partner_id, admin_id=str(admin.id), reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return _partner_response(partner_id)


# --- Areas ---


@router.post("/admin/delivery-areas", status_code=201, response_model=DeliveryAreaResponse)
async def add_area(body: DeliveryAreaRequest, admin: User = Depends(require_admin)):
    area_id = current_domain.process(AddDeliveryArea(**body.model_dump()), asynchronous=False)
    area = current_domain.repository_for(DeliveryArea).get(area_id)
    return JSONResponse(status_code=201, content=DeliveryAreaResponse.from_area(area).model_dump(mode="json"))


@router.get("/delivery-areas/{pincode}", response_model=DeliveryAreaResponse)
async def get_area(pincode: str) -> DeliveryAreaResponse:
    return DeliveryAreaResponse.from_area(area_for_pincode(pincode))
