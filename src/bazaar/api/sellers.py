"""Seller onboarding endpoints, for applicants and for admins."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from bazaar.api.dependencies import current_user, require_admin
from bazaar.api.schemas import ApplyAsSellerRequest, RejectRequest, SellerResponse
from bazaar.seller.onboarding import (
    ApplyAsSeller,
    ApproveSeller,
    RejectSeller,
    pending_sellers,
    seller_for_user,
)
from bazaar.user.user import User

router = APIRouter(tags=["sellers"])


@router.post("/sellers/apply", status_code=201, response_model=SellerResponse)
async def apply(body: ApplyAsSellerRequest, user: User = Depends(current_user)):
    command = ApplyAsSeller(user_id=str(user.id), **body.model_dump())
    seller_id = current_domain.process(command, asynchronous=False)
    seller = seller_for_user(seller_id)
    return JSONResponse(status_code=201, content=SellerResponse.from_seller(seller).model_dump(mode="json"))


@router.get("/seller/me", response_model=SellerResponse)
async def my_store(user: User = Depends(current_user)) -> SellerResponse:
    return SellerResponse.from_seller(seller_for_user(str(user.id)))


@router.get("/admin/sellers", response_model=list[SellerResponse])
async def pending(admin: User = Depends(require_admin)) -> list[SellerResponse]:
    return [SellerResponse.from_seller(s) for s in pending_sellers()]


@router.post("/admin/sellers/{seller_id}/approve", response_model=SellerResponse)
async def approve(seller_id: str, admin: User = Depends(require_admin)) -> SellerResponse:
    current_domain.process(ApproveSeller(seller_id=seller_id, admin_id=str(admin.id)), asynchronous=False)
    return SellerResponse.from_seller(seller_for_user(seller_id))


@router.post("/admin/sellers/{seller_id}/reject", response_model=SellerResponse)
async def reject(seller_id: str, body: RejectRequest, admin: User = Depends(require_admin)) -> SellerResponse:
    command = RejectSeller(seller_id=seller_id, admin_id=str(admin.id), reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return SellerResponse.from_seller(seller_for_user(seller_id))
