"""Promo code administration."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from bazaar.api.dependencies import require_admin
from bazaar.api.schemas import CreatePromoCodeRequest, PromoCodeResponse
from bazaar.promotion.management import CreatePromoCode
from bazaar.promotion.promo_code import PromoCode
from bazaar.user.user import User

router = APIRouter(prefix="/admin/promo-codes", tags=["promotions"])


@router.post("", status_code=201, response_model=PromoCodeResponse)
async def create_promo_code(body: CreatePromoCodeRequest, admin: User = Depends(require_admin)):
    promo_id = current_domain.process(CreatePromoCode(**body.model_dump()), asynchronous=False)
    promo = current_domain.repository_for(PromoCode).get(promo_id)
    return JSONResponse(status_code=201, content={"id": str(promo.id), "code": promo.code})
