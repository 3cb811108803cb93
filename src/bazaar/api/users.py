"""Registration, sign-in and profile endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from bazaar.api.dependencies import current_user, verified_identity
from bazaar.api.schemas import AccountResponse, MeResponse, RegisterRequest, UserResponse
from bazaar.auth import VerifiedIdentity
from bazaar.user.accounts import DeliveryPartnerAccount, SellerAccount
from bazaar.user.registration import RegisterUser, SignIn
from bazaar.user.user import User

router = APIRouter(tags=["users"])


@router.post("/auth/register", status_code=201, response_model=UserResponse)
async def register(body: RegisterRequest, identity: VerifiedIdentity = Depends(verified_identity)):
    command = RegisterUser(
        external_id=identity.external_id,
        email=identity.email,
        name=body.name or identity.name,
        phone=body.phone,
        address=body.address,
        city=body.city,
        pincode=body.pincode,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return JSONResponse(status_code=201, content=UserResponse.from_user(user).model_dump(mode="json"))


@router.post("/auth/login", response_model=UserResponse)
async def login(identity: VerifiedIdentity = Depends(verified_identity)) -> UserResponse:
    command = SignIn(external_id=identity.external_id, email=identity.email, name=identity.name)
    user_id = current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(current_domain.repository_for(User).get(user_id))


@router.get("/me", response_model=MeResponse)
async def me(user: User = Depends(current_user)) -> MeResponse:
    account = user.account
    return MeResponse(
        user=UserResponse.from_user(user),
        account=AccountResponse(
            kind=account.role.value,
            approval_status=getattr(account, "approval_status", None) and account.approval_status.value,
            can_sell=isinstance(account, SellerAccount) and account.can_sell,
            can_deliver=isinstance(account, DeliveryPartnerAccount) and account.can_deliver,
        ),
    )
