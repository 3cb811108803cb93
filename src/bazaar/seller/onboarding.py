"""Seller onboarding: application and admin decisions, with read helpers.

Every command touches both the Seller record and the owning User's role, and
both writes commit in the handler's unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from bazaar.domain import bazaar
from bazaar.seller.seller import Seller
from bazaar.shared.exceptions import ConflictError, NotFoundError
from bazaar.user.accounts import UserRole
from bazaar.user.user import User

logger = structlog.get_logger(__name__)


@bazaar.command(part_of="Seller")
class ApplyAsSeller:
    user_id: Identifier(required=True)
    store_name: String(required=True, max_length=200, sanitize=False)
    store_type: String(max_length=50, sanitize=False)
    address: Text(sanitize=False)
    city: String(max_length=100, sanitize=False)
    pincode: String(max_length=10)
    phone: String(max_length=20)
    license_number: String(max_length=100)
    gst_number: String(max_length=50)


@bazaar.command(part_of="Seller")
class ApproveSeller:
    seller_id: Identifier(required=True)
    admin_id: Identifier(required=True)


@bazaar.command(part_of="Seller")
class RejectSeller:
    seller_id: Identifier(required=True)
    admin_id: Identifier(required=True)
    reason: Text(sanitize=False)


@bazaar.command_handler(part_of=Seller)
class SellerOnboardingHandler:
    @handle(ApplyAsSeller)
    def apply_as_seller(self, command):
        sellers = current_domain.repository_for(Seller)
        users = current_domain.repository_for(User)

        if sellers.get_or_none(command.user_id) is not None:
            raise ConflictError("Seller application already exists")

        user = users.get(command.user_id)
        user.apply_for_role(UserRole.SELLER)

        seller = Seller.apply(
            user_id=command.user_id,
            store_name=command.store_name,
            store_type=command.store_type,
            address=command.address,
            city=command.city,
            pincode=command.pincode,
            phone=command.phone,
            license_number=command.license_number,
            gst_number=command.gst_number,
        )
        try:
            sellers.add(seller)
        except ValidationError as exc:
            if "user_id" in exc.messages:
                raise ConflictError("Seller application already exists") from exc
            raise
        users.add(user)

        logger.info("seller_applied", seller_id=str(seller.user_id))
        return str(seller.user_id)

    @handle(ApproveSeller)
    def approve_seller(self, command):
        sellers = current_domain.repository_for(Seller)
        users = current_domain.repository_for(User)

        seller = sellers.get(command.seller_id)
        seller.approve(command.admin_id)

        user = users.get(seller.user_id)
        user.record_approval(UserRole.SELLER, approved=True)

        sellers.add(seller)
        users.add(user)
        logger.info("seller_approved", seller_id=str(seller.user_id), admin_id=str(command.admin_id))

    @handle(RejectSeller)
    def reject_seller(self, command):
        sellers = current_domain.repository_for(Seller)
        users = current_domain.repository_for(User)

        seller = sellers.get(command.seller_id)
        seller.reject(command.admin_id, command.reason)

        user = users.get(seller.user_id)
        user.record_approval(UserRole.SELLER, approved=False)

        sellers.add(seller)
        users.add(user)
        logger.info("seller_rejected", seller_id=str(seller.user_id), admin_id=str(command.admin_id))


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def pending_sellers() -> list[Seller]:
    return current_domain.repository_for(Seller).pending()


def seller_for_user(user_id) -> Seller:
    seller = current_domain.repository_for(Seller).get_or_none(user_id)
    if seller is None:
        raise NotFoundError("No seller profile for this user")
    return seller
