"""Delivery areas and partner onboarding: commands, handlers and reads."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Decimal, Identifier, String, Text
from protean.utils.globals import current_domain

from bazaar.delivery.area import DeliveryArea
from bazaar.delivery.partner import DeliveryPartner
from bazaar.domain import bazaar
from bazaar.shared.exceptions import ConflictError, NotFoundError
from bazaar.user.accounts import UserRole
from bazaar.user.user import User

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Delivery areas
# ---------------------------------------------------------------------------
@bazaar.command(part_of="DeliveryArea")
class AddDeliveryArea:
    area_name: String(required=True, max_length=100, sanitize=False)
    pincode: String(required=True, max_length=6)
    city: String(required=True, max_length=100, sanitize=False)
    delivery_charge: Decimal(required=True, min_value=0)
    free_delivery_above: Decimal(min_value=0)


@bazaar.command(part_of="DeliveryArea")
class DeactivateDeliveryArea:
    area_id: Identifier(required=True)


@bazaar.command_handler(part_of=DeliveryArea)
class ManageDeliveryAreaHandler:
    @handle(AddDeliveryArea)
    def add_delivery_area(self, command):
        area = DeliveryArea.create(
            area_name=command.area_name,
            pincode=command.pincode,
            city=command.city,
            delivery_charge=command.delivery_charge,
            free_delivery_above=command.free_delivery_above,
        )
        current_domain.repository_for(DeliveryArea).add(area)
        logger.info("delivery_area_added", area_id=str(area.id), pincode=area.pincode)
        return str(area.id)

    @handle(DeactivateDeliveryArea)
    def deactivate_delivery_area(self, command):
        repo = current_domain.repository_for(DeliveryArea)
        area = repo.get(command.area_id)
        area.is_active = False
        repo.add(area)


def area_for_pincode(pincode) -> DeliveryArea:
    area = current_domain.repository_for(DeliveryArea).active_for_pincode(pincode)
    if area is None:
        raise NotFoundError(f"No delivery to pincode {pincode}")
    return area


# ---------------------------------------------------------------------------
# Delivery partners
# ---------------------------------------------------------------------------
@bazaar.command(part_of="DeliveryPartner")
class RegisterDeliveryPartner:
    user_id: Identifier(required=True)
    vehicle_type: String(required=True, max_length=10)
    vehicle_number: String(max_length=20)
    license_number: String(max_length=50)


@bazaar.command(part_of="DeliveryPartner")
class ApproveDeliveryPartner:
    partner_id: Identifier(required=True)
    admin_id: Identifier(required=True)


@bazaar.command(part_of="DeliveryPartner")
class RejectDeliveryPartner:
    partner_id: Identifier(required=True)
    admin_id: Identifier(required=True)
    reason: Text(sanitize=False)


@bazaar.command(part_of="DeliveryPartner")
class SetPartnerAvailability:
    partner_id: Identifier(required=True)
    is_available: Boolean(required=True)


@bazaar.command_handler(part_of=DeliveryPartner)
class DeliveryPartnerOnboardingHandler:
    @handle(RegisterDeliveryPartner)
    def register_partner(self, command):
        partners = current_domain.repository_for(DeliveryPartner)
        users = current_domain.repository_for(User)

        if partners.get_or_none(command.user_id) is not None:
            raise ConflictError("Delivery partner registration already exists")

        user = users.get(command.user_id)
        user.apply_for_role(UserRole.DELIVERY_BOY)

        partner = DeliveryPartner.register(
            user_id=command.user_id,
            vehicle_type=command.vehicle_type,
            vehicle_number=command.vehicle_number,
            license_number=command.license_number,
        )
        try:
            partners.add(partner)
        except ValidationError as exc:
            if "user_id" in exc.messages:
                raise ConflictError("Delivery partner registration already exists") from exc
            raise
        users.add(user)

        logger.info("delivery_partner_registered", partner_id=str(partner.user_id))
        return str(partner.user_id)

    @handle(ApproveDeliveryPartner)
    def approve_partner(self, command):
        partners = current_domain.repository_for(DeliveryPartner)
        users = current_domain.repository_for(User)

        partner = partners.get(command.partner_id)
        partner.approve(command.admin_id)
        user = users.get(partner.user_id)
        user.record_approval(UserRole.DELIVERY_BOY, approved=True)

        partners.add(partner)
        users.add(user)

    @handle(RejectDeliveryPartner)
    def reject_partner(self, command):
        partners = current_domain.repository_for(DeliveryPartner)
        users = current_domain.repository_for(User)

        partner = partners.get(command.partner_id)
        partner.reject(command.admin_id, command.reason)
        user = users.get(partner.user_id)
        user.record_approval(UserRole.DELIVERY_BOY, approved=False)

        partners.add(partner)
        users.add(user)

    @handle(SetPartnerAvailability)
    def set_availability(self, command):
        repo = current_domain.repository_for(DeliveryPartner)
        partner = repo.get(command.partner_id)
        partner.set_availability(command.is_available)
        repo.add(partner)
