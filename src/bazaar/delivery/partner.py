"""DeliveryPartner aggregate: a user registered to carry orders.

Like a seller, the partner's identity is the user's id and approval is
one-shot (pending → approved | rejected). Only approved, available partners
can be assigned to orders.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Decimal, Identifier, Integer, String, Text

from bazaar.delivery.events import (
    DeliveryPartnerApproved,
    DeliveryPartnerRegistered,
    DeliveryPartnerRejected,
)
from bazaar.domain import bazaar
from bazaar.shared.exceptions import InvalidTransitionError


class VehicleType(Enum):
    BIKE = "bike"
    CYCLE = "cycle"
    AUTO = "auto"


class PartnerStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@bazaar.aggregate
class DeliveryPartner:
    user_id: Identifier(identifier=True)
    vehicle_type: String(choices=VehicleType, default=VehicleType.BIKE.value)
    vehicle_number: String(max_length=20)
    license_number: String(max_length=50)
    status: String(choices=PartnerStatus, default=PartnerStatus.PENDING.value)
    rejection_reason: Text(sanitize=False)
    is_available: Boolean(default=True)
    rating: Decimal(default=5, min_value=0, max_value=5, precision=3, scale=2)
    total_deliveries: Integer(default=0, min_value=0)
    registered_at: DateTime()

    @property
    def can_take_orders(self) -> bool:
        return self.status == PartnerStatus.APPROVED.value and self.is_available

    @classmethod
    def register(cls, user_id, vehicle_type, vehicle_number=None, license_number=None):
        now = datetime.now(UTC)
        partner = cls(
            user_id=user_id,
            vehicle_type=vehicle_type or VehicleType.BIKE.value,
            vehicle_number=vehicle_number,
            license_number=license_number,
            registered_at=now,
        )
        partner.raise_(
            DeliveryPartnerRegistered(
                partner_id=str(partner.user_id),
                vehicle_type=partner.vehicle_type,
                registered_at=now,
            )
        )
        return partner

    def approve(self, admin_id):
        self._ensure_pending(PartnerStatus.APPROVED)

        now = datetime.now(UTC)
        self.status = PartnerStatus.APPROVED.value
        self.raise_(DeliveryPartnerApproved(partner_id=str(self.user_id), decided_by=str(admin_id), decided_at=now))

    def reject(self, admin_id, reason):
        self._ensure_pending(PartnerStatus.REJECTED)
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["A rejection reason is required"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = PartnerStatus.REJECTED.value
            self.rejection_reason = reason.strip()

        self.raise_(
            DeliveryPartnerRejected(
                partner_id=str(self.user_id),
                decided_by=str(admin_id),
                reason=self.rejection_reason,
                decided_at=now,
            )
        )

    def set_availability(self, available: bool):
        self.is_available = available

    def record_delivery(self):
        self.total_deliveries += 1

    def _ensure_pending(self, target: PartnerStatus):
        if PartnerStatus(self.status) != PartnerStatus.PENDING:
            raise InvalidTransitionError("status", self.status, target.value)
