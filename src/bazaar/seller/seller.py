"""Seller aggregate: a store profile attached one-to-one to a User.

The seller's identity is the owning user's id, so storage rejects a second
application from the same user. The approval machine is one-shot::

    pending → approved
    pending → rejected (reason required)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from bazaar.domain import bazaar
from bazaar.seller.events import SellerApplied, SellerApproved, SellerRejected
from bazaar.shared.exceptions import InvalidTransitionError


class SellerStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@bazaar.aggregate
class Seller:
    user_id: Identifier(identifier=True)
    store_name: String(required=True, max_length=200, sanitize=False)
    store_type: String(max_length=50, sanitize=False)
    address: Text(sanitize=False)
    city: String(max_length=100, sanitize=False)
    pincode: String(max_length=10)
    phone: String(max_length=20)
    license_number: String(max_length=100)
    gst_number: String(max_length=50)
    status: String(choices=SellerStatus, default=SellerStatus.PENDING.value)
    rejection_reason: Text(sanitize=False)
    applied_at: DateTime()
    decided_at: DateTime()
    decided_by: Identifier()

    @invariant.post
    def rejected_seller_must_have_a_reason(self):
        if self.status == SellerStatus.REJECTED.value and not (self.rejection_reason or "").strip():
            raise ValidationError({"reason": ["A rejection reason is required"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def apply(
        cls,
        user_id,
        store_name,
        store_type=None,
        address=None,
        city=None,
        pincode=None,
        phone=None,
        license_number=None,
        gst_number=None,
    ):
        now = datetime.now(UTC)
        seller = cls(
            user_id=user_id,
            store_name=store_name,
            store_type=store_type,
            address=address,
            city=city,
            pincode=pincode,
            phone=phone,
            license_number=license_number,
            gst_number=gst_number,
            status=SellerStatus.PENDING.value,
            applied_at=now,
        )
        seller.raise_(
            SellerApplied(
                seller_id=str(seller.user_id),
                store_name=store_name,
                city=city,
                pincode=pincode,
                applied_at=now,
            )
        )
        return seller

    # -------------------------------------------------------------------
    # Decisions
    # -------------------------------------------------------------------
    def approve(self, admin_id):
        self._ensure_pending(SellerStatus.APPROVED)

        now = datetime.now(UTC)
        self.status = SellerStatus.APPROVED.value
        self.decided_at = now
        self.decided_by = admin_id

        self.raise_(SellerApproved(seller_id=str(self.user_id), decided_by=str(admin_id), decided_at=now))

    def reject(self, admin_id, reason):
        self._ensure_pending(SellerStatus.REJECTED)
        if not reason or not reason.strip():
            raise ValidationError({"reason": ["A rejection reason is required"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = SellerStatus.REJECTED.value
            self.rejection_reason = reason.strip()
            self.decided_at = now
            self.decided_by = admin_id

        self.raise_(
            SellerRejected(
                seller_id=str(self.user_id),
                decided_by=str(admin_id),
                reason=self.rejection_reason,
                decided_at=now,
            )
        )

    def _ensure_pending(self, target: SellerStatus):
        if SellerStatus(self.status) != SellerStatus.PENDING:
            raise InvalidTransitionError("status", self.status, target.value)
