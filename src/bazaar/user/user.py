"""User aggregate: identity record with a role and, for gated roles, an approval status."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from bazaar.domain import bazaar
from bazaar.shared.email import EmailAddress
from bazaar.shared.exceptions import AuthError, ConflictError, InvalidTransitionError
from bazaar.user.accounts import ApprovalStatus, UserRole, account_for
from bazaar.user.events import UserDeactivated, UserRegistered, UserRoleChanged, UserSignedIn


@bazaar.aggregate
class User:
    """A person on the marketplace, linked to an external identity.

    Users are never deleted. ``deactivate`` clears ``is_active`` and a
    deactivated user can no longer sign in.
    """

    external_id: String(max_length=255, unique=True)
    email: String(required=True, max_length=254, unique=True)
    name: String(max_length=200, sanitize=False)
    phone: String(max_length=20)
    address: String(max_length=500, sanitize=False)
    city: String(max_length=100, sanitize=False)
    pincode: String(max_length=10)
    role: String(choices=UserRole, default=UserRole.CUSTOMER.value)
    approval_status: String(choices=ApprovalStatus)
    is_active: Boolean(default=True)
    registered_at: DateTime()
    last_login_at: DateTime()

    @invariant.post
    def approval_status_must_match_role(self):
        try:
            account_for(self.role, self.approval_status)
        except ValueError as exc:
            raise ValidationError({"approval_status": [str(exc)]}) from None

    @property
    def account(self):
        return account_for(self.role, self.approval_status)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, email, external_id=None, name=None, phone=None, address=None, city=None, pincode=None):
        normalized = EmailAddress(address=email.strip()).normalized
        now = datetime.now(UTC)

        user = cls(
            external_id=external_id,
            email=normalized,
            name=name,
            phone=phone,
            address=address,
            city=city,
            pincode=pincode,
            role=UserRole.CUSTOMER.value,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                external_id=external_id,
                email=normalized,
                name=name,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------
    def link_identity(self, external_id):
        """Attach an external identity to a user first created by email only."""
        if self.external_id and self.external_id != external_id:
            raise ConflictError("Email is already linked to a different identity")
        self.external_id = external_id

    def record_sign_in(self):
        if not self.is_active:
            raise AuthError("Account is deactivated")

        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserSignedIn(user_id=str(self.id), signed_in_at=now))

    def deactivate(self):
        if not self.is_active:
            return
        self.is_active = False
        self.raise_(UserDeactivated(user_id=str(self.id), deactivated_at=datetime.now(UTC)))

    # -------------------------------------------------------------------
    # Role changes
    # -------------------------------------------------------------------
    def apply_for_role(self, role: UserRole):
        """Move a customer into an approval-gated role, pending review."""
        if UserRole(self.role) != UserRole.CUSTOMER:
            raise ConflictError(f"User already holds the {self.role} role")
        self._change_role(role, ApprovalStatus.PENDING)

    def record_approval(self, role: UserRole, approved: bool):
        """Apply an admin decision on a pending application for ``role``."""
        if UserRole(self.role) != role:
            raise ValidationError({"role": [f"User is not a {role.value} applicant"]})

        target = ApprovalStatus.APPROVED if approved else ApprovalStatus.REJECTED
        if ApprovalStatus(self.approval_status) != ApprovalStatus.PENDING:
            raise InvalidTransitionError("approval_status", self.approval_status, target.value)
        self._change_role(role, target)

    def grant_admin(self):
        if UserRole(self.role) == UserRole.ADMIN:
            return
        self._change_role(UserRole.ADMIN, None)

    def _change_role(self, role: UserRole, approval_status: ApprovalStatus | None):
        previous_role = self.role
        with atomic_change(self):
            self.role = role.value
            self.approval_status = approval_status.value if approval_status else None

        self.raise_(
            UserRoleChanged(
                user_id=str(self.id),
                previous_role=previous_role,
                role=self.role,
                approval_status=self.approval_status,
                changed_at=datetime.now(UTC),
            )
        )
