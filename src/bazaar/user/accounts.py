"""Role variants for users.

Storage keeps ``role`` and ``approval_status`` as two flat columns. Code that
gates behavior works with the variant returned by ``account_for`` instead, so
combinations such as an admin awaiting approval cannot be represented.
"""

from dataclasses import dataclass
from enum import Enum


class UserRole(Enum):
    CUSTOMER = "customer"
    SELLER = "seller"
    DELIVERY_BOY = "delivery_boy"
    ADMIN = "admin"


class ApprovalStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class CustomerAccount:
    role: UserRole = UserRole.CUSTOMER


@dataclass(frozen=True)
class SellerAccount:
    approval_status: ApprovalStatus
    role: UserRole = UserRole.SELLER

    @property
    def can_sell(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED


@dataclass(frozen=True)
class DeliveryPartnerAccount:
    approval_status: ApprovalStatus
    role: UserRole = UserRole.DELIVERY_BOY

    @property
    def can_deliver(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED


@dataclass(frozen=True)
class AdminAccount:
    role: UserRole = UserRole.ADMIN


Account = CustomerAccount | SellerAccount | DeliveryPartnerAccount | AdminAccount

_APPROVAL_GATED = {
    UserRole.SELLER: SellerAccount,
    UserRole.DELIVERY_BOY: DeliveryPartnerAccount,
}


def account_for(role: str, approval_status: str | None) -> Account:
    """Build the account variant for a persisted (role, approval_status) pair.

    Raises ``ValueError`` when the pair is not a legal combination.
    """
    role = UserRole(role)

    if role in _APPROVAL_GATED:
        if approval_status is None:
            raise ValueError(f"Role {role.value} requires an approval status")
        return _APPROVAL_GATED[role](approval_status=ApprovalStatus(approval_status))

    if approval_status is not None:
        raise ValueError(f"Role {role.value} does not carry an approval status")

    return AdminAccount() if role == UserRole.ADMIN else CustomerAccount()


def is_approved_seller(account: Account) -> bool:
    return isinstance(account, SellerAccount) and account.can_sell


def is_approved_delivery_partner(account: Account) -> bool:
    return isinstance(account, DeliveryPartnerAccount) and account.can_deliver


def is_admin(account: Account) -> bool:
    return isinstance(account, AdminAccount)
