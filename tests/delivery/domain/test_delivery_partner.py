import pytest
from protean.exceptions import ValidationError

from bazaar.delivery.events import DeliveryPartnerApproved, DeliveryPartnerRegistered, DeliveryPartnerRejected
from bazaar.delivery.partner import DeliveryPartner
from bazaar.shared.exceptions import InvalidTransitionError


@pytest.fixture()
def partner():
    return DeliveryPartner.register(user_id="user-7", vehicle_type="cycle")


class TestRegistration:
    def test_starts_pending(self, partner):
        assert partner.status == "pending"
        assert partner.is_available is True
        assert partner.can_take_orders is False
        assert isinstance(partner._events[-1], DeliveryPartnerRegistered)

    def test_unknown_vehicle(self):
        with pytest.raises(ValidationError):
            DeliveryPartner.register(user_id="user-8", vehicle_type="truck")


class TestDecision:
    def test_approve(self, partner):
        partner.approve("admin-1")
        assert partner.can_take_orders is True
        assert isinstance(partner._events[-1], DeliveryPartnerApproved)

    def test_reject_requires_reason(self, partner):
        with pytest.raises(ValidationError) as exc:
            partner.reject("admin-1", "  ")
        assert "reason" in exc.value.messages
        assert partner.status == "pending"

    def test_reject(self, partner):
        partner.reject("admin-1", "Licence expired")
        assert partner.status == "rejected"
        assert partner.rejection_reason == "Licence expired"
        assert isinstance(partner._events[-1], DeliveryPartnerRejected)

    def test_decision_is_final(self, partner):
        partner.approve("admin-1")
        with pytest.raises(InvalidTransitionError):
            partner.reject("admin-1", "Changed mind")

    def test_unavailable_partner_takes_no_orders(self, partner):
        partner.approve("admin-1")
        partner.set_availability(False)
        assert partner.can_take_orders is False
