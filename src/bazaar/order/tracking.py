"""Default tracking messages, in English and Hindi, for each order status."""

DEFAULT_MESSAGES = {
    "placed": ("Order placed successfully", "ऑर्डर सफलतापूर्वक दिया गया"),
    "confirmed": ("Order confirmed by the store", "दुकान ने ऑर्डर की पुष्टि कर दी है"),
    "packed": ("Order packed and ready for pickup", "ऑर्डर पैक होकर तैयार है"),
    "out_for_delivery": ("Order is out for delivery", "ऑर्डर डिलीवरी के लिए निकल चुका है"),
    "delivered": ("Order delivered", "ऑर्डर डिलीवर हो गया"),
    "cancelled": ("Order cancelled", "ऑर्डर रद्द कर दिया गया"),
}

PARTNER_ASSIGNED = ("Delivery partner assigned", "डिलीवरी पार्टनर नियुक्त किया गया")


def default_message(status: str) -> tuple[str, str]:
    return DEFAULT_MESSAGES.get(status, (f"Order {status}", f"ऑर्डर {status}"))
