"""Faker-based data generators for Locust load test scenarios.

Payloads pass the domain's validation rules (6-digit pincodes, required
address fields) and match the field names of the API's request schemas.
"""

import os
import random
import uuid

from faker import Faker

from bazaar.auth.jwt_adapter import JWTIdentityVerifier

fake = Faker("en_IN")

# Pincodes the target deployment has delivery areas for
SERVICE_PINCODES = os.getenv("LOADTEST_PINCODES", "493773").split(",")


def unique_external_id() -> str:
    """Generate unique external ids like 'EXT-LT-a1b2c3d4'."""
    return f"EXT-LT-{uuid.uuid4().hex[:8]}"


def valid_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:4]}@example.com"


def valid_phone() -> str:
    return f"9{random.randint(100000000, 999999999)}"


def shopper_token() -> str:
    """Sign a bearer token for a fresh shopper with the deployment's shared secret."""
    return JWTIdentityVerifier().issue_token(unique_external_id(), valid_email(), name=fake.name())


def registration_data() -> dict:
    return {
        "name": fake.name()[:200],
        "phone": valid_phone(),
        "address": fake.street_address()[:500],
        "city": fake.city()[:100],
        "pincode": random.choice(SERVICE_PINCODES),
    }


def delivery_address_data() -> dict:
    return {
        "full_name": fake.name()[:200],
        "address_line1": fake.street_address()[:255],
        "city": fake.city()[:100],
        "pincode": random.choice(SERVICE_PINCODES),
        "landmark": random.choice([None, "Near the temple", "Opposite the school"]),
        "phone": valid_phone(),
    }


def checkout_data() -> dict:
    return {
        "payment_method": random.choice(["cod", "cod", "upi"]),
        "delivery_address": delivery_address_data(),
        "delivery_instructions": random.choice([None, "Call before arriving"]),
    }


def search_term() -> str:
    return random.choice(["rice", "dal", "oil", "atta", "sugar", "tea", "soap"])
