"""Faker-based data generators for Locust load test scenarios.

Payloads pass the API's validation rules (unique email and student id,
passwords of at least eight characters).
"""

import random
import uuid

from faker import Faker

fake = Faker()

LOADTEST_PASSWORD = "loadtest-pass-123"


def unique_student_id() -> str:
    return f"LT-{uuid.uuid4().hex[:10]}"


def valid_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@campus.test"


def student_registration() -> dict:
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "student_id": unique_student_id(),
        "phone": fake.msisdn()[:15],
        "password": LOADTEST_PASSWORD,
    }


def cart_quantity() -> int:
    """Mostly single items, occasionally a few."""
    return random.choices([1, 2, 3], weights=[70, 20, 10])[0]


def special_instructions() -> str | None:
    return random.choice([None, None, "Less spicy please", "No onions", "Extra sauce"])
