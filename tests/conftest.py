# tests/conftest.py
import os

# must be set before the app modules read their config at import
os.environ.setdefault("BACKEND_API_KEY", "test-api-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("CH_API_KEY", "test-ch-key")
os.environ.setdefault("CHARITY_API_KEY", "test-cc-key")
os.environ.setdefault("GETADDRESS_API_KEY", "test-getaddress-key")

import pytest

from models import (
    Address,
    Answers,
    CheckSelection,
    CheckType,
    ClientContext,
    ElectronicAnswers,
    EntityKind,
    IdentityImage,
    IdvAnswers,
    LiteAnswers,
)

UK_MOBILE = "+447400123456"
UK_LANDLINE = "+441212345678"


@pytest.fixture
def uk_address():
    return Address(
        country="GBR",
        building_number="12",
        street="High Street",
        town="London",
        postcode="SW1A 1AA",
    )


@pytest.fixture
def passport_image():
    return IdentityImage(
        image_id="img-passport",
        image_type="PhotoID",
        document_kind="Passport",
        side="Single",
        storage_key="protected/abc/passport.jpg",
    )


@pytest.fixture
def uk_individual(uk_address, passport_image):
    """Individual with a passport on file, a UK address and a mobile."""
    return ClientContext(
        entity_kind=EntityKind.INDIVIDUAL,
        tags=["formJ"],
        matter_work_type="Purchase of",
        matter_relation="Our Client",
        matter_description="21 Acacia Avenue",
        internal_reference="50/123",
        uploaded_identity_images=[passport_image],
        known_address=uk_address,
        first_name="Jane",
        last_name="Doe",
        date_of_birth="01/02/1980",
        phone=UK_MOBILE,
        email="jane@example.com",
    )


@pytest.fixture
def business_context():
    return ClientContext(
        entity_kind=EntityKind.BUSINESS,
        business_name="Acme Widgets Ltd",
        entity_number="01234567",
        registration_country="GB",
        matter_work_type="Purchase",
        matter_relation="Our Client",
        internal_reference="60/001",
    )


@pytest.fixture
def identity_answers(uk_address):
    return Answers(
        check_reference="50/123",
        lite=LiteAnswers(first_name="Jane", last_name="Doe", dob_digits="01021980", address=uk_address),
        idv=IdvAnswers(first_name="Jane", last_name="Doe", document_type="passport", front_image_id="img-passport"),
    )


@pytest.fixture
def electronic_answers():
    return Answers(
        check_reference="50/123",
        electronic=ElectronicAnswers(
            full_name="Jane Doe",
            phone_country_code="+44",
            mobile="07400 123456",
            email="jane@example.com",
            reference="21 Acacia Avenue",
        ),
    )


@pytest.fixture
def identity_selection():
    return CheckSelection(check_type=CheckType.IDENTITY_AND_SCREENING)


@pytest.fixture
def electronic_selection():
    return CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION)
