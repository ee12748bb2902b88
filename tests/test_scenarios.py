"""
End-to-end walkthroughs of the headline client situations, using the exact
inputs the onboarding team quotes for them.

Covers:
1. UK individual, identity & screening, with and without a photo ID on file
2. Electronic ID with the mobile left out
3. Charity client
4. Tenant on a purchase matter
5. Phone parsing of the two common UK spellings
"""
import pytest

from configuration import derive_configuration
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
    MatterCategory,
)
from normalizer import parse_phone
from request_builder import InvalidAnswers, build
from validation import validate

IDENTITY = CheckSelection(check_type=CheckType.IDENTITY_AND_SCREENING)
ELECTRONIC = CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION)


@pytest.fixture
def bristol_address():
    return Address(country="GBR", town="Bristol", postcode="BS1 1AA", building_number="12")


@pytest.fixture
def jane_answers(bristol_address):
    return Answers(
        check_reference="70/001",
        lite=LiteAnswers(first_name="Jane", last_name="Doe", dob_digits="15031990", address=bristol_address),
    )


def _first_task(payload):
    return payload.body["request"]["tasks"][0]["type"]


# =============================================================================
# UK INDIVIDUAL, IDENTITY & SCREENING
# =============================================================================

class TestUkIndividual:

    def test_without_photo_id(self, jane_answers):
        context = ClientContext(entity_kind=EntityKind.INDIVIDUAL)

        result = validate(context, IDENTITY, jane_answers)
        assert result.valid, result.violations

        payloads = build(context, IDENTITY, jane_answers)
        # no photo ID: the screening's identity footprint check leads
        assert [p.kind for p in payloads] == ["lite-screen"]
        assert _first_task(payloads[0]) == "report:footprint"
        expectations = payloads[0].body["request"]["expectations"]
        assert expectations["name"] == {"data": {"first": "Jane", "last": "Doe"}}
        assert expectations["dob"] == {"data": "1990-03-15T00:00:00.000Z"}
        assert expectations["address"]["data"]["building_number"] == "12"
        assert expectations["address"]["data"]["town"] == "Bristol"
        assert expectations["address"]["data"]["postcode"] == "BS1 1AA"

    def test_with_passport_and_phone(self, jane_answers):
        context = ClientContext(
            entity_kind=EntityKind.INDIVIDUAL,
            phone="+447700900123",
            uploaded_identity_images=[IdentityImage(
                image_id="p1", document_kind="Passport", side="Single", storage_key="protected/p1.jpg",
            )],
        )
        answers = jane_answers.copy(update={"idv": IdvAnswers(
            first_name="Jane", last_name="Doe", document_type="passport", front_image_id="p1",
        )})

        assert validate(context, IDENTITY, answers).valid

        payloads = build(context, IDENTITY, answers)
        assert [p.kind for p in payloads] == ["idv-transaction", "idv-documents", "lite-screen"]
        assert _first_task(payloads[0]) == "report:identity"


# =============================================================================
# ELECTRONIC ID WITHOUT A MOBILE
# =============================================================================

class TestMissingMobile:

    def test_one_violation_and_no_build(self):
        context = ClientContext(entity_kind=EntityKind.INDIVIDUAL, matter_work_type="Purchase of",
                                matter_relation="Our Client")
        answers = Answers(check_reference="70/002", electronic=ElectronicAnswers(
            full_name="Jane Doe", phone_country_code="+44", reference="21 Acacia Avenue",
        ))

        result = validate(context, ELECTRONIC, answers)
        assert result.fields() == ["electronic.mobile"]

        with pytest.raises(InvalidAnswers):
            build(context, ELECTRONIC, answers)


# =============================================================================
# CHARITY, TENANT, PHONES
# =============================================================================

class TestRoutingAndParsing:

    def test_charity_has_no_check_types(self):
        context = ClientContext(
            entity_kind=EntityKind.CHARITY,
            tags=["formE"],
            business_name="The Example Trust",
            registered_business_data={"company_number": "1000001"},
        )
        assert derive_configuration(context, IDENTITY, log=False).available_check_types == []

    def test_tenant_on_purchase_is_other_property(self):
        context = ClientContext(entity_kind=EntityKind.INDIVIDUAL, matter_work_type="Purchase",
                                matter_relation="Tenant")
        assert derive_configuration(context, ELECTRONIC, log=False).matter_category == MatterCategory.PROPERTY_OTHER

    @pytest.mark.parametrize("raw,default", [("+447700900123", None), ("07700900123", "GBR")])
    def test_uk_phone_spellings(self, raw, default):
        phone = parse_phone(raw, default) if default else parse_phone(raw)
        assert (phone.country_code, phone.national_number) == ("+44", "7700900123")
