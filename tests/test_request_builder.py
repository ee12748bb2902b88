"""
Tests for the request builder: payload shapes and ordering per check type,
the reference marker, and build refusals.
"""
import pytest

from configuration import derive_configuration
from models import (
    Address,
    Answers,
    BusinessAnswers,
    CheckSelection,
    CheckType,
    ClientContext,
    ElectronicIdType,
    EntityKind,
    IdentityImage,
    IdvAnswers,
    LinkedRecord,
    LiteAnswers,
    LiteScreenType,
    RegistryCandidate,
    SubOption,
)
from request_builder import (
    CHECKS_ENDPOINT,
    IDV_DOCUMENTS_ENDPOINT,
    REFERENCE_MARKER,
    RULE_ATTESTATION_ENDPOINT,
    TRANSACTIONS_ENDPOINT,
    InvalidAnswers,
    MissingLinkedRecord,
    UnresolvableDocumentReference,
    build,
    build_search_request,
    electronic_check_name,
)


def _task_types(payload):
    return [t["type"] for t in payload.body["request"]["tasks"]]


# =============================================================================
# IDENTITY & SCREENING
# =============================================================================

class TestIdentityPayloads:

    def test_uk_individual_scenario(self, uk_individual, identity_selection, identity_answers):
        config = derive_configuration(uk_individual, identity_selection, log=False)
        plan = config.idv_plan
        answers = identity_answers.copy(update={"idv": IdvAnswers(
            first_name="Jane", last_name="Doe",
            document_type=plan.document_type, front_image_id=plan.auto_front_image_id,
        )})

        payloads = build(uk_individual, identity_selection, answers)

        assert [p.kind for p in payloads] == ["idv-transaction", "idv-documents", "lite-screen"]
        assert _task_types(payloads[0])[0] == "report:identity"

    def test_idv_transaction(self, uk_individual, identity_selection, identity_answers):
        transaction = build(uk_individual, identity_selection, identity_answers)[0]
        assert transaction.endpoint == TRANSACTIONS_ENDPOINT
        assert transaction.body["ref"] == f"{REFERENCE_MARKER}50/123"
        assert transaction.body["name"] == "Jane Doe - IDV Check"
        assert transaction.body["request"]["actor"] == {"name": "Jane Doe", "phone": "+447400123456"}
        assert _task_types(transaction) == ["report:identity", "report:footprint", "report:peps", "documents:poa"]

    def test_idv_documents_single_sided(self, uk_individual, identity_selection, identity_answers):
        documents = build(uk_individual, identity_selection, identity_answers)[1]
        assert documents.endpoint == IDV_DOCUMENTS_ENDPOINT
        assert documents.body == {
            "documentType": "passport",
            "documents": [{"side": "front", "s3Key": "protected/abc/passport.jpg"}],
        }

    def test_idv_documents_two_sided_from_urls(self, uk_individual, identity_selection, identity_answers):
        context = uk_individual.copy(update={"uploaded_identity_images": (
            IdentityImage(image_id="f", document_kind="Driving Licence", side="Front",
                          url="https://d1.cloudfront.net/protected/f.jpg"),
            IdentityImage(image_id="b", document_kind="Driving Licence", side="Back",
                          url="https://d1.cloudfront.net/protected/b.jpg"),
        )})
        idv = identity_answers.idv.copy(update={
            "document_type": "driving_licence", "front_image_id": "f", "back_image_id": "b",
        })
        documents = build(context, identity_selection, identity_answers.copy(update={"idv": idv}))[1]
        assert documents.body["documents"] == [
            {"side": "front", "s3Key": "protected/f.jpg"},
            {"side": "back", "s3Key": "protected/b.jpg"},
        ]

    def test_no_phone_skips_transaction(self, uk_individual, identity_selection, identity_answers):
        context = uk_individual.copy(update={"phone": ""})
        kinds = [p.kind for p in build(context, identity_selection, identity_answers)]
        assert kinds == ["idv-documents", "lite-screen"]

    def test_lite_aml_address(self, uk_individual, identity_selection, identity_answers):
        lite = build(uk_individual, identity_selection, identity_answers)[-1]
        expectations = lite.body["request"]["expectations"]
        assert lite.body["name"] == "Jane Doe - Lite Screening"
        assert expectations["name"] == {"data": {"first": "Jane", "last": "Doe"}}
        assert expectations["dob"] == {"data": "1980-02-01T00:00:00.000Z"}
        assert expectations["address"]["data"]["postcode"] == "SW1A 1AA"
        assert lite.body["request"]["tasks"] == [
            {"type": "report:footprint", "opts": {"consent": False}},
            {"type": "report:peps", "opts": {"monitored": True}},
        ]

    def test_lite_aml_only(self, uk_individual, identity_answers):
        selection = CheckSelection(check_type=CheckType.IDENTITY_AND_SCREENING,
                                   lite_screen_type=LiteScreenType.AML_ONLY)
        selection = selection.with_override(SubOption.MONITORING, False)
        lite_answers = LiteAnswers(first_name="Jane", middle_name="Ann", last_name="Doe",
                                   dob_digits="01021980", country="FR")
        lite = build(uk_individual, selection, identity_answers.copy(update={"lite": lite_answers}))[-1]
        expectations = lite.body["request"]["expectations"]
        assert expectations["name:lite"] == {"data": {"first": "Jane", "last": "Doe", "other": "Ann"}}
        assert expectations["yob"] == {"data": "1980"}
        assert expectations["country"] == {"data": "FRA"}
        assert lite.body["request"]["tasks"] == [{"type": "report:screening:lite", "opts": {"monitored": False}}]

    def test_international_address_consent(self, uk_individual, identity_selection, identity_answers):
        address = Address(country="FRA", line1="5 Rue de Rivoli", town="Paris", postcode="75001")
        lite = identity_answers.lite.copy(update={"address": address})
        payload = build(uk_individual, identity_selection, identity_answers.copy(update={"lite": lite}))[-1]
        assert payload.body["request"]["tasks"][0] == {"type": "report:footprint", "opts": {"consent": True}}
        assert payload.body["request"]["expectations"]["address"]["data"]["address_1"] == "5 Rue de Rivoli"

    def test_lite_only(self, uk_individual, identity_selection, identity_answers):
        selection = identity_selection.with_override(SubOption.IDV, False)
        assert [p.kind for p in build(uk_individual, selection, identity_answers)] == ["lite-screen"]

    def test_unknown_image_is_invalid(self, uk_individual, identity_selection, identity_answers):
        idv = identity_answers.idv.copy(update={"front_image_id": "gone"})
        with pytest.raises(InvalidAnswers) as exc:
            build(uk_individual, identity_selection, identity_answers.copy(update={"idv": idv}))
        assert exc.value.result.fields() == ["idv.front_image_id"]

    def test_image_without_storage_key_is_refused(self, uk_individual, identity_selection, identity_answers):
        context = uk_individual.copy(update={"uploaded_identity_images": (
            IdentityImage(image_id="img-passport", document_kind="Passport", side="Single",
                          url="https://example.com/passport.jpg"),
        )})
        with pytest.raises(UnresolvableDocumentReference) as exc:
            build(context, identity_selection, identity_answers)
        assert exc.value.sub_option == SubOption.IDV.value
        assert "reselect" in str(exc.value)


# =============================================================================
# ELECTRONIC ID
# =============================================================================

class TestElectronicPayload:

    def test_purchaser(self, uk_individual, electronic_selection, electronic_answers):
        payloads = build(uk_individual, electronic_selection, electronic_answers)
        assert len(payloads) == 1
        body = payloads[0].body
        assert body["name"] == "Purchase of 21 Acacia Avenue"
        assert body["ref"] == f"{REFERENCE_MARKER}50/123"
        assert body["request"]["actor"] == {"name": "Jane Doe", "phone": "+447400123456", "email": "jane@example.com"}
        assert _task_types(payloads[0]) == [
            "report:identity", "report:footprint", "report:peps",
            "documents:poa", "report:sof-v1", "report:bank-statement", "report:bank-summary",
        ]

    def test_seller_gets_ownership_document(self, uk_individual, electronic_selection, electronic_answers):
        seller = uk_individual.copy(update={"matter_work_type": "Sale of"})
        payload = build(seller, electronic_selection, electronic_answers)[0]
        assert payload.body["name"] == "Sale of 21 Acacia Avenue"
        assert _task_types(payload) == [
            "report:identity", "report:footprint", "report:peps", "documents:poa", "documents:poo",
        ]

    def test_giftor_actor_type(self, uk_individual, electronic_selection, electronic_answers):
        giftor = uk_individual.copy(update={"matter_relation": "Gifter"})
        payload = build(giftor, electronic_selection, electronic_answers)[0]
        assert payload.body["request"]["actor"]["type"] == "giftor"
        assert payload.body["name"].startswith("Gift towards purchase of")

    def test_additional_only_skips_identity_tasks(self, uk_individual, electronic_selection, electronic_answers):
        selection = CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION,
                                   electronic_id_type=ElectronicIdType.ADDITIONAL_ONLY)
        payload = build(uk_individual, selection, electronic_answers)[0]
        assert _task_types(payload)[0] == "documents:poa"
        assert "report:identity" not in _task_types(payload)

    def test_name_outside_property_matters(self):
        config = derive_configuration(
            ClientContext(entity_kind=EntityKind.INDIVIDUAL, matter_work_type="Wills"),
            CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION),
            log=False,
        )
        assert electronic_check_name(config, "Wills Mr Smith") == "Wills Mr Smith"

    def test_invalid_answers_are_refused(self, uk_individual, electronic_selection, electronic_answers):
        e = electronic_answers.electronic.copy(update={"mobile": ""})
        with pytest.raises(InvalidAnswers) as exc:
            build(uk_individual, electronic_selection, electronic_answers.copy(update={"electronic": e}))
        assert exc.value.result.fields() == ["electronic.mobile"]


# =============================================================================
# BUSINESS VERIFICATION
# =============================================================================

class TestBusinessPayloads:

    @pytest.fixture
    def kyb(self):
        return CheckSelection(check_type=CheckType.BUSINESS_VERIFICATION)

    def test_linked_record_is_source_of_truth(self, business_context, kyb):
        linked = LinkedRecord(number="01234567", name="ACME WIDGETS LIMITED", jurisdiction="GB", provider_id="ch-1")
        answers = Answers(check_reference="60/001", business=BusinessAnswers(linked_record=linked))
        payloads = build(business_context, kyb, answers)
        assert len(payloads) == 1
        body = payloads[0].body
        assert payloads[0].endpoint == CHECKS_ENDPOINT
        assert body["type"] == "company"
        assert body["ref"] == f"{REFERENCE_MARKER}60/001"
        assert body["request"]["data"] == {
            "jurisdiction": "UK", "number": "01234567", "name": "ACME WIDGETS LIMITED", "id": "ch-1",
        }
        assert [r["type"] for r in body["request"]["reports"]] == [
            "company:summary", "company:sanctions", "company:ubo", "company:beneficial-check", "company:shareholders",
        ]
        assert body["request"]["reports"][1] == {"type": "company:sanctions", "opts": {"monitored": True}}

    def test_search_fields_without_link(self, business_context, kyb):
        answers = Answers(check_reference="60/001", business=BusinessAnswers(
            jurisdiction="FR", company_name="Société Exemple",
        ))
        body = build(business_context, kyb, answers)[0].body
        assert body["request"]["data"] == {"jurisdiction": "FR", "number": "", "name": "Société Exemple"}
        assert "company:beneficial-check" not in [r["type"] for r in body["request"]["reports"]]

    def test_registry_documents_when_requested(self, business_context, kyb):
        selection = kyb.with_override(SubOption.KYB_REGISTRY_DOCUMENTS, True)
        answers = Answers(check_reference="60/001", business=BusinessAnswers(jurisdiction="GB", company_number="01234567"))
        reports = [r["type"] for r in build(business_context, selection, answers)[0].body["request"]["reports"]]
        assert reports[-1] == "company:registry"

    def test_unconfirmed_candidate_is_refused(self, business_context, kyb):
        answers = Answers(check_reference="60/001", business=BusinessAnswers(
            jurisdiction="GB", company_number="01234567",
            selected_candidate=RegistryCandidate(number="01234567", name="ACME WIDGETS LTD"),
        ))
        with pytest.raises(MissingLinkedRecord) as exc:
            build(business_context, kyb, answers)
        assert exc.value.sub_option == CheckType.BUSINESS_VERIFICATION.value

    def test_rule_attestation_is_appended(self, business_context):
        selection = CheckSelection(check_type=CheckType.BUSINESS_VERIFICATION, rule_id="rule4")
        answers = Answers(check_reference="60/001", business=BusinessAnswers(jurisdiction="GB", company_number="01234567"))
        payloads = build(business_context, selection, answers)
        assert [p.kind for p in payloads] == ["kyb", "rule-attestation"]
        assert payloads[1].endpoint == RULE_ATTESTATION_ENDPOINT
        assert payloads[1].body["ruleId"] == "rule4"
        assert "[RULE 4]" in payloads[1].body["statement"]


class TestSearchRequest:

    def test_number_preferred(self):
        assert build_search_request("GB", name="Acme", number=" 01234567 ") == {
            "jurisdictionCode": "UK", "searchBy": "number", "searchValue": "01234567",
        }

    def test_name_search(self):
        assert build_search_request("FR", name="Exemple") == {
            "jurisdictionCode": "FR", "searchBy": "name", "searchValue": "Exemple",
        }

    def test_nothing_to_search(self):
        with pytest.raises(ValueError):
            build_search_request("GB")
