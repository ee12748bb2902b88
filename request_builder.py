# request_builder.py
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from configuration import derive_configuration
from models import (
    Answers,
    CheckSelection,
    CheckType,
    ClientContext,
    Configuration,
    ElectronicIdType,
    IdentityImage,
    LiteScreenType,
    MatterCategory,
    OutboundPayload,
    SubOption,
    SubRole,
    ValidationResult,
)
from normalizer import (
    UnparseablePhone,
    address_payload,
    compose_phone,
    country_code_to_provider_code,
    country_code_to_three_letter,
    dob_to_iso,
    extract_storage_key,
    parse_phone,
)
from reference_data import SINGLE_SIDED_DOCUMENT_TYPES
from utils import clean_text, join_name
from validation import validate

load_dotenv()

REFERENCE_MARKER = os.getenv("REFERENCE_MARKER", "Val'ID'ate: ")

TRANSACTIONS_ENDPOINT = "/v2/transactions"
CHECKS_ENDPOINT = "/v2/checks"
IDV_DOCUMENTS_ENDPOINT = "idv-documents"
RULE_ATTESTATION_ENDPOINT = "rule-attestation"

NAME_PREFIXES = {
    SubRole.PURCHASER: "Purchase of",
    SubRole.SELLER: "Sale of",
    SubRole.LANDLORD: "Letting of",
    SubRole.TENANT: "Occupier's consent for",
    SubRole.GIFTOR: "Gift towards purchase of",
    SubRole.OTHER: "",
}

# order matters: the provider lists reports in the order they are sent
KYB_REPORTS = (
    (SubOption.KYB_UBO, "company:ubo"),
    (SubOption.KYB_PSC_EXTRACT, "company:beneficial-check"),
    (SubOption.KYB_SHAREHOLDERS, "company:shareholders"),
    (SubOption.KYB_REGISTRY_DOCUMENTS, "company:registry"),
)


class InvalidAnswers(ValueError):
    """build() was handed an answer set that does not validate."""

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(f"answers failed validation on: {', '.join(result.fields())}")


class BuildError(Exception):
    def __init__(self, message: str, sub_option: str):
        self.sub_option = sub_option
        super().__init__(message)


class MissingLinkedRecord(BuildError):
    pass


class UnresolvableDocumentReference(BuildError):
    pass


def provider_reference(reference: str) -> str:
    return f"{REFERENCE_MARKER}{clean_text(reference)}"


def build(context: ClientContext, selection: CheckSelection, answers: Answers) -> List[OutboundPayload]:
    """
    Turn a validated answer set into the ordered provider payloads.

    Raises InvalidAnswers if the answers do not validate, and a BuildError
    when a document reference or company link cannot be resolved.
    """
    result = validate(context, selection, answers)
    if not result.valid:
        raise InvalidAnswers(result)

    config = derive_configuration(context, selection, answers, log=False)
    check_type = selection.check_type

    if check_type == CheckType.IDENTITY_AND_SCREENING:
        payloads = _identity_payloads(context, config, answers)
    elif check_type == CheckType.ELECTRONIC_VERIFICATION:
        payloads = [_electronic_payload(context, config, answers)]
    else:
        payloads = _business_payloads(config, selection, answers)

    print(f"[BUILD] {check_type.value}: {[p.kind for p in payloads]}", flush=True)
    return payloads


# -----------------------------------------------------------------------------
# Identity & screening
# -----------------------------------------------------------------------------
def _resolve_image(context: ClientContext, image_id: Optional[str]) -> str:
    image: Optional[IdentityImage] = next(
        (img for img in context.uploaded_identity_images if img.image_id == image_id), None
    )
    if image is None:
        raise UnresolvableDocumentReference(
            f"Image {image_id} is no longer on file, please reselect the document", SubOption.IDV.value
        )
    key = image.storage_key or extract_storage_key(image.url)
    if not key:
        raise UnresolvableDocumentReference(
            f"Image {image_id} has no stored file, please reselect the document", SubOption.IDV.value
        )
    return key


def _idv_transaction(context: ClientContext, answers: Answers) -> Optional[OutboundPayload]:
    if not clean_text(context.phone):
        print("[BUILD] No phone on file; IDV transaction skipped", flush=True)
        return None
    try:
        phone = parse_phone(context.phone)
    except UnparseablePhone:
        print("[BUILD] Phone on file could not be parsed; IDV transaction skipped", flush=True)
        return None

    idv = answers.idv
    full_name = join_name(idv.first_name, idv.middle_name, idv.last_name)
    body = {
        "type": "v2",
        "ref": provider_reference(answers.check_reference),
        "name": f"{full_name} - IDV Check",
        "request": {
            "actor": {"name": full_name, "phone": phone.e164},
            "tasks": [
                {"type": "report:identity", "opts": {"nfc": "preferred"}},
                {"type": "report:footprint"},
                {"type": "report:peps"},
                {"type": "documents:poa"},
            ],
        },
    }
    return OutboundPayload(endpoint=TRANSACTIONS_ENDPOINT, kind="idv-transaction", body=body)


def _idv_documents(context: ClientContext, answers: Answers) -> OutboundPayload:
    idv = answers.idv
    documents = [{"side": "front", "s3Key": _resolve_image(context, idv.front_image_id)}]
    if idv.document_type not in SINGLE_SIDED_DOCUMENT_TYPES:
        documents.append({"side": "back", "s3Key": _resolve_image(context, idv.back_image_id)})
    body = {"documentType": idv.document_type, "documents": documents}
    return OutboundPayload(endpoint=IDV_DOCUMENTS_ENDPOINT, kind="idv-documents", body=body)


def _lite_names(answers: Answers) -> Dict[str, str]:
    lite = answers.lite
    names = {"first": clean_text(lite.first_name), "last": clean_text(lite.last_name)}
    if clean_text(lite.middle_name):
        names["other"] = clean_text(lite.middle_name)
    return names


def _lite_screen(config: Configuration, answers: Answers) -> OutboundPayload:
    lite = answers.lite
    monitored = config.is_on(SubOption.MONITORING)
    names = _lite_names(answers)

    if config.lite_screen_type == LiteScreenType.AML_ONLY:
        country = country_code_to_three_letter(lite.country) if lite.country else "GBR"
        expectations: Dict[str, Any] = {
            "name:lite": {"data": names},
            "yob": {"data": clean_text(lite.dob_digits)[4:]},
            "country": {"data": country},
        }
        tasks = [{"type": "report:screening:lite", "opts": {"monitored": monitored}}]
    else:
        address = lite.address
        expectations = {
            "name": {"data": names},
            "dob": {"data": dob_to_iso(clean_text(lite.dob_digits))},
            "address": {"data": address_payload(address)},
        }
        consent = config.is_on(SubOption.INTERNATIONAL_ADDRESS) and address.country != "GBR"
        tasks = [
            {"type": "report:footprint", "opts": {"consent": consent}},
            {"type": "report:peps", "opts": {"monitored": monitored}},
        ]

    body = {
        "type": "v2",
        "ref": provider_reference(answers.check_reference),
        "name": f"{names['first']} {names['last']} - Lite Screening",
        "request": {"expectations": expectations, "tasks": tasks},
    }
    return OutboundPayload(endpoint=TRANSACTIONS_ENDPOINT, kind="lite-screen", body=body)


def _identity_payloads(context: ClientContext, config: Configuration, answers: Answers) -> List[OutboundPayload]:
    payloads: List[OutboundPayload] = []
    if config.is_on(SubOption.IDV):
        transaction = _idv_transaction(context, answers)
        if transaction is not None:
            payloads.append(transaction)
        payloads.append(_idv_documents(context, answers))
    if config.is_on(SubOption.LITE_SCREEN):
        payloads.append(_lite_screen(config, answers))
    return payloads


# -----------------------------------------------------------------------------
# Electronic ID
# -----------------------------------------------------------------------------
def electronic_check_name(config: Configuration, reference: str) -> str:
    reference = clean_text(reference)
    if config.matter_category in (MatterCategory.CONVEYANCING, MatterCategory.PROPERTY_OTHER) and config.sub_role:
        prefix = NAME_PREFIXES.get(config.sub_role, "")
        return f"{prefix} {reference}" if prefix else reference
    return reference


def _electronic_payload(context: ClientContext, config: Configuration, answers: Answers) -> OutboundPayload:
    e = answers.electronic
    phone = compose_phone(e.phone_country_code, e.mobile)
    actor: Dict[str, Any] = {"name": clean_text(e.full_name), "phone": phone.e164}
    if clean_text(e.email):
        actor["email"] = clean_text(e.email)
    if config.sub_role == SubRole.GIFTOR:
        actor["type"] = "giftor"

    country = e.country or (context.known_address.country if context.known_address else None)
    country = country_code_to_three_letter(country) if country else "GBR"

    tasks: List[Dict[str, Any]] = []
    if config.electronic_id_type == ElectronicIdType.STANDARD:
        consent = config.is_on(SubOption.INTERNATIONAL_ADDRESS) and country != "GBR"
        tasks.append({"type": "report:identity", "opts": {"nfc": "preferred"}})
        tasks.append({"type": "report:footprint", "opts": {"consent": consent}})
        tasks.append({"type": "report:peps", "opts": {"monitored": config.is_on(SubOption.MONITORING)}})
    if config.is_on(SubOption.PROOF_OF_ADDRESS):
        tasks.append({"type": "documents:poa"})
    if config.is_on(SubOption.PROOF_OF_OWNERSHIP):
        tasks.append({"type": "documents:poo"})
    if config.is_on(SubOption.SOF_QUESTIONNAIRE):
        tasks.append({"type": "report:sof-v1"})
    if config.is_on(SubOption.BANK_LINKING):
        tasks.append({"type": "report:bank-statement"})
        tasks.append({"type": "report:bank-summary"})

    body = {
        "type": "v2",
        "ref": provider_reference(answers.check_reference or e.reference),
        "name": electronic_check_name(config, e.reference),
        "request": {"actor": actor, "tasks": tasks},
    }
    return OutboundPayload(endpoint=TRANSACTIONS_ENDPOINT, kind="electronic-id", body=body)


# -----------------------------------------------------------------------------
# Business verification
# -----------------------------------------------------------------------------
def _business_payloads(config: Configuration, selection: CheckSelection, answers: Answers) -> List[OutboundPayload]:
    b = answers.business
    linked = b.linked_record
    if b.selected_candidate is not None and linked is None:
        raise MissingLinkedRecord(
            f"Company {b.selected_candidate.number} was selected but not confirmed, please confirm the company",
            CheckType.BUSINESS_VERIFICATION.value,
        )

    if linked is not None:
        jurisdiction, number, name, provider_id = linked.jurisdiction, linked.number, linked.name, linked.provider_id
    else:
        jurisdiction, number, name, provider_id = b.jurisdiction, b.company_number, b.company_name, None

    data: Dict[str, Any] = {
        "jurisdiction": country_code_to_provider_code(jurisdiction),
        "number": clean_text(number),
    }
    if clean_text(name):
        data["name"] = clean_text(name)
    if provider_id:
        data["id"] = provider_id

    reports: List[Dict[str, Any]] = [
        {"type": "company:summary"},
        {"type": "company:sanctions", "opts": {"monitored": config.is_on(SubOption.MONITORING)}},
    ]
    for key, report_type in KYB_REPORTS:
        if config.is_on(key):
            reports.append({"type": report_type})

    body = {
        "type": "company",
        "ref": provider_reference(answers.check_reference),
        "request": {"data": data, "reports": reports},
    }
    payloads = [OutboundPayload(endpoint=CHECKS_ENDPOINT, kind="kyb", body=body)]

    rule = config.rule(selection.rule_id)
    if rule is not None:
        payloads.append(OutboundPayload(
            endpoint=RULE_ATTESTATION_ENDPOINT,
            kind="rule-attestation",
            body={"ruleId": rule.rule_id, "label": rule.label, "statement": rule.statement},
        ))
    return payloads


def build_search_request(jurisdiction: str, name: Optional[str] = None, number: Optional[str] = None) -> Dict[str, str]:
    """Company lookup body for the registry collaborator. Number wins over name."""
    number, name = clean_text(number), clean_text(name)
    if not number and not name:
        raise ValueError("a company name or number is required to search")
    return {
        "jurisdictionCode": country_code_to_provider_code(jurisdiction),
        "searchBy": "number" if number else "name",
        "searchValue": number or name,
    }
