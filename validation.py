# validation.py
import re
from typing import List, Optional

from configuration import derive_configuration
from models import (
    Answers,
    CheckSelection,
    CheckType,
    ClientContext,
    Configuration,
    LiteScreenType,
    SubOption,
    ToggleState,
    ValidationResult,
    Violation,
)
from normalizer import (
    UnparseablePhone,
    address_problems,
    classify_mobile,
    compose_phone,
    is_valid_dob_digits,
    resolve_jurisdiction,
)
from reference_data import PHOTO_ID_KINDS, RULE_CATALOGUE, SINGLE_SIDED_DOCUMENT_TYPES
from utils import clean_text, lower_text

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

CHECK_TYPE_LABELS = {
    CheckType.IDENTITY_AND_SCREENING: "Identity & screening",
    CheckType.ELECTRONIC_VERIFICATION: "Electronic ID",
    CheckType.BUSINESS_VERIFICATION: "KYB",
}

LOCKED_SEARCH_MESSAGE = "Search fields are locked while a registry record is linked"
SALE_RULE_MESSAGE = "Rule 1/2 not available for Sale files and new ID must be collected via enhanced or standard ID"
RULE3_MESSAGE = ("Rule 3 is only valid for Will, Wills, LPA, Lasting Power of Attorney, "
                 "or Deeds & Declarations worktypes with two address IDs and a photo ID on file")

DOCUMENT_TYPES = frozenset(code for _kind, code in PHOTO_ID_KINDS)


class _Collector:
    def __init__(self):
        self.violations: List[Violation] = []

    def add(self, field: str, message: str):
        self.violations.append(Violation(field=field, message=message))

    def result(self) -> ValidationResult:
        return ValidationResult(valid=not self.violations, violations=tuple(self.violations))


def validate(context: Optional[ClientContext], selection: CheckSelection, answers: Answers) -> ValidationResult:
    """
    Check the answers against every rule that applies to the selected check.
    Pure: no I/O, no logging, never stops at the first problem.
    """
    out = _Collector()
    if context is None:
        out.add("context", "Client details could not be loaded")
        return out.result()

    config = derive_configuration(context, selection, answers, log=False)
    check_type = selection.check_type

    if check_type is None:
        if config.available_check_types:
            out.add("check_type", "Please select a check type")
        else:
            out.add("check_type", config.blocking_message or "No check types are available for this client")
    elif check_type not in config.available_check_types:
        out.add("check_type", f"{CHECK_TYPE_LABELS[check_type]} is not available for this client")

    if not clean_text(answers.check_reference):
        out.add("check_reference", "Check reference is required")

    if check_type in config.available_check_types:
        if check_type == CheckType.IDENTITY_AND_SCREENING:
            _identity_rules(config, selection, answers, out)
        elif check_type == CheckType.ELECTRONIC_VERIFICATION:
            _electronic_rules(config, answers, out)
        elif check_type == CheckType.BUSINESS_VERIFICATION:
            _business_rules(context, config, selection, answers, out)

    return out.result()


# -----------------------------------------------------------------------------
# Identity & screening
# -----------------------------------------------------------------------------
def _identity_rules(config: Configuration, selection: CheckSelection, answers: Answers, out: _Collector):
    lite_on = config.is_on(SubOption.LITE_SCREEN)
    idv_on = config.is_on(SubOption.IDV)

    if lite_on:
        lite = answers.lite
        if not clean_text(lite.first_name):
            out.add("lite.first_name", "First name is required for Lite Screen")
        if not clean_text(lite.last_name):
            out.add("lite.last_name", "Last name is required for Lite Screen")
        if not is_valid_dob_digits(clean_text(lite.dob_digits)):
            out.add("lite.dob_digits", "Date of birth is required for Lite Screen (DDMMYYYY format)")
        if config.lite_screen_type == LiteScreenType.AML_ADDRESS:
            if lite.address is None:
                out.add("lite.address", "Address is required for AML & Address Screening")
            elif address_problems(lite.address):
                out.add("lite.address", "Valid address is required for AML & Address Screening "
                                        "(check required fields for country)")

    idv_state = config.option(SubOption.IDV)
    plan = config.idv_plan
    answered = selection.toggle_states.get(SubOption.IDV) == ToggleState.USER_OVERRIDDEN
    if idv_state.visible and not idv_state.disabled and not answered and not (plan and plan.auto_include):
        out.add("idv", "Please select YES or NO for IDV check")

    if idv_on:
        idv = answers.idv
        if not clean_text(idv.first_name):
            out.add("idv.first_name", "First name is required for IDV check")
        if not clean_text(idv.last_name):
            out.add("idv.last_name", "Last name is required for IDV check")
        if not idv.document_type:
            out.add("idv.document_type", "Please select an ID document type")
        elif idv.document_type not in DOCUMENT_TYPES:
            out.add("idv.document_type", "Selected ID document type is not supported")
        front_candidates = plan.front_candidates if plan else []
        back_candidates = plan.back_candidates if plan else []
        if not idv.front_image_id:
            out.add("idv.front_image_id", "Please select a front image for the ID document")
        elif idv.front_image_id not in front_candidates:
            out.add("idv.front_image_id", "Front image must be a photo ID of the selected document type")
        if idv.document_type and idv.document_type not in SINGLE_SIDED_DOCUMENT_TYPES:
            if not idv.back_image_id:
                out.add("idv.back_image_id", "Please select a back image for the ID document")
            elif idv.back_image_id == idv.front_image_id:
                out.add("idv.back_image_id", "Front and back images must be different")
            elif idv.back_image_id not in back_candidates:
                out.add("idv.back_image_id", "Back image must be a photo ID of the selected document type")

    if not lite_on and not idv_on:
        out.add("sub_options", "Please select at least one check type (Lite Screen or IDV)")


# -----------------------------------------------------------------------------
# Electronic ID
# -----------------------------------------------------------------------------
def _electronic_rules(config: Configuration, answers: Answers, out: _Collector):
    e = answers.electronic
    if config.matter_category is None:
        out.add("matter_category", "Please select a matter category")
    elif config.sub_role_required and config.sub_role is None:
        out.add("sub_role", "Please select a matter sub-category")

    if len(clean_text(e.full_name)) < 2:
        out.add("electronic.full_name", "Full name is required for Electronic ID")

    if not clean_text(e.mobile) or not clean_text(e.phone_country_code):
        out.add("electronic.mobile", "Mobile number with country code is required for Electronic ID")
    else:
        try:
            phone = compose_phone(e.phone_country_code, e.mobile)
        except UnparseablePhone:
            out.add("electronic.mobile", "Could not parse phone number. Please check the format.")
        else:
            check = classify_mobile(phone.country_code, phone.national_number)
            if not check.valid:
                out.add("electronic.mobile", "Phone number is not valid for the selected country")
            elif not check.is_mobile:
                out.add("electronic.mobile", "Phone number must be a mobile number (the client needs it for app access)")

    email = clean_text(e.email)
    if email and not EMAIL_RE.match(email):
        out.add("electronic.email", "Email format is invalid")

    if not clean_text(e.reference):
        out.add("electronic.reference", "Check reference is required for Electronic ID")


# -----------------------------------------------------------------------------
# Business verification
# -----------------------------------------------------------------------------
def _search_fields_diverge(answers: Answers) -> bool:
    b = answers.business
    linked = b.linked_record
    if clean_text(b.company_number) and clean_text(b.company_number).upper() != clean_text(linked.number).upper():
        return True
    if clean_text(b.company_name) and lower_text(b.company_name) != lower_text(linked.name):
        return True
    if clean_text(b.jurisdiction) and resolve_jurisdiction(b.jurisdiction) != resolve_jurisdiction(linked.jurisdiction):
        return True
    return False


def _business_rules(context: ClientContext, config: Configuration, selection: CheckSelection,
                    answers: Answers, out: _Collector):
    b = answers.business
    linked = b.linked_record
    jurisdiction = linked.jurisdiction if linked else b.jurisdiction
    if len(clean_text(jurisdiction)) < 2:
        out.add("business.jurisdiction", "Jurisdiction is required for KYB check")
    if linked is None and not (clean_text(b.company_name) or clean_text(b.company_number)):
        out.add("business.company_name", "Either company name or company number is required for KYB check")
    if linked is not None and _search_fields_diverge(answers):
        out.add("business.linked_record", LOCKED_SEARCH_MESSAGE)

    if selection.rule_id and config.rule(selection.rule_id) is None:
        known = {r[0] for r in RULE_CATALOGUE}
        work_type = lower_text(context.matter_work_type)
        if selection.rule_id in ("rule1", "rule2") and re.search(r"\bsale\b", work_type):
            out.add("rule_id", SALE_RULE_MESSAGE)
        elif selection.rule_id == "rule3":
            out.add("rule_id", RULE3_MESSAGE)
        elif selection.rule_id in known:
            out.add("rule_id", "Selected rule does not apply to this client")
        else:
            out.add("rule_id", "Unknown rule")
