# configuration.py
import re
from typing import Callable, Dict, List, Optional, Tuple

from models import (
    Answers,
    BusinessPrefill,
    CheckSelection,
    CheckType,
    ClientContext,
    Configuration,
    DocumentSide,
    ElectronicIdType,
    EntityKind,
    IdentityImage,
    IdvPlan,
    LiteScreenType,
    MatterCategory,
    OptionState,
    RequestTag,
    RuleOption,
    SubOption,
    SubRole,
    ToggleState,
)
from normalizer import country_code_to_three_letter, is_known_jurisdiction, resolve_jurisdiction
from reference_data import (
    ADDRESS_ID_IMAGE_TYPE,
    INTERNATIONAL_VERIFICATION_COUNTRIES,
    PHOTO_ID_IMAGE_TYPE,
    PHOTO_ID_KINDS,
    RULE3_WORK_TYPES,
    RULE_CATALOGUE,
    SINGLE_SIDED_DOCUMENT_TYPES,
)
from utils import clean_text, lower_text

CHARITY_BLOCKING_MESSAGE = "There are no available check types for charity, please close the request window"
SOF_SUPPRESSED_NOTE = "Source of funds not pre-selected: enhanced ID requested without a source of funds request"

CATEGORIES_WITH_SUB_ROLES = (MatterCategory.CONVEYANCING, MatterCategory.PROPERTY_OTHER)

OTHER_PHOTO_ID_KIND = "Other Photo ID Card"
_KIND_TO_TYPE: Dict[str, str] = dict(PHOTO_ID_KINDS)


# -----------------------------------------------------------------------------
# Matter facts used by the routing tables
# -----------------------------------------------------------------------------
class Matter:
    """Lower-cased work type (trailing ' of' removed) and relation."""

    def __init__(self, work_type: str, relation: str):
        self.work_type = re.sub(r"\s+of$", "", lower_text(work_type))
        self.relation = lower_text(relation)

    @classmethod
    def from_context(cls, context: ClientContext) -> "Matter":
        return cls(context.matter_work_type, context.matter_relation)

    def work_type_has(self, *words: str) -> bool:
        return any(w in self.work_type for w in words)

    def relation_in(self, *relations: str) -> bool:
        return self.relation in relations


class Route:
    def __init__(self, matter: Matter, category: Optional[MatterCategory],
                 sub_role: Optional[SubRole], enhanced_without_sof: bool):
        self.matter = matter
        self.category = category
        self.sub_role = sub_role
        self.enhanced_without_sof = enhanced_without_sof

    def is_(self, category: MatterCategory, *sub_roles: SubRole) -> bool:
        if self.category != category:
            return False
        return not sub_roles or self.sub_role in sub_roles


C = MatterCategory
R = SubRole

# -----------------------------------------------------------------------------
# Decision tables (first match wins)
# -----------------------------------------------------------------------------
CATEGORY_RULES: List[Tuple[Callable[[Matter], bool], MatterCategory]] = [
    (lambda m: m.relation_in("tenant", "occupier", "leaseholder", "freeholder", "landlord"), C.PROPERTY_OTHER),
    (lambda m: m.work_type in ("purchase", "sale", "transfer", "auction sale"), C.CONVEYANCING),
    (lambda m: m.work_type in ("lease", "equity release", "re-mortgaging", "adverse possession",
                               "1st registration", "assents"), C.PROPERTY_OTHER),
    (lambda m: m.work_type in ("wills", "lasting powers of attorney", "probate", "estates",
                               "deeds & declarations"), C.PRIVATE_CLIENT),
]

SUB_ROLE_RULES: List[Tuple[MatterCategory, Callable[[Matter], bool], SubRole]] = [
    # conveyancing
    (C.CONVEYANCING, lambda m: m.relation_in("gifter"), R.GIFTOR),
    (C.CONVEYANCING, lambda m: m.relation_in("executor", "beneficiary", "occupier", "leaseholder",
                                             "freeholder", "tenant", "other"), R.OTHER),
    (C.CONVEYANCING, lambda m: m.relation_in("our client") and m.work_type in ("purchase", "auction sale"), R.PURCHASER),
    (C.CONVEYANCING, lambda m: m.relation_in("our client") and m.work_type == "sale", R.SELLER),
    (C.CONVEYANCING, lambda m: m.relation_in("our client"), R.OTHER),
    # property - other
    (C.PROPERTY_OTHER, lambda m: m.relation_in("occupier") and m.work_type_has("purchase"), R.TENANT),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("our client") and m.work_type_has("equity release", "re-mortgaging"), R.TENANT),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("our client") and m.work_type_has("purchase"), R.PURCHASER),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("our client") and m.work_type_has("lease"), R.TENANT),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("gifter", "executor"), R.SELLER),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("beneficiary"), R.PURCHASER),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("occupier", "leaseholder", "tenant"), R.TENANT),
    (C.PROPERTY_OTHER, lambda m: m.relation_in("freeholder"), R.LANDLORD),
]

OWNERSHIP_RULES: List[Tuple[Callable[[Route], bool], OptionState]] = [
    (lambda r: r.is_(C.CONVEYANCING, R.SELLER), OptionState(visible=True, checked=True)),
    (lambda r: r.is_(C.CONVEYANCING, R.OTHER), OptionState(visible=True, checked=False)),
    (lambda r: r.is_(C.PROPERTY_OTHER, R.SELLER, R.LANDLORD), OptionState(visible=True, checked=True)),
    (lambda r: r.is_(C.PROPERTY_OTHER, R.TENANT) and r.matter.work_type_has("equity release", "re-mortgaging"),
     OptionState(visible=True, checked=True)),
    (lambda r: r.is_(C.PROPERTY_OTHER, R.TENANT), OptionState(visible=True, checked=False)),
    (lambda r: r.is_(C.OTHER), OptionState(visible=True, checked=False)),
]

QUESTIONNAIRE_VISIBLE: List[Callable[[Route], bool]] = [
    lambda r: r.is_(C.CONVEYANCING, R.PURCHASER, R.GIFTOR, R.OTHER),
    lambda r: r.is_(C.PROPERTY_OTHER, R.PURCHASER),
]

BANK_LINKING_VISIBLE: List[Callable[[Route], bool]] = [
    lambda r: r.category is not None,
]

# Shared by the questionnaire and bank linking
SOF_PRECHECK_RULES: List[Tuple[Callable[[Route], bool], Optional[bool]]] = [
    (lambda r: r.enhanced_without_sof, False),
    (lambda r: r.is_(C.CONVEYANCING, R.PURCHASER, R.GIFTOR), True),
    (lambda r: r.is_(C.CONVEYANCING, R.OTHER), None),
    (lambda r: r.is_(C.PROPERTY_OTHER, R.PURCHASER), True),
]


def _first_match(rules, subject, default=None):
    for predicate, result in rules:
        if predicate(subject):
            return result
    return default


def route_category(matter: Matter) -> Optional[MatterCategory]:
    return _first_match(CATEGORY_RULES, matter)


def route_sub_role(category: Optional[MatterCategory], matter: Matter) -> Optional[SubRole]:
    if category not in CATEGORIES_WITH_SUB_ROLES:
        return None
    for rule_category, predicate, result in SUB_ROLE_RULES:
        if rule_category == category and predicate(matter):
            return result
    return None


def _sof_prechecked(route: Route) -> bool:
    result = _first_match(SOF_PRECHECK_RULES, route, default=False)
    if result is None:
        # conveyancing "other": only purchases where we act for the client or the gifter
        return route.matter.work_type_has("purchase", "auction") and route.matter.relation_in("our client", "gifter")
    return result


def document_options(route: Route) -> Dict[SubOption, OptionState]:
    ownership = _first_match(OWNERSHIP_RULES, route, default=OptionState(visible=False))
    precheck = _sof_prechecked(route)
    questionnaire = any(p(route) for p in QUESTIONNAIRE_VISIBLE)
    bank = any(p(route) for p in BANK_LINKING_VISIBLE)
    return {
        SubOption.PROOF_OF_ADDRESS: OptionState(visible=True, checked=True, disabled=True),
        SubOption.PROOF_OF_OWNERSHIP: ownership,
        SubOption.SOF_QUESTIONNAIRE: OptionState(visible=questionnaire, checked=questionnaire and precheck),
        SubOption.BANK_LINKING: OptionState(visible=bank, checked=bank and precheck),
    }


# -----------------------------------------------------------------------------
# Evidence & identity documents
# -----------------------------------------------------------------------------
def suitable_photo_ids(context: ClientContext) -> List[IdentityImage]:
    return [
        img for img in context.uploaded_identity_images
        if img.image_type == PHOTO_ID_IMAGE_TYPE and img.document_kind in _KIND_TO_TYPE
    ]


def address_id_images(context: ClientContext) -> List[IdentityImage]:
    return [img for img in context.uploaded_identity_images if img.image_type == ADDRESS_ID_IMAGE_TYPE]


def has_sufficient_evidence(context: ClientContext) -> bool:
    icons = context.icons
    if icons.address_id_confirmed and icons.photo_id_confirmed and icons.likeness_confirmed:
        return True
    photos = [img for img in suitable_photo_ids(context) if img.document_kind != OTHER_PHOTO_ID_KIND]
    return len(photos) >= 1 and len(address_id_images(context)) >= 2 and icons.likeness_confirmed


def meets_standard_id_thresholds(context: ClientContext) -> bool:
    """Two address IDs plus one single-sided photo ID, or a front and a back."""
    if len(address_id_images(context)) < 2:
        return False
    photos = [img for img in context.uploaded_identity_images if img.image_type == PHOTO_ID_IMAGE_TYPE]
    if len(photos) == 1:
        return photos[0].side in (None, DocumentSide.SINGLE)
    sides = {img.side for img in photos}
    return len(photos) >= 2 and DocumentSide.FRONT in sides and DocumentSide.BACK in sides


def _pick(images: List[IdentityImage], sides, exclude: Optional[str] = None) -> Optional[str]:
    candidates = [img for img in images if img.image_id != exclude]
    for img in candidates:
        if img.side in sides:
            return img.image_id
    for img in candidates:
        if img.side is None:
            return img.image_id
    return None


def plan_idv_documents(context: ClientContext, chosen_type: Optional[str] = None) -> IdvPlan:
    photos = suitable_photo_ids(context)
    if not photos:
        return IdvPlan()

    auto_kind = None
    for kind, _code in PHOTO_ID_KINDS:
        if any(img.document_kind == kind for img in photos):
            auto_kind = kind
            break
    auto_include = auto_kind != OTHER_PHOTO_ID_KIND
    document_type = chosen_type or _KIND_TO_TYPE[auto_kind]
    requires_back = document_type not in SINGLE_SIDED_DOCUMENT_TYPES

    matching = [img for img in photos if _KIND_TO_TYPE[img.document_kind] == document_type]
    pool = matching or photos
    plan = IdvPlan(
        document_kind=auto_kind if not chosen_type else (matching[0].document_kind if matching else None),
        document_type=document_type,
        requires_back=requires_back,
        auto_include=auto_include,
        exact_match=bool(matching),
        front_candidates=[img.image_id for img in pool if img.side in (None, DocumentSide.SINGLE, DocumentSide.FRONT)],
        back_candidates=[img.image_id for img in pool if img.side in (None, DocumentSide.BACK)],
    )
    if not matching or not (auto_include or chosen_type):
        return plan

    front = _pick(matching, (DocumentSide.SINGLE, DocumentSide.FRONT) if not requires_back else (DocumentSide.FRONT,))
    back = _pick(matching, (DocumentSide.BACK,), exclude=front) if requires_back else None
    # a partial match leaves both sides to the user
    if front and (back or not requires_back):
        plan.auto_front_image_id = front
        plan.auto_back_image_id = back
    return plan


# -----------------------------------------------------------------------------
# Check types & modes
# -----------------------------------------------------------------------------
def available_check_types(context: ClientContext) -> List[CheckType]:
    if context.entity_kind == EntityKind.BUSINESS:
        return [CheckType.BUSINESS_VERIFICATION]
    if context.entity_kind == EntityKind.CHARITY:
        return []
    return [CheckType.IDENTITY_AND_SCREENING, CheckType.ELECTRONIC_VERIFICATION]


def auto_select_check_type(context: ClientContext) -> Optional[CheckType]:
    if context.entity_kind == EntityKind.BUSINESS:
        return CheckType.BUSINESS_VERIFICATION
    if context.entity_kind != EntityKind.INDIVIDUAL:
        return None
    if context.has_tag(RequestTag.ENHANCED_ID) or context.has_tag(RequestTag.SOURCE_OF_FUNDS_REQUESTED):
        return CheckType.ELECTRONIC_VERIFICATION
    if context.has_tag(RequestTag.STANDARD_ID):
        return CheckType.IDENTITY_AND_SCREENING
    if context.has_tag(RequestTag.RULE_BASED_ID) or not context.tags:
        if has_sufficient_evidence(context):
            return CheckType.IDENTITY_AND_SCREENING
    return None


def default_electronic_id_type(context: ClientContext) -> ElectronicIdType:
    if context.has_tag(RequestTag.SOURCE_OF_FUNDS_REQUESTED) and not context.has_tag(RequestTag.ENHANCED_ID):
        return ElectronicIdType.ADDITIONAL_ONLY
    return ElectronicIdType.STANDARD


def enhanced_without_sof(context: ClientContext) -> bool:
    return context.has_tag(RequestTag.ENHANCED_ID) and not context.has_tag(RequestTag.SOURCE_OF_FUNDS_REQUESTED)


def available_rules(context: ClientContext) -> List[RuleOption]:
    work_type = lower_text(context.matter_work_type)
    is_sale = bool(re.search(r"\bsale\b", work_type))
    rule3_ok = any(w in work_type for w in RULE3_WORK_TYPES) and meets_standard_id_thresholds(context)
    is_entity = context.entity_kind in (EntityKind.BUSINESS, EntityKind.CHARITY)

    rules = []
    for rule_id, label, applies_to, statement in RULE_CATALOGUE:
        if is_sale and rule_id in ("rule1", "rule2"):
            continue
        if rule_id == "rule3" and not rule3_ok:
            continue
        if applies_to == "entity" and not is_entity:
            continue
        rules.append(RuleOption(rule_id=rule_id, label=label, applies_to=applies_to, statement=statement))
    return rules


def business_prefill(context: ClientContext) -> BusinessPrefill:
    data = context.registered_business_data or {}
    from_snapshot = any(data.get(k) for k in ("company_number", "officers", "pscs", "registered_office_address"))
    if from_snapshot:
        jurisdiction = "GB"
    elif is_known_jurisdiction(context.registration_country):
        jurisdiction = resolve_jurisdiction(context.registration_country).two_letter
    else:
        jurisdiction = clean_text(context.registration_country)

    number = clean_text(data.get("company_number") or context.entity_number)
    name = clean_text(data.get("company_name") or context.business_name)
    return BusinessPrefill(
        jurisdiction=jurisdiction,
        company_name=name,
        company_number=number,
        search_by="number" if number else ("name" if name else None),
        from_registry_snapshot=from_snapshot,
    )


def default_check_reference(context: ClientContext) -> str:
    return clean_text(context.internal_reference) or clean_text(context.matter_description)


def default_electronic_reference(context: ClientContext, category: Optional[MatterCategory]) -> str:
    description = clean_text(context.matter_description)
    if category in CATEGORIES_WITH_SUB_ROLES:
        return description
    work_type = clean_text(context.matter_work_type)
    if work_type and description:
        return description if work_type == description else f"{work_type} {description}"
    return work_type or description


# -----------------------------------------------------------------------------
# Toggle resolution
# -----------------------------------------------------------------------------
def _resolve(key: SubOption, computed: OptionState, selection: CheckSelection,
             options: Dict[SubOption, OptionState], toggles: Dict[SubOption, ToggleState]) -> bool:
    state = selection.toggle_states.get(key, ToggleState.UNSET)
    if not computed.visible:
        options[key] = OptionState(visible=False, checked=False)
        toggles[key] = state if state == ToggleState.USER_OVERRIDDEN else ToggleState.UNSET
        return False
    if computed.disabled:
        options[key] = computed
        toggles[key] = ToggleState.AUTO_SET
        return computed.checked
    if state == ToggleState.USER_OVERRIDDEN and key in selection.sub_options:
        checked = bool(selection.sub_options[key])
        toggles[key] = ToggleState.USER_OVERRIDDEN
    else:
        checked = computed.checked
        toggles[key] = ToggleState.AUTO_SET
    options[key] = OptionState(visible=True, checked=checked)
    return checked


def _international(country: Optional[str]) -> OptionState:
    three = country_code_to_three_letter(country) if country else "GBR"
    eligible = three != "GBR" and three in INTERNATIONAL_VERIFICATION_COUNTRIES
    return OptionState(visible=eligible, checked=eligible)


def _lite_country(context: ClientContext, answers: Optional[Answers]) -> Optional[str]:
    if answers is not None:
        if answers.lite.address is not None:
            return answers.lite.address.country
        if answers.lite.country:
            return answers.lite.country
    return context.known_address.country if context.known_address else None


def _electronic_country(context: ClientContext, answers: Optional[Answers]) -> Optional[str]:
    if answers is not None and answers.electronic.country:
        return answers.electronic.country
    return context.known_address.country if context.known_address else None


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------
def conservative_configuration(selection: Optional[CheckSelection], reason: str,
                               context: Optional[ClientContext] = None,
                               answers: Optional[Answers] = None) -> Configuration:
    """
    Everything optional visible, nothing pre-checked, nothing auto-selected.
    Explicit user choices still apply, and so do the check types the
    client's entity kind allows.
    """
    selection = selection or CheckSelection()
    available = available_check_types(context) if context is not None else list(CheckType)
    category = selection.matter_category
    config = Configuration(
        available_check_types=available,
        auto_selected_check_type=None,
        effective_check_type=selection.check_type,
        blocking_message=CHARITY_BLOCKING_MESSAGE if context is not None and context.entity_kind == EntityKind.CHARITY else None,
        matter_category=category,
        sub_role=selection.sub_role if category in CATEGORIES_WITH_SUB_ROLES else None,
        sub_role_required=category in CATEGORIES_WITH_SUB_ROLES,
        electronic_id_type=selection.electronic_id_type or ElectronicIdType.STANDARD,
        lite_screen_type=selection.lite_screen_type or LiteScreenType.AML_ADDRESS,
        conservative=True,
        notes=[reason],
    )

    options: Dict[SubOption, OptionState] = {}
    toggles: Dict[SubOption, ToggleState] = {}
    for key in SubOption:
        overridden = selection.toggle_states.get(key) == ToggleState.USER_OVERRIDDEN and key in selection.sub_options
        options[key] = OptionState(visible=True, checked=bool(selection.sub_options[key]) if overridden else False)
        toggles[key] = ToggleState.USER_OVERRIDDEN if overridden else ToggleState.UNSET
    config.options = options
    config.toggle_states = toggles

    if context is not None and selection.check_type == CheckType.IDENTITY_AND_SCREENING:
        chosen_type = answers.idv.document_type if answers is not None else None
        # candidates only; the user picks both sides
        config.idv_plan = plan_idv_documents(context, chosen_type).copy(update={
            "auto_include": False,
            "auto_front_image_id": None,
            "auto_back_image_id": None,
        })
    return config


def _contradiction(context: ClientContext) -> Optional[str]:
    if context.entity_kind == EntityKind.INDIVIDUAL and context.registered_business_data:
        return "individual client carries registry data"
    return None


def derive_configuration(context: Optional[ClientContext], selection: Optional[CheckSelection] = None,
                         answers: Optional[Answers] = None, log: bool = True) -> Configuration:
    """
    Work out which check types, modes and options apply to this client.
    Never raises: a missing or contradictory context, or any internal
    failure, yields the conservative configuration.
    """
    selection = selection or CheckSelection()
    if context is None:
        if log:
            print("[CONFIG] No client context; using conservative configuration", flush=True)
        return conservative_configuration(selection, "client context is missing")
    problem = _contradiction(context)
    if problem:
        if log:
            print(f"[CONFIG] Contradictory context ({problem}); using conservative configuration", flush=True)
        return conservative_configuration(selection, problem, context, answers)
    try:
        config = _derive(context, selection, answers)
    except Exception as e:
        if log:
            print(f"[CONFIG] Failed to derive configuration: {e}", flush=True)
        return conservative_configuration(selection, "configuration could not be derived", context, answers)
    if log:
        print(
            f"[CONFIG] entity={context.entity_kind.value} "
            f"auto={config.auto_selected_check_type.value if config.auto_selected_check_type else None} "
            f"check={config.effective_check_type.value if config.effective_check_type else None} "
            f"category={config.matter_category.value if config.matter_category else None} "
            f"sub_role={config.sub_role.value if config.sub_role else None}",
            flush=True,
        )
    return config


def _derive(context: ClientContext, selection: CheckSelection, answers: Optional[Answers]) -> Configuration:
    available = available_check_types(context)
    auto = auto_select_check_type(context)
    effective = selection.check_type or auto

    matter = Matter.from_context(context)
    category = selection.matter_category or route_category(matter)
    sub_role = selection.sub_role or route_sub_role(category, matter)
    if category not in CATEGORIES_WITH_SUB_ROLES:
        sub_role = None

    config = Configuration(
        available_check_types=available,
        auto_selected_check_type=auto,
        effective_check_type=effective,
        blocking_message=CHARITY_BLOCKING_MESSAGE if context.entity_kind == EntityKind.CHARITY else None,
        matter_category=category,
        sub_role=sub_role,
        sub_role_required=category in CATEGORIES_WITH_SUB_ROLES,
        electronic_id_type=selection.electronic_id_type or default_electronic_id_type(context),
        lite_screen_type=selection.lite_screen_type or LiteScreenType.AML_ADDRESS,
        available_rules=available_rules(context),
        check_reference_default=default_check_reference(context),
        electronic_reference_default=default_electronic_reference(context, category),
    )

    options: Dict[SubOption, OptionState] = {}
    toggles: Dict[SubOption, ToggleState] = {}

    if effective == CheckType.IDENTITY_AND_SCREENING:
        chosen_type = answers.idv.document_type if answers is not None else None
        plan = plan_idv_documents(context, chosen_type)
        config.idv_plan = plan
        has_photo_id = bool(suitable_photo_ids(context))
        lite_on = _resolve(SubOption.LITE_SCREEN, OptionState(visible=True, checked=True), selection, options, toggles)
        _resolve(SubOption.IDV, OptionState(visible=True, checked=has_photo_id and plan.auto_include,
                                            disabled=not has_photo_id), selection, options, toggles)
        _resolve(SubOption.MONITORING, OptionState(visible=lite_on, checked=True), selection, options, toggles)
        international = _international(_lite_country(context, answers))
        if not lite_on or config.lite_screen_type != LiteScreenType.AML_ADDRESS:
            international = OptionState(visible=False)
        _resolve(SubOption.INTERNATIONAL_ADDRESS, international, selection, options, toggles)

    elif effective == CheckType.ELECTRONIC_VERIFICATION:
        standard = config.electronic_id_type == ElectronicIdType.STANDARD
        _resolve(SubOption.MONITORING, OptionState(visible=standard, checked=standard), selection, options, toggles)
        international = _international(_electronic_country(context, answers)) if standard else OptionState(visible=False)
        _resolve(SubOption.INTERNATIONAL_ADDRESS, international, selection, options, toggles)
        route = Route(matter, category, sub_role, enhanced_without_sof(context))
        for key, computed in document_options(route).items():
            _resolve(key, computed, selection, options, toggles)
        if route.enhanced_without_sof:
            config.notes.append(SOF_SUPPRESSED_NOTE)

    elif effective == CheckType.BUSINESS_VERIFICATION:
        prefill = business_prefill(context)
        config.business_prefill = prefill
        jurisdiction = answers.business.jurisdiction if answers is not None and answers.business.jurisdiction else prefill.jurisdiction
        is_gb = bool(jurisdiction) and resolve_jurisdiction(jurisdiction).two_letter == "GB" and is_known_jurisdiction(jurisdiction)
        _resolve(SubOption.MONITORING, OptionState(visible=True, checked=True), selection, options, toggles)
        _resolve(SubOption.KYB_UBO, OptionState(visible=True, checked=True), selection, options, toggles)
        _resolve(SubOption.KYB_PSC_EXTRACT, OptionState(visible=is_gb, checked=is_gb), selection, options, toggles)
        _resolve(SubOption.KYB_SHAREHOLDERS, OptionState(visible=True, checked=True), selection, options, toggles)
        _resolve(SubOption.KYB_REGISTRY_DOCUMENTS, OptionState(visible=True, checked=False), selection, options, toggles)

    config.options = options
    config.toggle_states = toggles
    return config
