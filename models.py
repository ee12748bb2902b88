# models.py
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, Field, validator


# -----------------------------------------------------------------------------
# Enums (str-valued so they serialise straight to the wire values)
# -----------------------------------------------------------------------------
class EntityKind(str, Enum):
    INDIVIDUAL = "individual"
    BUSINESS   = "business"
    CHARITY    = "charity"


class RequestTag(str, Enum):
    STANDARD_ID               = "formJ"
    RULE_BASED_ID             = "formK"
    ENHANCED_ID               = "formE"
    SOURCE_OF_FUNDS_REQUESTED = "esof-requested"


class CheckType(str, Enum):
    IDENTITY_AND_SCREENING  = "idv-lite"
    ELECTRONIC_VERIFICATION = "electronic-id"
    BUSINESS_VERIFICATION   = "kyb"


class DocumentSide(str, Enum):
    FRONT  = "Front"
    BACK   = "Back"
    SINGLE = "Single"


class ToggleState(str, Enum):
    UNSET           = "unset"
    AUTO_SET        = "auto-set"
    USER_OVERRIDDEN = "user-overridden"


class SubOption(str, Enum):
    LITE_SCREEN            = "lite_screen"
    IDV                    = "idv"
    MONITORING             = "monitoring"
    INTERNATIONAL_ADDRESS  = "international_address"
    PROOF_OF_ADDRESS       = "proof_of_address"
    PROOF_OF_OWNERSHIP     = "proof_of_ownership"
    SOF_QUESTIONNAIRE      = "sof_questionnaire"
    BANK_LINKING           = "bank_linking"
    KYB_UBO                = "kyb_ubo"
    KYB_PSC_EXTRACT        = "kyb_psc_extract"
    KYB_SHAREHOLDERS       = "kyb_shareholders"
    KYB_REGISTRY_DOCUMENTS = "kyb_registry_documents"


class MatterCategory(str, Enum):
    CONVEYANCING   = "conveyancing"
    PROPERTY_OTHER = "property-other"
    PRIVATE_CLIENT = "private-client"
    OTHER          = "other"


class SubRole(str, Enum):
    PURCHASER = "purchaser"
    SELLER    = "seller"
    GIFTOR    = "giftor"
    LANDLORD  = "landlord"
    TENANT    = "tenant"
    OTHER     = "other"


class ElectronicIdType(str, Enum):
    STANDARD        = "standard"
    ADDITIONAL_ONLY = "additional-only"


class LiteScreenType(str, Enum):
    AML_ONLY    = "aml-only"
    AML_ADDRESS = "aml-address"


# -----------------------------------------------------------------------------
# Identifiers
# -----------------------------------------------------------------------------
class CrosswalkEntry(BaseModel):
    two_letter: str
    three_letter: str
    provider_code: str

    class Config:
        frozen = True


class JurisdictionMatch(CrosswalkEntry):
    degraded: bool = False


class PhoneNumber(BaseModel):
    country_code: str
    national_number: str

    class Config:
        frozen = True

    @property
    def e164(self) -> str:
        return f"{self.country_code}{self.national_number}"


class PhoneCheck(BaseModel):
    valid: bool
    is_mobile: bool = False
    e164: Optional[str] = None
    reason: Optional[str] = None


# -----------------------------------------------------------------------------
# Client context
# -----------------------------------------------------------------------------
class Address(BaseModel):
    country: str = "GBR"
    town: Optional[str] = None
    postcode: Optional[str] = None
    flat_number: Optional[str] = None
    building_number: Optional[str] = None
    building_name: Optional[str] = None
    street: Optional[str] = None
    sub_street: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    state: Optional[str] = None

    @validator("*", pre=True)
    def _blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @validator("country", pre=True, always=True)
    def _country_upper(cls, v):
        return (v or "GBR").upper()


class IdentityImage(BaseModel):
    image_id: str
    image_type: str = "PhotoID"
    document_kind: Optional[str] = None
    side: Optional[DocumentSide] = None
    uploaded_at: Optional[str] = None
    uploader: Optional[str] = None
    url: Optional[str] = None
    storage_key: Optional[str] = None

    @validator("side", pre=True)
    def _blank_side(cls, v):
        return v or None


class SupportDocument(BaseModel):
    kind: str
    url: Optional[str] = None
    uploaded_at: Optional[str] = None


class Icons(BaseModel):
    address_id_confirmed: bool = False
    photo_id_confirmed: bool = False
    likeness_confirmed: bool = False


class ClientContext(BaseModel):
    """
    Everything the loader knows about the client. Immutable once loaded;
    a new load produces a new context.
    """
    entity_kind: EntityKind
    tags: FrozenSet[RequestTag] = frozenset()
    matter_work_type: str = ""
    matter_relation: str = ""
    matter_description: str = ""
    internal_reference: Optional[str] = None

    uploaded_identity_images: Tuple[IdentityImage, ...] = ()
    uploaded_support_documents: Tuple[SupportDocument, ...] = ()
    icons: Icons = Field(default_factory=Icons)

    known_address: Optional[Address] = None
    known_previous_address: Optional[Address] = None
    registered_business_data: Optional[Dict[str, Any]] = None

    # prefill
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    date_of_birth: str = ""
    phone: str = ""
    email: str = ""
    business_name: str = ""
    entity_number: str = ""
    registration_country: str = ""

    class Config:
        frozen = True

    @validator("tags", pre=True)
    def _drop_unknown_tags(cls, v):
        known = {t.value for t in RequestTag}
        kept = []
        for tag in (v or []):
            value = tag.value if isinstance(tag, RequestTag) else str(tag)
            if value in known:
                kept.append(value)
            else:
                print(f"[CONTEXT] Ignoring unknown request tag '{value}'", flush=True)
        return frozenset(kept)

    @validator("matter_work_type", "matter_relation", "matter_description", pre=True)
    def _none_to_blank(cls, v):
        return (v or "").strip()

    def has_tag(self, tag: RequestTag) -> bool:
        return tag in self.tags


# -----------------------------------------------------------------------------
# Selection & answers
# -----------------------------------------------------------------------------
class CheckSelection(BaseModel):
    check_type: Optional[CheckType] = None
    sub_options: Dict[SubOption, bool] = Field(default_factory=dict)
    toggle_states: Dict[SubOption, ToggleState] = Field(default_factory=dict)
    rule_id: Optional[str] = None

    # explicit user choices; None means "use the routed default"
    matter_category: Optional[MatterCategory] = None
    sub_role: Optional[SubRole] = None
    electronic_id_type: Optional[ElectronicIdType] = None
    lite_screen_type: Optional[LiteScreenType] = None

    @validator("rule_id")
    def _rule_only_for_business(cls, v, values):
        if v and values.get("check_type") != CheckType.BUSINESS_VERIFICATION:
            raise ValueError("rule_id is only allowed with business verification")
        return v or None

    def with_override(self, key: SubOption, value: bool) -> "CheckSelection":
        """Copy of this selection with one option pinned by the user."""
        sub_options = dict(self.sub_options)
        sub_options[key] = value
        toggle_states = dict(self.toggle_states)
        toggle_states[key] = ToggleState.USER_OVERRIDDEN
        return CheckSelection(
            check_type=self.check_type,
            sub_options=sub_options,
            toggle_states=toggle_states,
            rule_id=self.rule_id,
            matter_category=self.matter_category,
            sub_role=self.sub_role,
            electronic_id_type=self.electronic_id_type,
            lite_screen_type=self.lite_screen_type,
        )


class LiteAnswers(BaseModel):
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    dob_digits: str = ""
    country: Optional[str] = None
    address: Optional[Address] = None


class IdvAnswers(BaseModel):
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    document_type: Optional[str] = None
    front_image_id: Optional[str] = None
    back_image_id: Optional[str] = None


class ElectronicAnswers(BaseModel):
    full_name: str = ""
    phone_country_code: str = "+44"
    mobile: str = ""
    email: str = ""
    reference: str = ""
    country: Optional[str] = None


class RegistryCandidate(BaseModel):
    number: str
    name: str = ""
    jurisdiction: str = "GB"
    status: Optional[str] = None
    address: Optional[str] = None
    provider_id: Optional[str] = None
    confidence: Optional[float] = None


class LinkedRecord(BaseModel):
    number: str
    name: str
    jurisdiction: str = "GB"
    provider_id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class BusinessAnswers(BaseModel):
    jurisdiction: str = ""
    company_name: str = ""
    company_number: str = ""
    selected_candidate: Optional[RegistryCandidate] = None
    linked_record: Optional[LinkedRecord] = None


class Answers(BaseModel):
    check_reference: str = ""
    lite: LiteAnswers = Field(default_factory=LiteAnswers)
    idv: IdvAnswers = Field(default_factory=IdvAnswers)
    electronic: ElectronicAnswers = Field(default_factory=ElectronicAnswers)
    business: BusinessAnswers = Field(default_factory=BusinessAnswers)


# -----------------------------------------------------------------------------
# Engine outputs
# -----------------------------------------------------------------------------
class Violation(BaseModel):
    field: str
    message: str

    class Config:
        frozen = True


class ValidationResult(BaseModel):
    valid: bool
    violations: Tuple[Violation, ...] = ()

    class Config:
        frozen = True

    def fields(self) -> List[str]:
        return [v.field for v in self.violations]


class OptionState(BaseModel):
    visible: bool = True
    checked: bool = False
    disabled: bool = False


class IdvPlan(BaseModel):
    document_kind: Optional[str] = None
    document_type: Optional[str] = None
    requires_back: bool = False
    auto_include: bool = False
    exact_match: bool = False
    front_candidates: List[str] = Field(default_factory=list)
    back_candidates: List[str] = Field(default_factory=list)
    auto_front_image_id: Optional[str] = None
    auto_back_image_id: Optional[str] = None


class RuleOption(BaseModel):
    rule_id: str
    label: str
    applies_to: str
    statement: str


class BusinessPrefill(BaseModel):
    jurisdiction: str = ""
    company_name: str = ""
    company_number: str = ""
    search_by: Optional[str] = None
    from_registry_snapshot: bool = False


class Configuration(BaseModel):
    available_check_types: List[CheckType] = Field(default_factory=list)
    auto_selected_check_type: Optional[CheckType] = None
    effective_check_type: Optional[CheckType] = None
    blocking_message: Optional[str] = None

    matter_category: Optional[MatterCategory] = None
    sub_role: Optional[SubRole] = None
    sub_role_required: bool = False
    electronic_id_type: ElectronicIdType = ElectronicIdType.STANDARD
    lite_screen_type: LiteScreenType = LiteScreenType.AML_ADDRESS

    options: Dict[SubOption, OptionState] = Field(default_factory=dict)
    toggle_states: Dict[SubOption, ToggleState] = Field(default_factory=dict)

    idv_plan: Optional[IdvPlan] = None
    available_rules: List[RuleOption] = Field(default_factory=list)
    business_prefill: Optional[BusinessPrefill] = None

    check_reference_default: str = ""
    electronic_reference_default: str = ""

    conservative: bool = False
    notes: List[str] = Field(default_factory=list)

    def option(self, key: SubOption) -> OptionState:
        return self.options.get(key) or OptionState(visible=False)

    def is_visible(self, key: SubOption) -> bool:
        return self.option(key).visible

    def is_on(self, key: SubOption) -> bool:
        state = self.option(key)
        return state.visible and state.checked

    def rule(self, rule_id: Optional[str]) -> Optional[RuleOption]:
        for r in self.available_rules:
            if r.rule_id == rule_id:
                return r
        return None


class OutboundPayload(BaseModel):
    endpoint: str
    kind: str
    body: Dict[str, Any]
