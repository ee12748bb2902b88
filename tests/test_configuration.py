"""
Tests for the configuration engine.

Covers:
1. Available / auto-selected check types per entity kind and request tag
2. Matter routing (category and sub-role tables)
3. Document option table for electronic ID
4. Toggle resolution (auto-set vs user-overridden vs hidden)
5. IDV document matching
6. Rule availability and business prefill
7. Conservative fallback
"""
import pytest
from unittest.mock import patch

from configuration import (
    CHARITY_BLOCKING_MESSAGE,
    SOF_SUPPRESSED_NOTE,
    Matter,
    derive_configuration,
    has_sufficient_evidence,
    meets_standard_id_thresholds,
    plan_idv_documents,
    route_category,
    route_sub_role,
)
from models import (
    Address,
    Answers,
    CheckSelection,
    CheckType,
    ClientContext,
    ElectronicIdType,
    EntityKind,
    IdentityImage,
    Icons,
    LiteAnswers,
    LiteScreenType,
    MatterCategory,
    SubOption,
    SubRole,
    ToggleState,
)


def _individual(**kw):
    base = dict(entity_kind=EntityKind.INDIVIDUAL)
    base.update(kw)
    return ClientContext(**base)


def _photo(image_id, kind, side=None):
    return IdentityImage(image_id=image_id, image_type="PhotoID", document_kind=kind, side=side,
                         storage_key=f"protected/{image_id}.jpg")


def _address_id(image_id):
    return IdentityImage(image_id=image_id, image_type="Address ID", storage_key=f"protected/{image_id}.jpg")


# =============================================================================
# CHECK TYPES
# =============================================================================

class TestCheckTypes:

    def test_charity_has_nothing_available(self):
        config = derive_configuration(ClientContext(entity_kind=EntityKind.CHARITY))
        assert config.available_check_types == []
        assert config.auto_selected_check_type is None
        assert config.blocking_message == CHARITY_BLOCKING_MESSAGE

    def test_business_gets_kyb_only(self, business_context):
        config = derive_configuration(business_context)
        assert config.available_check_types == [CheckType.BUSINESS_VERIFICATION]
        assert config.auto_selected_check_type == CheckType.BUSINESS_VERIFICATION

    def test_individual_gets_both_individual_checks(self):
        config = derive_configuration(_individual())
        assert config.available_check_types == [CheckType.IDENTITY_AND_SCREENING,
                                                CheckType.ELECTRONIC_VERIFICATION]

    @pytest.mark.parametrize("tags,expected", [
        (["formE"], CheckType.ELECTRONIC_VERIFICATION),
        (["esof-requested"], CheckType.ELECTRONIC_VERIFICATION),
        (["formJ"], CheckType.IDENTITY_AND_SCREENING),
        (["formK"], None),
        ([], None),
    ])
    def test_auto_selection_by_tag(self, tags, expected):
        config = derive_configuration(_individual(tags=tags))
        assert config.auto_selected_check_type == expected

    def test_rule_based_request_with_full_evidence_picks_identity(self):
        context = _individual(
            tags=["formK"],
            icons=Icons(address_id_confirmed=True, photo_id_confirmed=True, likeness_confirmed=True),
        )
        assert has_sufficient_evidence(context)
        assert derive_configuration(context).auto_selected_check_type == CheckType.IDENTITY_AND_SCREENING

    def test_uploaded_evidence_counts_with_likeness(self):
        context = _individual(
            uploaded_identity_images=[_photo("p", "Passport"), _address_id("a1"), _address_id("a2")],
            icons=Icons(likeness_confirmed=True),
        )
        assert has_sufficient_evidence(context)

    def test_unknown_tags_are_ignored(self):
        context = _individual(tags=["formJ", "formX"])
        assert {t.value for t in context.tags} == {"formJ"}

    def test_user_selection_wins_over_auto(self, uk_individual):
        config = derive_configuration(uk_individual, CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION))
        assert config.auto_selected_check_type == CheckType.IDENTITY_AND_SCREENING
        assert config.effective_check_type == CheckType.ELECTRONIC_VERIFICATION

    @pytest.mark.parametrize("tags,expected", [
        (["esof-requested"], ElectronicIdType.ADDITIONAL_ONLY),
        (["formE", "esof-requested"], ElectronicIdType.STANDARD),
        (["formE"], ElectronicIdType.STANDARD),
    ])
    def test_electronic_id_type_default(self, tags, expected):
        assert derive_configuration(_individual(tags=tags)).electronic_id_type == expected


# =============================================================================
# MATTER ROUTING
# =============================================================================

class TestRouting:

    @pytest.mark.parametrize("work_type,relation,category,sub_role", [
        ("Purchase of", "Our Client", MatterCategory.CONVEYANCING, SubRole.PURCHASER),
        ("Sale of", "Our Client", MatterCategory.CONVEYANCING, SubRole.SELLER),
        ("Purchase of", "Gifter", MatterCategory.CONVEYANCING, SubRole.GIFTOR),
        ("Transfer of", "Our Client", MatterCategory.CONVEYANCING, SubRole.OTHER),
        ("Purchase of", "Tenant", MatterCategory.PROPERTY_OTHER, SubRole.TENANT),
        ("Lease", "Our Client", MatterCategory.PROPERTY_OTHER, SubRole.TENANT),
        ("Equity Release", "Our Client", MatterCategory.PROPERTY_OTHER, SubRole.TENANT),
        ("Lease", "Freeholder", MatterCategory.PROPERTY_OTHER, SubRole.LANDLORD),
        ("Wills", "Our Client", MatterCategory.PRIVATE_CLIENT, None),
        ("Probate", "Executor", MatterCategory.PRIVATE_CLIENT, None),
        ("Litigation", "Our Client", None, None),
    ])
    def test_routing_table(self, work_type, relation, category, sub_role):
        matter = Matter(work_type, relation)
        routed = route_category(matter)
        assert routed == category
        assert route_sub_role(routed, matter) == sub_role

    def test_tenant_on_purchase_is_property_other(self):
        context = _individual(matter_work_type="Purchase", matter_relation="Tenant")
        config = derive_configuration(context, CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION))
        assert config.matter_category == MatterCategory.PROPERTY_OTHER
        assert config.sub_role == SubRole.TENANT
        assert config.sub_role_required

    def test_explicit_category_drops_sub_role_outside_property(self):
        context = _individual(matter_work_type="Purchase", matter_relation="Our Client")
        selection = CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION,
                                   matter_category=MatterCategory.OTHER)
        config = derive_configuration(context, selection)
        assert config.sub_role is None
        assert not config.sub_role_required


# =============================================================================
# ELECTRONIC ID DOCUMENT OPTIONS
# =============================================================================

class TestDocumentOptions:

    def _config(self, work_type, relation, tags=()):
        context = _individual(matter_work_type=work_type, matter_relation=relation, tags=list(tags))
        return derive_configuration(context, CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION))

    def test_proof_of_address_always_on_and_locked(self):
        state = self._config("Litigation", "Our Client").option(SubOption.PROOF_OF_ADDRESS)
        assert state.visible and state.checked and state.disabled

    def test_purchaser_gets_source_of_funds_prechecked(self):
        config = self._config("Purchase of", "Our Client")
        assert config.is_on(SubOption.SOF_QUESTIONNAIRE)
        assert config.is_on(SubOption.BANK_LINKING)
        assert not config.is_visible(SubOption.PROOF_OF_OWNERSHIP)

    def test_seller_gets_proof_of_ownership(self):
        config = self._config("Sale of", "Our Client")
        assert config.is_on(SubOption.PROOF_OF_OWNERSHIP)
        assert not config.is_visible(SubOption.SOF_QUESTIONNAIRE)
        assert config.is_visible(SubOption.BANK_LINKING)
        assert not config.is_on(SubOption.BANK_LINKING)

    def test_enhanced_without_sof_request_suppresses_precheck(self):
        config = self._config("Purchase of", "Our Client", tags=["formE"])
        assert config.is_visible(SubOption.SOF_QUESTIONNAIRE)
        assert not config.is_on(SubOption.SOF_QUESTIONNAIRE)
        assert not config.is_on(SubOption.BANK_LINKING)
        assert SOF_SUPPRESSED_NOTE in config.notes

    def test_enhanced_with_sof_request_keeps_precheck(self):
        config = self._config("Purchase of", "Our Client", tags=["formE", "esof-requested"])
        assert config.is_on(SubOption.SOF_QUESTIONNAIRE)
        assert config.notes == []

    def test_uncategorised_matter_hides_bank_linking(self):
        config = self._config("Litigation", "Our Client")
        assert not config.is_visible(SubOption.BANK_LINKING)

    def test_additional_only_hides_monitoring(self):
        config = self._config("Purchase of", "Our Client", tags=["esof-requested"])
        assert config.electronic_id_type == ElectronicIdType.ADDITIONAL_ONLY
        assert not config.is_visible(SubOption.MONITORING)
        assert not config.is_visible(SubOption.INTERNATIONAL_ADDRESS)


# =============================================================================
# TOGGLE STATES
# =============================================================================

class TestToggles:

    def test_computed_values_are_auto_set(self, uk_individual, identity_selection):
        config = derive_configuration(uk_individual, identity_selection)
        assert config.toggle_states[SubOption.LITE_SCREEN] == ToggleState.AUTO_SET
        assert config.is_on(SubOption.LITE_SCREEN)

    def test_user_override_is_kept(self, uk_individual, identity_selection):
        selection = identity_selection.with_override(SubOption.MONITORING, False)
        config = derive_configuration(uk_individual, selection)
        assert config.toggle_states[SubOption.MONITORING] == ToggleState.USER_OVERRIDDEN
        assert not config.is_on(SubOption.MONITORING)

    def test_hidden_option_is_never_on(self, uk_individual, identity_selection):
        selection = identity_selection.with_override(SubOption.LITE_SCREEN, False)
        selection = selection.with_override(SubOption.MONITORING, True)
        config = derive_configuration(uk_individual, selection)
        assert not config.is_visible(SubOption.MONITORING)
        assert not config.is_on(SubOption.MONITORING)
        assert config.toggle_states[SubOption.MONITORING] == ToggleState.USER_OVERRIDDEN

    def test_disabled_option_ignores_override(self):
        context = _individual(matter_work_type="Purchase", matter_relation="Our Client")
        selection = CheckSelection(check_type=CheckType.ELECTRONIC_VERIFICATION)
        selection = selection.with_override(SubOption.PROOF_OF_ADDRESS, False)
        config = derive_configuration(context, selection)
        assert config.is_on(SubOption.PROOF_OF_ADDRESS)
        assert config.toggle_states[SubOption.PROOF_OF_ADDRESS] == ToggleState.AUTO_SET

    def test_idv_is_disabled_without_photo_id(self, identity_selection):
        config = derive_configuration(_individual(), identity_selection)
        state = config.option(SubOption.IDV)
        assert state.disabled and not state.checked

    def test_international_address_only_for_eligible_countries(self, identity_selection):
        context = _individual(known_address=Address(country="FRA", line1="5 Rue de Rivoli", town="Paris"))
        config = derive_configuration(context, identity_selection)
        assert config.is_on(SubOption.INTERNATIONAL_ADDRESS)

        aml_only = CheckSelection(check_type=CheckType.IDENTITY_AND_SCREENING,
                                  lite_screen_type=LiteScreenType.AML_ONLY)
        assert not derive_configuration(context, aml_only).is_visible(SubOption.INTERNATIONAL_ADDRESS)

    def test_lite_answer_address_overrides_known_address(self, uk_individual, identity_selection):
        answers = Answers(lite=LiteAnswers(address=Address(country="FRA", line1="1 Rue", town="Paris")))
        config = derive_configuration(uk_individual, identity_selection, answers)
        assert config.is_visible(SubOption.INTERNATIONAL_ADDRESS)

    def test_kyb_psc_extract_only_for_gb(self, business_context):
        selection = CheckSelection(check_type=CheckType.BUSINESS_VERIFICATION)
        assert derive_configuration(business_context, selection).is_on(SubOption.KYB_PSC_EXTRACT)

        foreign = business_context.copy(update={"registration_country": "FR"})
        config = derive_configuration(foreign, selection)
        assert not config.is_visible(SubOption.KYB_PSC_EXTRACT)
        assert config.is_on(SubOption.KYB_UBO)
        assert not config.is_on(SubOption.KYB_REGISTRY_DOCUMENTS)


# =============================================================================
# IDV DOCUMENT MATCHING
# =============================================================================

class TestIdvPlan:

    def test_no_photo_id(self):
        plan = plan_idv_documents(_individual())
        assert plan.document_type is None
        assert not plan.auto_include

    def test_passport_auto_picks_single_image(self, uk_individual):
        plan = plan_idv_documents(uk_individual)
        assert plan.document_type == "passport"
        assert not plan.requires_back
        assert plan.auto_include
        assert plan.auto_front_image_id == "img-passport"
        assert plan.auto_back_image_id is None

    def test_priority_order_prefers_passport(self):
        context = _individual(uploaded_identity_images=[
            _photo("dl-front", "Driving Licence", "Front"),
            _photo("pp", "Passport", "Single"),
        ])
        assert plan_idv_documents(context).document_type == "passport"

    def test_licence_front_and_back(self):
        context = _individual(uploaded_identity_images=[
            _photo("dl-back", "Driving Licence", "Back"),
            _photo("dl-front", "Driving Licence", "Front"),
        ])
        plan = plan_idv_documents(context)
        assert plan.document_type == "driving_licence"
        assert plan.requires_back
        assert plan.auto_front_image_id == "dl-front"
        assert plan.auto_back_image_id == "dl-back"

    def test_partial_match_leaves_both_sides_unset(self):
        context = _individual(uploaded_identity_images=[_photo("dl-front", "Driving Licence", "Front")])
        plan = plan_idv_documents(context)
        assert plan.front_candidates == ["dl-front"]
        assert plan.auto_front_image_id is None
        assert plan.auto_back_image_id is None

    def test_other_photo_id_is_never_auto_included(self):
        context = _individual(uploaded_identity_images=[
            _photo("o-front", "Other Photo ID Card", "Front"),
            _photo("o-back", "Other Photo ID Card", "Back"),
        ])
        plan = plan_idv_documents(context)
        assert not plan.auto_include
        assert plan.auto_front_image_id is None

    def test_chosen_type_without_matching_images(self, uk_individual):
        plan = plan_idv_documents(uk_individual, "driving_licence")
        assert plan.document_type == "driving_licence"
        assert not plan.exact_match
        assert plan.front_candidates == ["img-passport"]
        assert plan.auto_front_image_id is None

    def test_standard_id_thresholds(self):
        assert meets_standard_id_thresholds(_individual(uploaded_identity_images=[
            _photo("pp", "Passport", "Single"), _address_id("a1"), _address_id("a2"),
        ]))
        assert not meets_standard_id_thresholds(_individual(uploaded_identity_images=[
            _photo("dl", "Driving Licence", "Front"), _address_id("a1"), _address_id("a2"),
        ]))


# =============================================================================
# RULES, PREFILL, REFERENCES
# =============================================================================

class TestRulesAndPrefill:

    def test_sale_matter_hides_rules_one_and_two(self, business_context):
        sale = business_context.copy(update={"matter_work_type": "Sale"})
        ids = [r.rule_id for r in derive_configuration(sale).available_rules]
        assert "rule1" not in ids and "rule2" not in ids
        assert "rule4" in ids

    def test_entity_rules_hidden_for_individuals(self):
        ids = [r.rule_id for r in derive_configuration(_individual()).available_rules]
        assert "rule4" not in ids
        assert "rule10" in ids

    def test_rule_three_needs_work_type_and_evidence(self):
        images = [_photo("pp", "Passport", "Single"), _address_id("a1"), _address_id("a2")]
        will = _individual(matter_work_type="Wills", uploaded_identity_images=images)
        assert derive_configuration(will).rule("rule3") is not None
        no_evidence = _individual(matter_work_type="Wills")
        assert derive_configuration(no_evidence).rule("rule3") is None

    def test_business_prefill_prefers_number(self, business_context):
        prefill = derive_configuration(
            business_context, CheckSelection(check_type=CheckType.BUSINESS_VERIFICATION)
        ).business_prefill
        assert prefill.jurisdiction == "GB"
        assert prefill.company_number == "01234567"
        assert prefill.search_by == "number"
        assert not prefill.from_registry_snapshot

    def test_business_prefill_from_registry_snapshot(self):
        context = ClientContext(
            entity_kind=EntityKind.BUSINESS,
            registration_country="FR",
            registered_business_data={"company_number": "07654321", "company_name": "Snapshot Ltd"},
        )
        prefill = derive_configuration(
            context, CheckSelection(check_type=CheckType.BUSINESS_VERIFICATION)
        ).business_prefill
        assert prefill.from_registry_snapshot
        assert prefill.jurisdiction == "GB"
        assert prefill.company_name == "Snapshot Ltd"

    def test_reference_defaults(self, uk_individual):
        config = derive_configuration(uk_individual)
        assert config.check_reference_default == "50/123"
        assert config.electronic_reference_default == "21 Acacia Avenue"

    def test_electronic_reference_outside_property(self):
        context = _individual(matter_work_type="Wills", matter_description="Mr Smith")
        assert derive_configuration(context).electronic_reference_default == "Wills Mr Smith"


# =============================================================================
# CONSERVATIVE FALLBACK
# =============================================================================

class TestConservative:

    def test_missing_context(self):
        config = derive_configuration(None)
        assert config.conservative
        assert config.auto_selected_check_type is None
        assert all(state.visible and not state.checked for state in config.options.values())

    def test_individual_with_registry_data(self):
        context = _individual(registered_business_data={"company_number": "01234567"})
        config = derive_configuration(context)
        assert config.conservative
        assert config.auto_selected_check_type is None
        assert config.available_check_types == [CheckType.IDENTITY_AND_SCREENING, CheckType.ELECTRONIC_VERIFICATION]

    def test_fallback_keeps_explicit_choices(self):
        context = _individual(registered_business_data={"company_number": "01234567"})
        selection = CheckSelection(
            check_type=CheckType.ELECTRONIC_VERIFICATION,
            matter_category=MatterCategory.CONVEYANCING,
            sub_role=SubRole.PURCHASER,
        ).with_override(SubOption.PROOF_OF_ADDRESS, True)
        config = derive_configuration(context, selection)
        assert config.conservative
        assert config.effective_check_type == CheckType.ELECTRONIC_VERIFICATION
        assert config.matter_category == MatterCategory.CONVEYANCING
        assert config.sub_role == SubRole.PURCHASER
        assert config.is_on(SubOption.PROOF_OF_ADDRESS)
        assert config.toggle_states[SubOption.PROOF_OF_ADDRESS] == ToggleState.USER_OVERRIDDEN
        assert not config.is_on(SubOption.PROOF_OF_OWNERSHIP)
        assert config.toggle_states[SubOption.PROOF_OF_OWNERSHIP] == ToggleState.UNSET

    def test_fallback_offers_photo_ids_without_picking(self, passport_image):
        context = _individual(registered_business_data={"company_number": "01234567"},
                              uploaded_identity_images=[passport_image])
        config = derive_configuration(context, CheckSelection(check_type=CheckType.IDENTITY_AND_SCREENING))
        assert config.idv_plan.front_candidates == ["img-passport"]
        assert config.idv_plan.auto_front_image_id is None
        assert not config.idv_plan.auto_include

    def test_internal_failure_degrades(self, uk_individual):
        with patch("configuration._derive", side_effect=RuntimeError("boom")):
            config = derive_configuration(uk_individual)
        assert config.conservative

    def test_derivation_is_repeatable(self, uk_individual, identity_selection):
        first = derive_configuration(uk_individual, identity_selection, log=False)
        second = derive_configuration(uk_individual, identity_selection, log=False)
        assert first == second
