"""Orphan test detection and categorization tests."""

from __future__ import annotations

import pytest
from scenario_test_mapper.configuration import StrategyName
from scenario_test_mapper.coverage_classification import CoverageStatus, ScenarioMapping
from scenario_test_mapper.gap_analysis import (
    OrphanAction,
    OrphanType,
    analyze_orphans,
    categorize_orphan_test,
    find_orphan_tests,
    suggest_scenario_id,
)
from scenario_test_mapper.matching_strategies import CandidateTest, MatchDetail, Priority, Scenario


def _mapping_with(*tests: CandidateTest) -> ScenarioMapping:
    details = tuple(
        MatchDetail(
            scenario_id="S1",
            test=test,
            strategy=StrategyName.FUZZY,
            score=0.8,
            confidence=0.85,
            explanation="",
        )
        for test in tests
    )
    return ScenarioMapping(
        scenario=Scenario(scenario_id="S1", description="create user"),
        match_details=details,
        coverage_status=CoverageStatus.PARTIALLY_COVERED,
        match_score=0.8 if tests else 0.0,
        gap_explanation="",
        recommendations=(),
    )


def test_orphans_are_the_complement_of_matched_tests_in_input_order() -> None:
    first = CandidateTest(test_id="A", description="first")
    second = CandidateTest(test_id="B", description="second")
    third = CandidateTest(test_id="C", description="third")

    orphans = find_orphan_tests([first, second, third], [_mapping_with(second)])

    assert [test for test, _ in orphans] == [first, third]


def test_test_matched_by_any_scenario_is_not_an_orphan() -> None:
    shared = CandidateTest(test_id="A", description="shared")

    orphans = find_orphan_tests([shared], [_mapping_with(), _mapping_with(shared)])

    assert orphans == []


@pytest.mark.parametrize(
    ("test", "subtype"),
    [
        (CandidateTest(test_id="UserTest.builder", description="builds user"), "Entity/Model Test"),
        (
            CandidateTest(test_id="UserResponseTest.serializesFields", description="json"),
            "DTO Test",
        ),
        (CandidateTest(test_id="UserMapperTest.toEntity", description="maps"), "Mapper Test"),
        (
            CandidateTest(test_id="GlobalExceptionHandlerTest.handles", description="x"),
            "Error Handler Test",
        ),
        (
            CandidateTest(test_id="NotFoundExceptionTest.message", description="x"),
            "Exception Test",
        ),
        (
            CandidateTest(test_id="UserTest.validationFailsWhenBlank", description="x"),
            "Validation Test",
        ),
        (CandidateTest(test_id="UserTest.setup", description="fixture"), "Infrastructure Test"),
    ],
)
def test_technical_orphans_need_no_action(test: CandidateTest, subtype: str) -> None:
    category = categorize_orphan_test(test)

    assert category.subtype == subtype
    assert category.type == OrphanType.TECHNICAL
    assert category.priority == Priority.P3
    assert category.action == OrphanAction.NONE


def test_controller_orphan_requires_scenario_with_suggested_identifier() -> None:
    test = CandidateTest(
        test_id="CustomerControllerTest.getCustomer",
        description="returns the customer",
        suite="CustomerControllerTest",
    )

    category = categorize_orphan_test(test)

    assert category.subtype == "Controller/API Test"
    assert category.type == OrphanType.BUSINESS
    assert category.priority == Priority.P0
    assert category.action == OrphanAction.ADD_SCENARIO
    assert category.suggested_scenario_id == "CUST-XXX"


def test_status_code_orphan_requires_scenario() -> None:
    category = categorize_orphan_test(
        CandidateTest(test_id="T9", description="returns 401 when token missing")
    )

    assert category.subtype == "Status Code/Auth Test"
    assert category.priority == Priority.P1
    assert category.action == OrphanAction.ADD_SCENARIO


def test_service_orphan_is_flagged_for_review() -> None:
    category = categorize_orphan_test(
        CandidateTest(test_id="OrderServiceTest.findAll", description="finds everything")
    )

    assert category.subtype == "Service Layer Test"
    assert category.priority == Priority.P2
    assert category.action == OrphanAction.REVIEW


def test_business_logic_orphan_requires_scenario() -> None:
    category = categorize_orphan_test(CandidateTest(test_id="T2", description="deletes an order"))

    assert category.subtype == "Business Logic Test"
    assert category.priority == Priority.P1
    assert category.action == OrphanAction.ADD_SCENARIO


def test_uncategorized_orphan_defaults_to_business_review() -> None:
    category = categorize_orphan_test(CandidateTest(test_id="T10", description="computes checksum"))

    assert category.subtype == "Unknown Business Logic"
    assert category.type == OrphanType.BUSINESS
    assert category.priority == Priority.P2
    assert category.action == OrphanAction.REVIEW


def test_suggested_scenario_identifier_falls_back_for_unusual_names() -> None:
    assert suggest_scenario_id("OrderControllerTest") == "ORDE-XXX"
    assert suggest_scenario_id("api_test") == "SCEN-XXX"


def test_orphan_analysis_counts_and_groups_action_required_first() -> None:
    tests = [
        CandidateTest(test_id="UserTest.builder", description="builds"),
        CandidateTest(test_id="UserTest.getters", description="reads"),
        CandidateTest(test_id="T2", description="deletes an order"),
        CandidateTest(test_id="T10", description="computes checksum"),
    ]

    analysis = analyze_orphans(find_orphan_tests(tests, []))

    assert analysis.total_orphans == 4
    assert analysis.technical_count == 2
    assert analysis.business_count == 2
    assert analysis.action_required_count == 1
    assert [group.subtype for group in analysis.groups] == [
        "Business Logic Test",
        "Entity/Model Test",
        "Unknown Business Logic",
    ]
    assert analysis.groups[1].count == 2
    assert analysis.recommendations == (
        "QA action required: 1 business test(s) need scenarios",
        "2 technical test(s) appropriately orphaned (no action needed)",
        "1 business test(s) require manual review",
    )


def test_orphan_analysis_of_nothing_is_empty() -> None:
    analysis = analyze_orphans([])

    assert analysis.total_orphans == 0
    assert analysis.groups == ()
    assert analysis.recommendations == ()
