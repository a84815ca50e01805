import itertools

import pytest

from policy_checker.rules.engine import InvalidDocumentError, evaluate, evaluate_program, match_requirement
from policy_checker.rules.types import (
    MedicalLimitRequirement,
    Program,
    Requirement,
    Requirements,
    format_amount,
)

SAMPLE_TEXT = (
    "This policy includes Medical Evacuation coverage and Trip Cancellation benefits. "
    "Minimum coverage is USD 50,000 per person."
)


def make_program() -> Program:
    requirements = Requirements(
        required_phrases=(
            Requirement("Trip Cancellation", r"trip\s+cancellation", "Cancellation must be covered."),
            Requirement("Medical Evacuation", r"medical\s+evacuation", "Evacuation must be covered."),
        ),
        min_medical_limit=MedicalLimitRequirement(
            phrase="",
            pattern=r"USD\s*50,?000",
            explanation="At least USD 50,000.",
            currency="USD",
            amount=50000,
        ),
        prohibited_phrases=(
            Requirement(
                "Pre-existing conditions excluded",
                r"pre-?existing\s+conditions\s+excluded|excludes\s+pre-?existing\s+conditions",
                "Pre-existing conditions must not be excluded.",
            ),
        ),
    )
    return Program(
        id="sample",
        name="SampleCountry Visa Insurance",
        country="SampleCountry",
        official_url="https://example.org/visa",
        requirements=requirements,
    )


def medical(pattern: str = r"USD\s*50,?000") -> MedicalLimitRequirement:
    return MedicalLimitRequirement(phrase="", pattern=pattern, currency="USD", amount=50000)


def test_sample_program_passes():
    verdict = evaluate_program(SAMPLE_TEXT, make_program())

    assert verdict.program_name == "SampleCountry Visa Insurance"
    assert verdict.official_url == "https://example.org/visa"
    assert [r.found for r in verdict.required_phrase_results] == [True, True]
    assert verdict.medical_limit_result.found
    assert verdict.medical_limit_result.required_display == "USD 50,000"
    assert [r.found for r in verdict.prohibited_phrase_results] == [False]
    assert verdict.overall_pass


def test_prohibited_phrase_fails_policy_without_changing_other_results():
    passing = evaluate_program(SAMPLE_TEXT, make_program())
    failing = evaluate_program(SAMPLE_TEXT + " This plan excludes pre-existing conditions.", make_program())

    assert failing.prohibited_phrase_results[0].found
    assert not failing.overall_pass
    assert failing.required_phrase_results == passing.required_phrase_results
    assert failing.medical_limit_result == passing.medical_limit_result


def test_results_preserve_input_order():
    required = tuple(Requirement(f"R{i}", f"token{i}") for i in range(6))
    prohibited = tuple(Requirement(f"P{i}", f"banned{i}") for i in range(4))
    requirements = Requirements(
        required_phrases=required,
        min_medical_limit=medical(),
        prohibited_phrases=prohibited,
    )

    verdict = evaluate("token3 token0 banned2 USD 50000", requirements)

    assert [r.label for r in verdict.required_phrase_results] == [f"R{i}" for i in range(6)]
    assert [r.found for r in verdict.required_phrase_results] == [True, False, False, True, False, False]
    assert [r.label for r in verdict.prohibited_phrase_results] == [f"P{i}" for i in range(4)]
    assert [r.found for r in verdict.prohibited_phrase_results] == [False, False, True, False]


@pytest.mark.parametrize("flags", list(itertools.product([True, False], repeat=5)))
def test_overall_pass_is_conjunction_of_results(flags):
    req_a, req_b, med_found, banned_a, banned_b = flags
    requirements = Requirements(
        required_phrases=(Requirement("A", "alpha"), Requirement("B", "bravo")),
        min_medical_limit=medical(),
        prohibited_phrases=(Requirement("X", "xray"), Requirement("Y", "yankee")),
    )
    words = ["policy"]
    for present, word in zip(flags, ["alpha", "bravo", "USD 50,000", "xray", "yankee"]):
        if present:
            words.append(word)

    verdict = evaluate(" ".join(words), requirements)

    assert [r.found for r in verdict.required_phrase_results] == [req_a, req_b]
    assert verdict.medical_limit_result.found is med_found
    assert [r.found for r in verdict.prohibited_phrase_results] == [banned_a, banned_b]
    assert verdict.overall_pass is (req_a and req_b and med_found and not banned_a and not banned_b)


def test_empty_collections_are_vacuously_satisfied():
    requirements = Requirements(min_medical_limit=medical())
    verdict = evaluate("Cover up to USD 50,000.", requirements)

    assert verdict.required_phrase_results == ()
    assert verdict.prohibited_phrase_results == ()
    assert verdict.overall_pass


@pytest.mark.parametrize("text", ["TRIP CANCELLATION", "trip cancellation", "Trip Cancellation"])
def test_matching_is_case_insensitive(text):
    found, error = match_requirement(f"Includes {text}.", Requirement("Trip Cancellation", "Trip Cancellation"))
    assert found
    assert error is None


@pytest.mark.parametrize("repeats", [1, 5])
def test_matching_is_existential(repeats):
    text = " ".join(["Emergency Evacuation"] * repeats)
    found, _ = match_requirement(text, Requirement("Evacuation", "Emergency Evacuation"))
    assert found


def test_malformed_pattern_fails_closed_and_evaluation_continues():
    requirements = Requirements(
        required_phrases=(
            Requirement("Broken", "coverage(("),
            Requirement("Valid", "coverage"),
        ),
        min_medical_limit=medical(),
        prohibited_phrases=(Requirement("Broken prohibited", "[unclosed"),),
    )

    verdict = evaluate("Full coverage of USD 50,000.", requirements)

    broken, valid = verdict.required_phrase_results
    assert broken.found is False
    assert broken.error and "Broken" in broken.error
    assert valid.found is True and valid.error is None
    assert verdict.prohibited_phrase_results[0].found is False
    assert verdict.prohibited_phrase_results[0].error
    assert verdict.medical_limit_result.found
    assert len(verdict.errors) == 2
    assert not verdict.overall_pass


def test_substring_match_treats_pattern_literally():
    requirement = Requirement("Literal", "cover (full)", match="substring")
    assert match_requirement("We COVER (FULL) costs", requirement) == (True, None)
    assert match_requirement("We cover full costs", requirement) == (False, None)


def test_medical_limit_is_presence_not_numeric_comparison():
    requirements = Requirements(min_medical_limit=medical())
    verdict = evaluate("Medical cover of USD 1,000,000.", requirements)
    assert not verdict.medical_limit_result.found


@pytest.mark.parametrize("text", ["", "   \n\t"])
def test_empty_document_is_rejected(text):
    with pytest.raises(InvalidDocumentError):
        evaluate(text, Requirements(min_medical_limit=medical()))


def test_evaluation_is_deterministic_and_does_not_mutate_program():
    program = make_program()
    first = evaluate_program(SAMPLE_TEXT, program)
    second = evaluate_program(SAMPLE_TEXT, program)
    assert first == second
    assert program == make_program()


def test_oversized_repeat_count_fails_closed():
    requirements = Requirements(
        required_phrases=(
            Requirement("Huge repeat", "a{4294967296}"),
            Requirement("Valid", "coverage"),
        ),
        min_medical_limit=medical(),
    )

    verdict = evaluate("coverage USD 50,000", requirements)

    huge, valid = verdict.required_phrase_results
    assert huge.found is False
    assert huge.error and "Huge repeat" in huge.error
    assert valid.found is True
    assert verdict.medical_limit_result.found


def test_unknown_match_kind_fails_closed():
    found, error = match_requirement("anything", Requirement("Typo kind", ".*", match="substr"))
    assert found is False
    assert "unknown match kind 'substr'" in error


def test_malformed_medical_limit_pattern_fails_closed():
    requirements = Requirements(
        required_phrases=(Requirement("Evacuation", "evacuation"),),
        min_medical_limit=medical(pattern="USD(50"),
        prohibited_phrases=(Requirement("Excluded", "excluded"),),
    )

    verdict = evaluate("Evacuation covered, USD 50,000.", requirements)

    assert verdict.medical_limit_result.found is False
    assert verdict.medical_limit_result.error
    assert verdict.medical_limit_result.required_display == "USD 50,000"
    assert verdict.required_phrase_results[0].found is True
    assert verdict.prohibited_phrase_results[0].found is False
    assert not verdict.overall_pass


@pytest.mark.parametrize(
    "amount, expected",
    [(50000, "50,000"), (30000.0, "30,000"), (1234.5, "1,234.5"), (1234.25, "1,234.25")],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected
