import pytest

from clubhub.errors import PolicyRejection, RejectionReason
from clubhub.schemas.application import AnswerSubmission
from clubhub.services.answers import (
    MultiOptionAnswer,
    NumberAnswer,
    OptionAnswer,
    TextAnswer,
    is_blank,
    validate_answers,
)


def question(text, field_type="long_text", required=True, options=None):
    return {
        "question_text": text,
        "field_type": field_type,
        "required": required,
        "options": options or [],
    }


def answer(text, value):
    return AnswerSubmission(question_text=text, answer=value)


def rejection(questions, answers) -> PolicyRejection:
    with pytest.raises(PolicyRejection) as exc_info:
        validate_answers(questions, answers)
    return exc_info.value


def test_no_questions_skips_validation():
    assert validate_answers([], [answer("Anything?", "yes")]) == []


def test_required_answer_completeness():
    questions = [question("Why?")]

    err = rejection(questions, [])
    assert err.reason == RejectionReason.MISSING_REQUIRED_ANSWERS
    assert err.missing == ["Why?"]
    assert err.message == "Please answer all required questions"

    result = validate_answers(questions, [answer("Why?", "Because")])
    assert result == [TextAnswer(question_text="Why?", answer="Because")]


def test_missing_questions_listed_in_declaration_order():
    questions = [question("First"), question("Optional", required=False), question("Second")]
    err = rejection(questions, [answer("Second", "   ")])
    assert err.missing == ["First", "Second"]


@pytest.mark.parametrize("value", [None, "", "   ", [], ["", "  "]])
def test_blank_answers_count_as_missing(value):
    err = rejection([question("Why?")], [answer("Why?", value)])
    assert err.missing == ["Why?"]


def test_is_blank():
    assert is_blank(None)
    assert is_blank(" ")
    assert not is_blank(0)
    assert not is_blank(False)
    assert not is_blank(["", "x"])


def test_select_option_validation():
    questions = [question("Track", "select", options=["A", "B"])]

    err = rejection(questions, [answer("Track", "C")])
    assert err.reason == RejectionReason.INVALID_OPTION_VALUE
    assert err.message == "Invalid answer for question: Track"

    assert validate_answers(questions, [answer("Track", "A")]) == [
        OptionAnswer(question_text="Track", answer="A")
    ]


def test_multiselect_option_validation():
    questions = [question("Skills", "multiselect", options=["A", "B"])]

    err = rejection(questions, [answer("Skills", ["A", "C"])])
    assert err.reason == RejectionReason.INVALID_OPTION_VALUE

    assert validate_answers(questions, [answer("Skills", ["A", "B"])]) == [
        MultiOptionAnswer(question_text="Skills", answer=["A", "B"])
    ]


def test_multiselect_requires_a_list():
    questions = [question("Skills", "multiselect", options=["A", "B"])]
    err = rejection(questions, [answer("Skills", "A")])
    assert err.reason == RejectionReason.INVALID_OPTION_VALUE


def test_select_without_options_accepts_any_value():
    questions = [question("Favourite language", "select")]
    result = validate_answers(questions, [answer("Favourite language", "Rust")])
    assert result[0].answer == "Rust"


def test_unknown_answers_are_dropped():
    questions = [question("Why?")]
    result = validate_answers(questions, [answer("Why?", "Because"), answer("Who?", "Me")])
    assert [a.question_text for a in result] == ["Why?"]


def test_blank_optional_answers_are_dropped():
    questions = [question("Why?"), question("Portfolio", "url", required=False)]
    result = validate_answers(questions, [answer("Why?", "Because"), answer("Portfolio", "")])
    assert len(result) == 1


def test_first_answer_for_a_question_wins():
    questions = [question("Why?")]
    result = validate_answers(questions, [answer("Why?", "first"), answer("Why?", "second")])
    assert result == [TextAnswer(question_text="Why?", answer="first")]


@pytest.mark.parametrize("value, expected", [
    ("42", 42),
    (" 2.5 ", 2.5),
    (7, 7),
    (3.25, 3.25),
])
def test_number_answers_are_coerced(value, expected):
    result = validate_answers([question("Year", "number")], [answer("Year", value)])
    assert isinstance(result[0], NumberAnswer)
    assert result[0].answer == expected
    assert type(result[0].answer) is type(expected)


@pytest.mark.parametrize("value", ["abc", True, ["1"], "nan"])
def test_non_numeric_number_answers_rejected(value):
    err = rejection([question("Year", "number")], [answer("Year", value)])
    assert err.reason == RejectionReason.INVALID_OPTION_VALUE


def test_text_answers_reject_lists_and_stringify_scalars():
    questions = [question("Bio", "short_text")]
    assert rejection(questions, [answer("Bio", ["a"])]).reason == RejectionReason.INVALID_OPTION_VALUE
    assert validate_answers(questions, [answer("Bio", 12)])[0].answer == "12"


def test_accepts_plain_dicts_in_either_spelling():
    questions = [question("Why?"), question("Year", "number")]
    result = validate_answers(questions, [
        {"questionText": "Why?", "answer": "Because"},
        {"question_text": "Year", "answer": "3"},
    ])
    assert [a.to_storage() for a in result] == [
        {"question_text": "Why?", "answer": "Because"},
        {"question_text": "Year", "answer": 3},
    ]


def test_surrounding_whitespace_in_question_text_is_ignored():
    questions = [question("  Why CSI?  "), question("Track", "select", options=["Web", "ML"])]

    result = validate_answers(questions, [
        answer(" Why CSI? ", "Mentors"),
        {"questionText": "Track  ", "answer": "ML"},
    ])

    assert [a.question_text for a in result] == ["Why CSI?", "Track"]
    assert [a.answer for a in result] == ["Mentors", "ML"]


def test_question_text_match_is_case_sensitive():
    error = rejection([question("Why CSI?")], [answer("why csi?", "Mentors")])

    assert error.reason == RejectionReason.MISSING_REQUIRED_ANSWERS
    assert error.missing == ["Why CSI?"]
