"""
Answer Validation
Checks submitted answers against a recruitment's question list and resolves
each kept answer into a typed value by the matched question's field type
"""

import math
from typing import Any, Iterable, List, Literal, Union

from pydantic import BaseModel

from clubhub.errors import PolicyRejection, RejectionReason
from clubhub.schemas.common import FieldType
from clubhub.schemas.recruitment import QuestionSchema

TEXT_FIELD_TYPES = {FieldType.SHORT_TEXT, FieldType.LONG_TEXT, FieldType.URL}


class _Answer(BaseModel):
    question_text: str

    def to_storage(self) -> dict:
        return {"question_text": self.question_text, "answer": self.answer}


class TextAnswer(_Answer):
    kind: Literal["text"] = "text"
    answer: str


class NumberAnswer(_Answer):
    kind: Literal["number"] = "number"
    answer: Union[int, float]


class OptionAnswer(_Answer):
    kind: Literal["option"] = "option"
    answer: str


class MultiOptionAnswer(_Answer):
    kind: Literal["multi_option"] = "multi_option"
    answer: List[str]


NormalizedAnswer = Union[TextAnswer, NumberAnswer, OptionAnswer, MultiOptionAnswer]


def is_blank(value: Any) -> bool:
    """Stringified and trimmed, is there anything left? Lists need one non-blank element"""
    if value is None:
        return True
    if isinstance(value, list):
        return all(is_blank(item) for item in value)
    return str(value).strip() == ""


def _invalid(question: QuestionSchema) -> PolicyRejection:
    return PolicyRejection(
        RejectionReason.INVALID_OPTION_VALUE,
        f"Invalid answer for question: {question.question_text}"
    )


def _to_number(question: QuestionSchema, value: Any) -> Union[int, float]:
    if isinstance(value, bool) or isinstance(value, list):
        raise _invalid(question)
    if isinstance(value, (int, float)):
        number = value
    else:
        text = str(value).strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise _invalid(question)
    if isinstance(number, float) and not math.isfinite(number):
        raise _invalid(question)
    return number


def resolve_answer(question: QuestionSchema, value: Any) -> NormalizedAnswer:
    """Type a non-blank answer by its question's field type"""
    text = question.question_text
    field_type = question.field_type

    if field_type in TEXT_FIELD_TYPES:
        if isinstance(value, list):
            raise _invalid(question)
        return TextAnswer(question_text=text, answer=str(value).strip())

    if field_type == FieldType.NUMBER:
        return NumberAnswer(question_text=text, answer=_to_number(question, value))

    if field_type == FieldType.SELECT:
        if isinstance(value, list):
            raise _invalid(question)
        choice = str(value).strip()
        if question.options and choice not in question.options:
            raise _invalid(question)
        return OptionAnswer(question_text=text, answer=choice)

    # multiselect
    if not isinstance(value, list):
        raise _invalid(question)
    choices = [str(item).strip() for item in value if not is_blank(item)]
    if question.options and any(choice not in question.options for choice in choices):
        raise _invalid(question)
    return MultiOptionAnswer(question_text=text, answer=choices)


def validate_answers(questions: Iterable, answers: Iterable) -> List[NormalizedAnswer]:
    """
    Validate submitted answers against the declared questions

    Args:
        questions: declared questions (QuestionSchema or stored dicts)
        answers: submitted entries with question_text and answer

    Returns:
        Typed answers in submission order. Answers to unknown questions and
        blank answers to optional questions are dropped.

    Raises:
        PolicyRejection: MISSING_REQUIRED_ANSWERS listing the unanswered
            required questions in declaration order, or INVALID_OPTION_VALUE
            for the first answer that does not fit its question
    """
    questions = [QuestionSchema.model_validate(q) for q in questions or []]
    if not questions:
        return []

    by_text = {q.question_text: q for q in questions}

    # Only the first entry for a question counts
    submitted = {}
    for entry in answers or []:
        if isinstance(entry, dict):
            text = entry.get("question_text", entry.get("questionText"))
            if isinstance(text, str):
                text = text.strip()
            value = entry.get("answer")
        else:
            text, value = entry.question_text, entry.answer
        if text not in submitted:
            submitted[text] = value

    missing = [
        q.question_text for q in questions
        if q.required and is_blank(submitted.get(q.question_text))
    ]
    if missing:
        raise PolicyRejection(
            RejectionReason.MISSING_REQUIRED_ANSWERS,
            "Please answer all required questions",
            missing=missing
        )

    normalized = []
    for text, value in submitted.items():
        question = by_text.get(text)
        if question is None or is_blank(value):
            continue
        normalized.append(resolve_answer(question, value))

    return normalized
