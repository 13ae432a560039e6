import pytest

from figref.errors import (
    CaptionLabelError,
    DocumentEvalError,
    DuplicateLabelError,
    FigrefError,
    UnknownLabelError,
)


def test_error_hierarchy():
    assert issubclass(DuplicateLabelError, CaptionLabelError)
    assert issubclass(UnknownLabelError, CaptionLabelError)
    assert issubclass(CaptionLabelError, FigrefError)
    assert issubclass(CaptionLabelError, ValueError)
    assert issubclass(DocumentEvalError, FigrefError)
    assert not issubclass(DocumentEvalError, CaptionLabelError)


def test_duplicate_message_names_label_and_operation():
    err = DuplicateLabelError("fred", "registration")
    assert err.label == "fred"
    assert err.operation == "registration"
    assert "'fred'" in str(err)
    assert "registration" in str(err)
    assert "line" not in str(err)


def test_duplicate_message_with_lines():
    err = DuplicateLabelError("fred", "pre-scan", first_line=3, second_line=10)
    assert "line 3" in str(err)
    assert "line 10" in str(err)


def test_unknown_message_names_label_and_operation():
    err = UnknownLabelError("fred")
    assert err.label == "fred"
    assert err.operation == "reference"
    assert "'fred'" in str(err)
    assert "reference" in str(err)


def test_eval_error_keeps_cause():
    cause = RuntimeError("An Error")
    with pytest.raises(DocumentEvalError) as err_info:
        try:
            raise cause
        except RuntimeError as e:
            raise DocumentEvalError("doc.md", 12, "  do_thing()\n") from e
    assert err_info.value.__cause__ is cause
    assert "doc.md:12" in str(err_info.value)
    assert "do_thing()" in str(err_info.value)
