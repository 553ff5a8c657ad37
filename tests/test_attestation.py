import json

import pytest

from bsfkit.attestation import (
    InvalidStatementError,
    Statement,
    Subject,
    get_predicate_type,
    get_relevant_statements,
    validate_in_toto_statement,
)

STATEMENT_V1 = "https://in-toto.io/Statement/v1"
PROVENANCE = "https://slsa.dev/provenance/v1"
SPDX = "https://spdx.github.io/spdx-spec/v2.3/"


def make(name, predicate_type=PROVENANCE):
    return Statement(
        type=STATEMENT_V1,
        predicate_type=predicate_type,
        subject=[Subject(name=name, digest={"sha256": ""})],
        predicate={},
    )


def test_relevant_statements_for_one_pred():
    ps_map = {"provenance": [make("0.2.0")]}
    assert get_relevant_statements(ps_map, "provenance", "") == [make("0.2.0")]


def test_relevant_statements_for_multiple_pred():
    ps_map = {
        "provenance": [make("0.1.0"), make("0.2.0")],
        "spdx": [make("0.2.0", SPDX)],
    }
    assert get_relevant_statements(ps_map, "provenance", "") == [
        make("0.1.0"),
        make("0.2.0"),
    ]


def test_relevant_statements_for_one_pred_with_subject():
    ps_map = {
        "provenance": [make("0.1.0"), make("0.2.0")],
        "spdx": [make("0.2.0", SPDX)],
    }
    assert get_relevant_statements(ps_map, "provenance", "0.1.0") == [make("0.1.0")]


def test_relevant_statements_unknown_type():
    assert get_relevant_statements({"provenance": [make("a")]}, "spdx", "") == []


def line(statement):
    return json.dumps(statement.to_dict())


def test_validate_groups_by_predicate():
    data = "\n".join([line(make("a")), line(make("b", SPDX)), line(make("c"))]) + "\n"
    grouped = validate_in_toto_statement(data.encode())
    assert sorted(grouped) == ["provenance", "spdx"]
    assert [s.subject[0].name for s in grouped["provenance"]] == ["a", "c"]
    assert grouped["spdx"] == [make("b", SPDX)]


def test_statement_dict_round_trip():
    statement = make("x")
    assert Statement.from_dict(statement.to_dict()) == statement


def test_predicate_type_lookup():
    assert get_predicate_type(STATEMENT_V1, PROVENANCE) == "provenance"
    assert get_predicate_type(STATEMENT_V1, "https://cyclonedx.org/bom") == "cdx"
    assert get_predicate_type("", PROVENANCE) == "provenance"


@pytest.mark.parametrize(
    "statement_type, predicate_type, message",
    [
        ("https://in-toto.io/Statement/v0.1", PROVENANCE, "invalid _type"),
        (STATEMENT_V1, "", "predicateType is empty"),
        (STATEMENT_V1, "https://example.com/unknown", "is invalid"),
    ],
)
def test_predicate_type_errors(statement_type, predicate_type, message):
    with pytest.raises(InvalidStatementError, match=message):
        get_predicate_type(statement_type, predicate_type)


def test_validate_rejects_bad_json():
    with pytest.raises(InvalidStatementError, match="invalid JSON"):
        validate_in_toto_statement("{not json}")


def test_validate_rejects_empty_line():
    data = line(make("a")) + "\n\n" + line(make("b"))
    with pytest.raises(InvalidStatementError, match="invalid JSON"):
        validate_in_toto_statement(data)


def test_validate_rejects_empty_subject():
    statement = make("a")
    statement.subject = []
    with pytest.raises(InvalidStatementError, match="subject is empty"):
        validate_in_toto_statement(line(statement))


def test_validate_rejects_unnamed_subject():
    with pytest.raises(InvalidStatementError, match="subject name is empty"):
        validate_in_toto_statement(line(make("")))