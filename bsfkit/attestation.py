"""Validation and filtering of in-toto attestation statements in JSONL."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

STATEMENT_TYPE = "https://in-toto.io/Statement/v1"

PREDICATE_URI_TYPE: dict[str, str] = {
    "https://slsa.dev/provenance/": "provenance",
    "https://in-toto.io/attestation/vulns": "vuln",
    "https://slsa.dev/verification_summary/v1": "vsa",
    "https://in-toto.io/attestation/test-result/": "test-result",
    "https://spdx.dev/Document": "spdx",
    "https://spdx.github.io/spdx-spec": "spdx",
    "https://in-toto.io/attestation/scai/attribute-report": "scai",
    "https://in-toto.io/attestation/runtime-trace/": "runtime-trace",
    "https://in-toto.io/attestation/release": "release",
    "https://in-toto.io/attestation/link": "link",
    "https://cyclonedx.org/bom": "cdx",
    "https://cyclonedx.org/specification/overview/": "cdx",
}


class InvalidStatementError(ValueError):
    """Raised when a line is not a valid in-toto statement."""


@dataclass
class Subject:
    """An artifact the statement is about."""

    name: str
    digest: dict[str, str] = field(default_factory=dict)


@dataclass
class Statement:
    """An in-toto statement: header fields plus an arbitrary predicate."""

    type: str = ""
    predicate_type: str = ""
    subject: list[Subject] = field(default_factory=list)
    predicate: Any = None

    @classmethod
    def from_dict(cls, data: Any) -> "Statement":
        """Build a statement from its decoded JSON form."""
        if not isinstance(data, dict):
            raise InvalidStatementError("statement must be a JSON object")
        statement_type = data.get("_type") or ""
        predicate_type = data.get("predicateType") or ""
        if not isinstance(statement_type, str) or not isinstance(predicate_type, str):
            raise InvalidStatementError("_type and predicateType must be strings")
        raw_subjects = data.get("subject") or []
        if not isinstance(raw_subjects, list):
            raise InvalidStatementError("subject must be a list")
        subjects = []
        for raw in raw_subjects:
            if not isinstance(raw, dict):
                raise InvalidStatementError("subject entries must be objects")
            name = raw.get("name") or ""
            digest = raw.get("digest") or {}
            if not isinstance(name, str) or not isinstance(digest, dict):
                raise InvalidStatementError("malformed subject")
            if not all(isinstance(v, str) for v in digest.values()):
                raise InvalidStatementError("digest values must be strings")
            subjects.append(Subject(name=name, digest=dict(digest)))
        return cls(
            type=statement_type,
            predicate_type=predicate_type,
            subject=subjects,
            predicate=data.get("predicate"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the statement."""
        return {
            "_type": self.type,
            "predicateType": self.predicate_type,
            "subject": [{"name": s.name, "digest": dict(s.digest)} for s in self.subject],
            "predicate": self.predicate,
        }


def get_predicate_type(statement_type: str, predicate_type: str) -> str:
    """Map a statement's predicate URI to its short predicate name."""
    if statement_type not in STATEMENT_TYPE:
        raise InvalidStatementError(f"invalid _type: {statement_type}")
    if not predicate_type:
        raise InvalidStatementError("predicateType is empty")
    for uri, short_name in PREDICATE_URI_TYPE.items():
        if uri in predicate_type:
            return short_name
    raise InvalidStatementError(f"predicateType {predicate_type} is invalid")


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def validate_in_toto_statement(data: str | bytes) -> dict[str, list[Statement]]:
    """Parse JSONL statements and group them by short predicate name."""
    text = data.decode("utf-8") if isinstance(data, bytes) else data
    grouped: dict[str, list[Statement]] = {}
    for line in _lines(text):
        try:
            statement = Statement.from_dict(json.loads(line))
        except (json.JSONDecodeError, InvalidStatementError) as exc:
            raise InvalidStatementError(f"invalid JSON: {exc}") from exc

        pred_type = get_predicate_type(statement.type, statement.predicate_type)
        if not statement.subject:
            raise InvalidStatementError("subject is empty")
        if any(not subject.name for subject in statement.subject):
            raise InvalidStatementError("subject name is empty")
        grouped.setdefault(pred_type, []).append(statement)
    return grouped


def get_relevant_statements(
    ps_map: Mapping[str, list[Statement]], pred_type: str, subject: str
) -> list[Statement]:
    """Return statements of a predicate type, optionally for one subject name."""
    statements = ps_map.get(pred_type, [])
    if not subject:
        return list(statements)
    return [
        statement
        for statement in statements
        for subj in statement.subject
        if subj.name == subject
    ]