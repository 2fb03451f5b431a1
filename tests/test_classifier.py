"""Tests for the rule-table classifier."""

import re

import pytest

from i18n_audit.candidate import CandidateKind, Severity, SourceKind, SourceLocation
from i18n_audit.classifier import (
    CandidateClassifier,
    exclusion_for,
    is_localized_key,
    namespace_for,
    severity_for,
    static_text,
    suggest_key,
)

LOCATION = SourceLocation("client/src/App.tsx", 1, 0)


def classify(text, kind=CandidateKind.MARKUP_TEXT, context="markup:p", source_kind=SourceKind.UI):
    return CandidateClassifier().classify(text, kind, context, LOCATION, source_kind, "App")


@pytest.mark.parametrize(
    "text,rule",
    [
        ("btn-primary", "css_class"),
        ("https://x.com", "absolute_url"),
        ("/api/users/:id", "absolute_path"),
        ("42", "digits"),
        ("MAX_RETRIES", "constant"),
        ("a.b.c", "dotted_key"),
        ("fooBarBaz", "camel_case"),
        ("Style", "framework_attribute"),
    ],
)
def test_technical_text_is_never_a_candidate(text, rule):
    assert exclusion_for(text).name == rule
    assert classify(text) is None


@pytest.mark.parametrize("text", ["Submit", "Enter code", "Save changes?", "Don't have an account"])
def test_prose_is_a_candidate(text):
    candidate = classify(text)
    assert candidate is not None
    assert candidate.content == text


def test_short_or_letterless_text_is_dropped():
    assert classify("A") is None
    assert classify("   ") is None
    assert classify("--- 12 ---") is None


def test_sql_rule_applies_only_to_backend():
    sql = "SELECT id FROM users WHERE email = ?"
    assert exclusion_for(sql, SourceKind.BACKEND).name == "sql_statement"
    assert exclusion_for(sql, SourceKind.UI) is None


def test_dotted_key_marks_existing_localization():
    assert is_localized_key("dashboard.title")
    assert not is_localized_key("Dashboard title")


def test_severity_table():
    assert severity_for(CandidateKind.RESPONSE_PAYLOAD) is Severity.CRITICAL
    assert severity_for(CandidateKind.MARKUP_TEXT) is Severity.HIGH
    assert severity_for(CandidateKind.OBJECT_PROPERTY) is Severity.MEDIUM
    assert severity_for(CandidateKind.TEMPLATE_FRAGMENT) is Severity.LOW


def test_log_text_severity_depends_on_audience_words():
    assert severity_for(CandidateKind.LOG_TEXT, "User registered successfully") is Severity.MEDIUM
    assert severity_for(CandidateKind.LOG_TEXT, "Server started on port 3000") is Severity.LOW


def test_suggested_key_is_deterministic():
    first = suggest_key("Enter code", "attribute:placeholder")
    assert first == suggest_key("Enter code", "attribute:placeholder")
    assert first == "form.enter_code"
    assert suggest_key("Submit!", "markup:button") == "ui.submit"


def test_suggested_key_body_is_truncated():
    key = suggest_key("word " * 40, "response:message")
    namespace, body = key.split(".", 1)
    assert namespace == "api"
    assert len(body) <= 50
    assert not body.endswith("_")


def test_suggested_key_for_text_without_key_characters():
    key = suggest_key("¡¿", "markup:p")
    assert re.fullmatch(r"ui\.text_[0-9a-f]{8}", key)
    assert key == suggest_key("¡¿", "markup:p")


def test_namespaces():
    assert namespace_for("validation:validator_chain") == "validation"
    assert namespace_for("persistence:promise_catch") == "errors"
    assert namespace_for("unknown") == "common"


def test_template_fragments_are_judged_on_static_text():
    assert static_text("Hello ${...}, welcome back") == "Hello , welcome back"
    assert classify("${...}", CandidateKind.TEMPLATE_FRAGMENT, "template") is None
    assert classify("btn-${...}", CandidateKind.TEMPLATE_FRAGMENT, "template") is None
    candidate = classify("Hello ${...}, welcome back", CandidateKind.TEMPLATE_FRAGMENT, "template")
    assert candidate.severity is Severity.LOW
    assert candidate.content == "Hello ${...}, welcome back"
