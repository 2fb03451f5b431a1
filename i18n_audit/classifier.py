"""
Candidate classifier: decides which raw text fragments are hardcoded user-facing
strings, how severe they are and what translation key they should get.

Every decision is driven by the rule tables below so they can be reviewed and
tested on their own.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .candidate import Candidate, CandidateKind, Severity, SourceKind, SourceLocation
from .utils import looks_like_file_path

MIN_TEXT_LENGTH = 2
MAX_KEY_LENGTH = 50
TEMPLATE_HOLE = "${...}"

# Attribute and prop names that are never user-facing text on their own.
FRAMEWORK_ATTRIBUTE_NAMES = frozenset(name.lower() for name in (
    "className", "class", "style", "src", "href", "id", "key", "ref",
    "htmlFor", "tabIndex", "onClick", "onChange", "onSubmit", "onBlur",
    "onFocus", "data-testid", "aria-hidden", "defaultValue", "autoComplete",
    "dangerouslySetInnerHTML",
))

# Words that make a backend log line likely to surface to a user.
USER_FACING_LOG_WORDS = (
    "user", "login", "register", "password", "email", "verification",
    "complaint", "ward", "maintenance", "admin", "citizen",
)


@dataclass(frozen=True)
class ExclusionRule:
    """A named shape of technical text that is never reported."""
    name: str
    matches: Callable[[str], bool]
    marks_localized: bool = False
    backend_only: bool = False


def _regex(pattern: str, flags: int = 0) -> Callable[[str], bool]:
    compiled = re.compile(pattern, flags)
    return lambda text: compiled.match(text) is not None


EXCLUSION_RULES: Tuple[ExclusionRule, ...] = (
    ExclusionRule("css_class", _regex(r"^[a-z][a-z0-9-]*$")),
    ExclusionRule("absolute_url", _regex(r"^(?:[a-z][a-z0-9+.-]*:)?//", re.IGNORECASE)),
    ExclusionRule("absolute_path", looks_like_file_path),
    ExclusionRule("digits", _regex(r"^\d+$")),
    ExclusionRule("constant", _regex(r"^[A-Z][A-Z0-9_]*$")),
    ExclusionRule("dotted_key", _regex(r"^[a-z_][\w-]*(?:\.[\w-]+)+$"), marks_localized=True),
    ExclusionRule("camel_case", _regex(r"^[a-z][a-z0-9]*(?:[A-Z][a-z0-9]*)*$")),
    ExclusionRule("framework_attribute", lambda text: text.lower() in FRAMEWORK_ATTRIBUTE_NAMES),
    ExclusionRule(
        "sql_statement",
        _regex(r"^(?:SELECT|INSERT|UPDATE|DELETE)\b.*\b(?:FROM|INTO|SET|WHERE)\b", re.DOTALL),
        backend_only=True,
    ),
)

SEVERITY_BY_KIND: Dict[CandidateKind, Severity] = {
    CandidateKind.RESPONSE_PAYLOAD: Severity.CRITICAL,
    CandidateKind.VALIDATION_MESSAGE: Severity.CRITICAL,
    CandidateKind.AUTH_TEXT: Severity.CRITICAL,
    CandidateKind.MARKUP_TEXT: Severity.HIGH,
    CandidateKind.ATTRIBUTE_VALUE: Severity.HIGH,
    CandidateKind.EMAIL_TEXT: Severity.HIGH,
    CandidateKind.PERSISTENCE_ERROR: Severity.HIGH,
    CandidateKind.OBJECT_PROPERTY: Severity.MEDIUM,
    CandidateKind.LOG_TEXT: Severity.LOW,
    CandidateKind.TEMPLATE_FRAGMENT: Severity.LOW,
}

# Context family (the part before ":") -> translation namespace.
KEY_NAMESPACES: Dict[str, str] = {
    "markup": "ui",
    "attribute": "form",
    "property": "ui",
    "template": "ui",
    "response": "api",
    "validation": "validation",
    "email": "email",
    "logging": "system",
    "persistence": "errors",
    "auth": "auth",
}
DEFAULT_NAMESPACE = "common"

_NON_KEY_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def static_text(content: str) -> str:
    """Text of a template fragment with its expression holes removed."""
    return _WHITESPACE.sub(" ", content.replace(TEMPLATE_HOLE, " ")).strip()


def exclusion_for(text: str, source_kind: SourceKind = SourceKind.UI) -> Optional[ExclusionRule]:
    """First exclusion rule matching the trimmed text, if any."""
    trimmed = text.strip()
    for rule in EXCLUSION_RULES:
        if rule.backend_only and source_kind is not SourceKind.BACKEND:
            continue
        if rule.matches(trimmed):
            return rule
    return None


def is_localized_key(text: str) -> bool:
    """True if the text is shaped like an existing translation key."""
    rule = exclusion_for(text)
    return rule is not None and rule.marks_localized


def passes_inclusion(text: str, source_kind: SourceKind = SourceKind.UI) -> bool:
    """Inclusion test shared by every extractor."""
    trimmed = (text or "").strip()
    if len(trimmed) < MIN_TEXT_LENGTH:
        return False
    if not any(ch.isalpha() for ch in trimmed):
        return False
    return exclusion_for(trimmed, source_kind) is None


def is_likely_user_facing(text: str) -> bool:
    """Extra gate for template fragments, which are mostly technical."""
    if len(text) < 3:
        return False
    if text.lower().startswith("http"):
        return False
    if re.match(r"^[a-z-]+$", text) or re.match(r"^\d+$", text):
        return False
    return any(ch.isupper() for ch in text) or " " in text or len(text) > 10


def severity_for(kind: CandidateKind, text: str = "") -> Severity:
    """Severity of a candidate of the given kind."""
    if kind is CandidateKind.LOG_TEXT:
        lowered = text.lower()
        if any(word in lowered for word in USER_FACING_LOG_WORDS):
            return Severity.MEDIUM
    return SEVERITY_BY_KIND[kind]


def namespace_for(context: str) -> str:
    family = (context or "").split(":", 1)[0]
    return KEY_NAMESPACES.get(family, DEFAULT_NAMESPACE)


def suggest_key(content: str, context: str) -> str:
    """Deterministic translation key for a piece of text in a given context."""
    body = _NON_KEY_CHARS.sub("", content.lower()).strip()
    body = _WHITESPACE.sub("_", body)[:MAX_KEY_LENGTH].strip("_")
    if not body:
        digest = hashlib.sha1(content.encode("utf-8")).hexdigest()[:8]
        body = f"text_{digest}"
    return f"{namespace_for(context)}.{body}"


class CandidateClassifier:
    """Turns raw extractor hits into Candidates, or drops them."""

    def classify(
        self,
        raw_text: str,
        kind: CandidateKind,
        context: str,
        location: SourceLocation,
        source_kind: SourceKind,
        owner_name: str,
    ) -> Optional[Candidate]:
        content = (raw_text or "").strip()
        if kind is CandidateKind.TEMPLATE_FRAGMENT:
            tested = static_text(content)
            if not is_likely_user_facing(tested):
                return None
        else:
            tested = content
        if not passes_inclusion(tested, source_kind):
            return None
        return Candidate(
            content=content,
            kind=kind,
            location=location,
            context=context,
            severity=severity_for(kind, content),
            suggested_key=suggest_key(content, context),
            source_kind=source_kind,
            owner_name=owner_name,
        )
