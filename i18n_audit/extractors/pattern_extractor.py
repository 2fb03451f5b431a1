"""
Backend source extraction: a textual scan with categorized regular expressions.

No syntax tree is built. The scan is cheaper and less precise than the markup
extractor and accepts more false positives on server files.
"""

import re
from dataclasses import dataclass
from typing import Dict, Set, Tuple

from ..candidate import CandidateKind, FileMetadata, SourceKind
from ..extractor_base import BaseExtractor
from ..utils import offset_to_position, server_file_type

# Quoted text of at least three characters on one line; other quote characters may appear inside
_QUOTED = r"""(?P<quote>['"`])(?P<text>(?:(?!(?P=quote))[^\n]){3,})(?P=quote)"""

# String literals and comments, scanned in order so quote pairing stays right.
_LEXEME = re.compile(
    r"""'(?:[^'\\\n]|\\.)*'|"(?:[^"\\\n]|\\.)*"|`(?:[^`\\]|\\.)*`|//[^\n]*|/\*.*?\*/""",
    re.DOTALL,
)


@dataclass(frozen=True)
class PatternFamily:
    """A named group of regexes whose first capture group is the message text."""
    name: str
    kind: CandidateKind
    patterns: Tuple[Tuple[str, "re.Pattern[str]"], ...]


def _family(name: str, kind: CandidateKind, *patterns: Tuple[str, str, int]) -> PatternFamily:
    return PatternFamily(
        name,
        kind,
        tuple((label, re.compile(regex, flags)) for label, regex, flags in patterns),
    )


# Order matters: when two families capture the same text, the earlier one wins.
PATTERN_FAMILIES: Tuple[PatternFamily, ...] = (
    _family(
        "response", CandidateKind.RESPONSE_PAYLOAD,
        ("res_call", r"res\.(?:json|send|status)\([^)]*?" + _QUOTED, 0),
        ("message", r"message\s*:\s*" + _QUOTED, 0),
        ("error", r"error\s*:\s*" + _QUOTED, 0),
        ("success", r"success\s*:\s*" + _QUOTED, 0),
    ),
    _family(
        "validation", CandidateKind.VALIDATION_MESSAGE,
        ("validator_chain", r"\.(?:isLength|matches|isEmail|custom|withMessage)\([^)]*?" + _QUOTED, 0),
        ("validation_error", r"ValidationError\([^)]*?" + _QUOTED, 0),
        ("validator_call", r"validator\.[a-zA-Z]+\([^)]*?" + _QUOTED, 0),
        ("rule_message", r"(?:required|invalid|must|should)[^:\n]*:\s*" + _QUOTED, re.IGNORECASE),
    ),
    _family(
        "email", CandidateKind.EMAIL_TEXT,
        ("subject", r"subject\s*:\s*" + _QUOTED, re.IGNORECASE),
        ("title", r"title\s*:\s*" + _QUOTED, re.IGNORECASE),
        ("mail_options", r"mailOptions\.[a-zA-Z]+\s*=\s*" + _QUOTED, 0),
        ("send_mail", r"sendMail\([^)]*?" + _QUOTED, 0),
    ),
    _family(
        "logging", CandidateKind.LOG_TEXT,
        ("console", r"console\.(?:log|error|warn|info)\([^)]*?" + _QUOTED, 0),
        ("logger", r"logger\.(?:log|error|warn|info|debug)\([^)]*?" + _QUOTED, 0),
        ("thrown_error", r"throw new Error\(" + _QUOTED + r"\)", 0),
    ),
    _family(
        "persistence", CandidateKind.PERSISTENCE_ERROR,
        ("prisma_error", r"PrismaClientKnownRequestError[^)]*?" + _QUOTED, 0),
        ("database_error", r"DatabaseError[^)]*?" + _QUOTED, 0),
        ("promise_catch", r"\.catch\([^)]*?" + _QUOTED, 0),
    ),
    _family(
        "auth", CandidateKind.AUTH_TEXT,
        ("auth_message", r"(?:login|authentication|authorization)[^:\n]*:\s*" + _QUOTED, re.IGNORECASE),
        ("credential_message", r"(?:token|password|credential)[^:\n]*:\s*" + _QUOTED, re.IGNORECASE),
        ("jwt_call", r"jwt\.[a-zA-Z]+\([^)]*?" + _QUOTED, 0),
    ),
)

FAMILY_BY_KIND: Dict[CandidateKind, str] = {family.kind: family.name for family in PATTERN_FAMILIES}


class PatternExtractor(BaseExtractor):
    """Regex-based extraction for server files."""

    source_kind = SourceKind.BACKEND

    def __init__(self, classifier=None, families: Tuple[PatternFamily, ...] = PATTERN_FAMILIES):
        super().__init__(classifier)
        self.families = families
        self.file_type = "server"

    def _run_extraction(self):
        """Run every family over the file content."""
        self.file_type = server_file_type(self.display_path)
        literals = self._literal_spans()
        claimed: Set[Tuple[int, int]] = set()

        for family in self.families:
            for label, pattern in family.patterns:
                for m in pattern.finditer(self.content):
                    span = m.span("text")
                    # Quotes paired across two literals, or text inside a comment
                    if span not in literals or span in claimed:
                        continue
                    claimed.add(span)
                    line, col = offset_to_position(self.content, span[0])
                    self._add_candidate(m.group("text"), family.kind, f"{family.name}:{label}", line, col)

    def _literal_spans(self) -> Set[Tuple[int, int]]:
        """Body spans of every string literal outside comments."""
        spans = set()
        for m in _LEXEME.finditer(self.content):
            if m.group(0)[0] in "'\"`":
                spans.add((m.start() + 1, m.end() - 1))
        return spans

    def _metadata(self) -> FileMetadata:
        return FileMetadata(
            has_existing_localization=False,
            total_considered=self.total_considered,
            server_file_type=self.file_type,
        )
