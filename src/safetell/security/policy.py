"""
Security policy and validator for synthesized AppleScript.

This is the gate every script passes before it reaches osascript. It inspects
text only: it does not parse AppleScript.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from safetell._types import Accepted, Rejected, RejectionReason, ValidationOutcome
from safetell.errors import SecurityRejection

logger = logging.getLogger(__name__)

PRODUCTIVITY_APPS: frozenset[str] = frozenset({"Reminders", "Calendar", "Notes"})

# Reserved for capability probing only; scripts naming it still trip the
# forbidden-pattern layer unless validation is bypassed.
PROBE_APPS: frozenset[str] = frozenset({"System Events"})

ALLOWED_APPS: frozenset[str] = PRODUCTIVITY_APPS | PROBE_APPS

# Case-insensitive substrings, checked in order against the full script.
FORBIDDEN_PATTERNS: tuple[str, ...] = (
    # Shell escape
    "do shell script",
    # Privilege escalation
    "sudo",
    # Destructive filesystem verbs
    "rm -rf",
    "delete file",
    "delete folder",
    # UI event / keystroke injection
    "System Events",
    "keystroke",
    "key code",
    "administrator privileges",
    "with administrator",
    # Remote fetch
    "curl",
    "wget",
    # Interpreters
    "python",
    "ruby",
    "perl",
    "bash",
    "zsh",
    "sh -c",
)

MAX_SCRIPT_LENGTH = 50_000

TELL_PATTERN = re.compile(r"""tell\s+application\s+["']([^"']+)["']""", re.IGNORECASE)
TELL_START_PATTERN = re.compile(r"""^tell\s+application\s+["']""", re.IGNORECASE)


@dataclass(frozen=True)
class ScriptPolicy:
    """
    Immutable policy tables consumed by ScriptValidator.

    Attributes:
        allowed_apps: Application names a script may declare as its target.
        forbidden_patterns: Substrings that reject a script wherever they occur.
        max_length: Maximum script length in characters.
    """

    allowed_apps: frozenset[str] = ALLOWED_APPS
    forbidden_patterns: tuple[str, ...] = FORBIDDEN_PATTERNS
    max_length: int = MAX_SCRIPT_LENGTH
    _lowered_patterns: tuple[tuple[str, str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_apps", frozenset(self.allowed_apps))
        object.__setattr__(self, "forbidden_patterns", tuple(self.forbidden_patterns))
        object.__setattr__(
            self,
            "_lowered_patterns",
            tuple((pattern.lower(), pattern) for pattern in self.forbidden_patterns),
        )

    @classmethod
    def standard(cls) -> ScriptPolicy:
        """Create the standard policy (recommended)."""
        return cls()

    def with_allowed_apps(self, *apps: str) -> ScriptPolicy:
        """Return a copy of the policy that also allows ``apps``."""
        return ScriptPolicy(
            allowed_apps=self.allowed_apps | frozenset(apps),
            forbidden_patterns=self.forbidden_patterns,
            max_length=self.max_length,
        )

    def with_forbidden_patterns(self, *patterns: str) -> ScriptPolicy:
        """Return a copy of the policy with extra forbidden patterns appended."""
        return ScriptPolicy(
            allowed_apps=self.allowed_apps,
            forbidden_patterns=self.forbidden_patterns + tuple(patterns),
            max_length=self.max_length,
        )

    def find_forbidden_pattern(self, script: str) -> str | None:
        """Return the first forbidden pattern found in ``script``, or None."""
        lowered = script.lower()
        for needle, pattern in self._lowered_patterns:
            if needle in lowered:
                return pattern
        return None


class ScriptValidator:
    """
    Applies the policy checks to a script, in a fixed order.

    1. non-empty
    2. length ceiling
    3. declared app is allowed
    4. some ``tell application`` clause names the declared app
    5. no forbidden pattern anywhere in the text
    6. the script starts with ``tell application``

    The first failing check wins. The validator keeps no state between calls.
    """

    def __init__(self, policy: ScriptPolicy | None = None) -> None:
        self._policy = policy or ScriptPolicy.standard()

    @property
    def policy(self) -> ScriptPolicy:
        return self._policy

    def check(self, script: str, app: str) -> ValidationOutcome:
        """
        Validate a script without raising.

        Args:
            script: The AppleScript source.
            app: The application the caller declares as the target.

        Returns:
            Accepted, or Rejected naming the failed check.
        """
        policy = self._policy

        if not script or not script.strip():
            return Rejected(RejectionReason.EMPTY_SCRIPT, "Script cannot be empty")

        if len(script) > policy.max_length:
            return Rejected(
                RejectionReason.SCRIPT_TOO_LONG,
                f"Script exceeds maximum length of {policy.max_length} characters "
                f"(got {len(script)})",
            )

        if app not in policy.allowed_apps:
            return Rejected(
                RejectionReason.APP_NOT_ALLOWED,
                f'Application "{app}" is not in the allowed list',
                app,
            )

        if not _targets_app(script, app):
            return Rejected(
                RejectionReason.APP_MISMATCH,
                f'Script does not target the declared application "{app}"',
                app,
            )

        pattern = policy.find_forbidden_pattern(script)
        if pattern is not None:
            return Rejected(
                RejectionReason.FORBIDDEN_PATTERN,
                f'Script contains forbidden pattern: "{pattern}"',
                pattern,
            )

        if not TELL_START_PATTERN.match(script.strip()):
            return Rejected(
                RejectionReason.MISSING_TELL,
                'Script must start with "tell application" statement',
            )

        return Accepted()

    def validate(self, script: str, app: str) -> None:
        """
        Validate a script.

        Raises:
            SecurityRejection: If any check fails.
        """
        logger.debug(f"Validating script for {app} ({len(script or '')} chars)")
        outcome = self.check(script, app)
        if isinstance(outcome, Rejected):
            logger.warning(f"Rejected script for {app}: {outcome.reason.value}")
            raise SecurityRejection(
                outcome.reason.value,
                outcome.message,
                outcome.fragment,
                {"app": app},
            )
        logger.debug(f"Script validation passed for {app}")


def _targets_app(script: str, app: str) -> bool:
    """Return True if any tell-application clause names ``app``."""
    wanted = app.lower()
    return any(match.group(1).lower() == wanted for match in TELL_PATTERN.finditer(script))
