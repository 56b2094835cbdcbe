"""
Closure End Lint: rule identity, SourceKit kinds and terminal constants.
"""

# ANSI Cyan (\033[36m)
_CYAN: str = "\033[36m"
_RESET: str = "\033[0m"
_CLOSURE_LINT_ART: str = r"""
   ___ _                           _____           _
  / __\ | ___  ___ _   _ _ __ ___  \_   \_ __   __| |
 / /  | |/ _ \/ __| | | | '__/ _ \  / /\/ '_ \ / _` |
/ /___| | (_) \__ \ |_| | | |  __/\/ /_ | | | | (_| |
\____/|_|\___/|___/\__,_|_|  \___\____/ |_| |_|\__,_|
"""
CLOSURE_LINT_BANNER = _CYAN + _CLOSURE_LINT_ART + _RESET

RULE_IDENTIFIER: str = "closure_end_indentation"
RULE_NAME: str = "Closure End Indentation"
RULE_DESCRIPTION: str = (
    "Closure end should have the same indentation as the line that started it."
)
REGISTRY_PREFIX: str = "closure-lint."

# SourceKit expression kinds (key.kind values)
CALL_KIND: str = "source.lang.swift.expr.call"
ARGUMENT_KIND: str = "source.lang.swift.expr.argument"

# Patterns matched against raw text
NOT_WHITESPACE_PATTERN: str = r"[^\s]"
CHAIN_CONTINUATION_PATTERN: str = r"\n(\s*\}?\.)"
CLOSURE_BODY_PATTERN: str = r"\s*\{"
ARGUMENTS_ON_NEWLINE_PATTERN: str = r"\(\s*\n\s*"

# Suppression comments (swiftlint syntax)
COMMAND_PATTERN: str = r"//\s*swiftlint:(enable|disable)(?::(previous|this|next))?\s+(\S[^\n]*)"
ALL_RULES: str = "all"

DEFAULT_MAX_PASSES: int = 10
DEFAULT_SOURCEKITTEN_PATH: str = "sourcekitten"
DEFAULT_SOURCEKITTEN_TIMEOUT: int = 30
SWIFT_GLOB: str = "**/*.swift"
BACKUP_SUFFIX: str = ".bak"
