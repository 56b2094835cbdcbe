from typing import TypedDict


class RuleRegistryEntry(TypedDict, total=False):
    display_name: str
    short_description: str
    kind: str
    message_template: str
    manual_instructions: str
    fixable: bool
    opt_in: bool
    rule_id: str
