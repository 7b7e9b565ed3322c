"""Key normalization for payloads that arrive in camelCase or snake_case.

The frontend sends camelCase keys while older clients send snake_case. Both
spellings are folded into the canonical snake_case key before validation so
each field has a single rule set.
"""

from typing import Any, Mapping

REFERRAL_ORIGIN = "indicacao"

PERSON_ALIASES: dict[str, str] = {
    "responsibleName": "responsible_name",
    "referredBy": "referred_by",
}

CLIENT_ALIASES: dict[str, str] = {
    **PERSON_ALIASES,
    "monthlyFee": "monthly_fee",
}


def normalize_keys(data: Any, aliases: Mapping[str, str]) -> Any:
    """Copy every camelCase key onto its snake_case name and drop the camelCase key.

    The camelCase value wins when both spellings are supplied.
    """
    if not isinstance(data, Mapping):
        return data

    normalized = dict(data)
    for camel, snake in aliases.items():
        if camel in normalized:
            normalized[snake] = normalized.pop(camel)
    return normalized


def apply_referral_rule(data: Any) -> Any:
    # referred_by only makes sense for referrals
    if isinstance(data, dict) and "origin" in data and data["origin"] != REFERRAL_ORIGIN:
        data["referred_by"] = None
    return data
