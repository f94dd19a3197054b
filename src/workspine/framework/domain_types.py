"""Canonical entity kinds a scope config can enable.

A subtask declares which kinds it produces; a scope config lists which kinds
are enabled.  Planning intersects the two.
"""

DOMAIN_TYPE_TICKET = "TICKET"
DOMAIN_TYPE_CODE = "CODE"
DOMAIN_TYPE_CODE_REVIEW = "CODEREVIEW"
DOMAIN_TYPE_CICD = "CICD"
DOMAIN_TYPE_CROSS = "CROSS"
DOMAIN_TYPE_CODE_QUALITY = "CODEQUALITY"

DOMAIN_TYPES: tuple[str, ...] = (
    DOMAIN_TYPE_TICKET,
    DOMAIN_TYPE_CODE,
    DOMAIN_TYPE_CODE_REVIEW,
    DOMAIN_TYPE_CICD,
    DOMAIN_TYPE_CROSS,
    DOMAIN_TYPE_CODE_QUALITY,
)
