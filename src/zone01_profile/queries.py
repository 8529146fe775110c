"""
Named GraphQL documents for Zone01 Profile Dashboard.

PURPOSE: Fixed query shapes used by the statistics accessors.

Every document is built once at import time from Config.EVENT_PATH, so the
accessors only ever send these constants. None of the queries take
variables.

QUERIES:
- USER_LEVEL_QUERY: Current level and total XP
- USER_DATA_QUERY: Login, attributes and total XP
- MONTHLY_XP_QUERY: XP transactions in chronological order
- AUDIT_RATIO_QUERY: Audit points given (up) and received (down)
- SKILLS_QUERY: Completed skills, most recent first
"""

from __future__ import annotations

from .config import Config

__all__ = [
    "USER_LEVEL_QUERY",
    "USER_DATA_QUERY",
    "MONTHLY_XP_QUERY",
    "AUDIT_RATIO_QUERY",
    "SKILLS_QUERY",
    "ALL_QUERIES",
]

# Exact event path for the level, prefix match ("%") for transactions.
_EVENT_PATH = Config.EVENT_PATH
_EVENT_PATH_PREFIX = f"{Config.EVENT_PATH}%"

USER_LEVEL_QUERY = f"""
query GetUserLevel {{
    user {{
        events(where: {{event: {{path: {{_ilike: "{_EVENT_PATH}"}}}}}}) {{
            level
        }}
        transactions_aggregate(
            where: {{
                type: {{_eq: "xp"}},
                event: {{path: {{_ilike: "{_EVENT_PATH}"}}}}
            }}
        ) {{
            aggregate {{ sum {{ amount }} }}
        }}
    }}
}}
""".strip()

USER_DATA_QUERY = f"""
query GetUserData {{
    user {{
        login
        attrs
        transactions_aggregate(
            where: {{
                type: {{_eq: "xp"}},
                event: {{path: {{_ilike: "{_EVENT_PATH}"}}}}
            }}
        ) {{
            aggregate {{ sum {{ amount }} }}
        }}
    }}
}}
""".strip()

MONTHLY_XP_QUERY = f"""
query GetMonthlyXP {{
    transaction(
        where: {{
            type: {{_eq: "xp"}},
            event: {{path: {{_ilike: "{_EVENT_PATH_PREFIX}"}}}}
        }},
        order_by: {{createdAt: asc}}
    ) {{
        amount
        createdAt
    }}
}}
""".strip()

AUDIT_RATIO_QUERY = f"""
query GetAuditRatio {{
    user {{
        XPup: transactions_aggregate(
            where: {{
                _and: [
                    {{type: {{_eq: "up"}}}},
                    {{path: {{_ilike: "{_EVENT_PATH_PREFIX}"}}}}
                ]
            }}
        ) {{
            aggregate {{ sum {{ amount }} }}
        }}
        XPdown: transactions_aggregate(
            where: {{
                _and: [
                    {{type: {{_eq: "down"}}}},
                    {{path: {{_ilike: "{_EVENT_PATH_PREFIX}"}}}}
                ]
            }}
        ) {{
            aggregate {{ sum {{ amount }} }}
        }}
    }}
}}
""".strip()

SKILLS_QUERY = f"""
query GetSkills {{
    user {{
        progresses(
            where: {{
                _and: [
                    {{isDone: {{_eq: true}}}},
                    {{object: {{type: {{_eq: "skill"}}}}}},
                    {{path: {{_ilike: "{_EVENT_PATH_PREFIX}"}}}}
                ]
            }},
            order_by: {{updatedAt: desc}}
        ) {{
            object {{ name }}
            grade
        }}
    }}
}}
""".strip()

ALL_QUERIES: dict[str, str] = {
    "user_level": USER_LEVEL_QUERY,
    "user_data": USER_DATA_QUERY,
    "monthly_xp": MONTHLY_XP_QUERY,
    "audit_ratio": AUDIT_RATIO_QUERY,
    "skills": SKILLS_QUERY,
}
