"""
Zone01 Profile Dashboard.

PURPOSE: Sign in to the Zone01 platform and display profile statistics.

PACKAGE STRUCTURE:
- config.py: Endpoint URLs, path filter and chart constants
- session.py: Single-credential session store (JSON file)
- auth.py: Sign-in against the authentication endpoint
- gateway.py: GraphQL query execution with credential handling
- queries.py: Named GraphQL query documents
- accessors.py: Fixed statistics queries (level, XP, audits, skills)
- statistics.py: Month bucketing and cumulative XP transform
- presenters.py: View models for the login and profile views
- web/: FastAPI app rendering HTML and SVG charts
- cli.py: Command line entry point

QUICK START:
    # Launch dashboard
    python -m zone01_profile dashboard

    # Sign in from the terminal and print a report
    python -m zone01_profile login
    python -m zone01_profile report
"""

from zone01_profile.__version__ import (
    __author__,
    __copyright__,
    __description__,
    __license__,
    __title__,
    __url__,
    __version__,
    __version_date__,
)

__all__ = [
    "__version__",
    "__version_date__",
    "__title__",
    "__description__",
    "__url__",
    "__author__",
    "__license__",
    "__copyright__",
]
