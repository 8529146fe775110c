"""
Web dashboard module for Zone01 Profile Dashboard.

PURPOSE: FastAPI-based UI rendering the login and profile views.

FEATURES:
- Server-side HTML with inline SVG charts
- Login/logout forms backed by the local session store
- PNG export of the cumulative XP chart (matplotlib)
- JSON endpoint for programmatic access

USAGE:
    # Via CLI
    zone01-profile dashboard

    # Programmatically
    from zone01_profile.web import create_app
    app = create_app()
    # Run with uvicorn
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
