"""
Package entry point for python -m execution.

USAGE:
    python -m zone01_profile             # Launch web dashboard
    python -m zone01_profile dashboard   # Launch web dashboard
    python -m zone01_profile login       # Sign in and store credential
    python -m zone01_profile report      # Print profile report
"""

from zone01_profile.cli import main

if __name__ == "__main__":
    main()
