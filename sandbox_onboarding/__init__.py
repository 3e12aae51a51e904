"""CNCF Sandbox project onboarding automation.

This package provides:
- Creation of the onboarding issue once a community vote completes
- Periodic monitoring of onboarding issue age with escalating labels
  and comments
- Health issue escalation to the TOC repository and automatic archival
- A seeder for test onboarding issues of various ages
"""

__version__ = "0.1.0"
