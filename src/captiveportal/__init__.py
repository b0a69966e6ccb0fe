"""Captive portal access-control service.

Guest registration and login with a Nigerian mobile number, a session
ledger, and an admin console with reports and statistics.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
