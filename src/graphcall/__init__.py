"""graphcall - resilient request execution for Microsoft Graph."""

__version__ = "0.1.0"
