"""LawConnect backend: Google OAuth token lifecycle and client email reminders."""

__version__ = "0.1.0"
