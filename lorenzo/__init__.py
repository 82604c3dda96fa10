"""Lorenzo — career-guidance chat relay in front of Google Gemini."""

__version__ = "1.0.0"
