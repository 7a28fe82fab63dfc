"""Request and response schemas for the vidshare API."""
