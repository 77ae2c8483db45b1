"""Errors, enums, ids and settings shared by every proptree module."""
