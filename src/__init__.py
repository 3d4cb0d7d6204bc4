"""OWNERS Count - reviewer and approver counting for project groups."""

__version__ = "0.1.0"
