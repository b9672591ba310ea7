"""Publish repository documents to MarkLogic Server."""

__version__ = "0.1.0"
