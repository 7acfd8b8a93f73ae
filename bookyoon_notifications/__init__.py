"""Reservation notification service package.

Holds the notification state (creation, read flags, tombstones) owned by each
user, the criteria query engine used by the listing endpoints, and the
FastAPI surface exposing both.
"""
