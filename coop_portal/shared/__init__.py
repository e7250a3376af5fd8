"""Shared utilities: telemetry and cross-cutting helpers.

Used by application, infrastructure and API layers. No business logic.
"""
