"""Adapters between the reconciliation core and external services."""
