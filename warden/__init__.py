"""Warden: access control resolution and token lifecycle management."""
