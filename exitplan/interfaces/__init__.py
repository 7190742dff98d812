"""Interfaces layer - HTTP preview API."""
