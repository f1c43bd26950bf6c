"""Shared document access, URL and text helpers for source adapters."""
