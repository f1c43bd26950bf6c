"""
CLI Layer - Typer commands for extracting records from saved pages.
"""
