"""Boundary adapters between spreadsheet files and SourceTable rows."""
