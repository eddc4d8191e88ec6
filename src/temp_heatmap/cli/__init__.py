"""Command line interface for the temperature heat map."""
