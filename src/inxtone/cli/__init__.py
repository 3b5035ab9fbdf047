"""Inxtone command-line interface."""
