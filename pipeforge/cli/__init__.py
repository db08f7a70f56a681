"""Pipeforge CLI — Typer-based command-line interface.

Provides the ``pipeforge`` command with subcommands for synthesizing a
pipeline manifest, showing the graph, and printing policy documents.

All output uses Rich for formatted terminal display.
"""
