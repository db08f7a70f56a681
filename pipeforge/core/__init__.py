"""Pipeforge core — topology building and permission synthesis."""
