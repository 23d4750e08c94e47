"""Routing — pattern compiler, per-method route table, and matcher.

Routes are registered during setup and read-only once the app freezes.
"""
