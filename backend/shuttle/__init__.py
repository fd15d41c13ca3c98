"""
Shuttle — watch folders, wait for files to settle, run a command, move them on.

Subpackages:
    config       — YAML configuration loading and validation
    watchfolders — Rule table, stability detection, watch sources, dispatch
    execution    — Optional external command per detected file
    relocation   — Rename-or-copy file relocation
"""

__version__ = "0.1.0"
