"""Clients built on the document API.

Key modules:
    - tasklog: task log entries and checkpoints stored in a markdown file
"""
