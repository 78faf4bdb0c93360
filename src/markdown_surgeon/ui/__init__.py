"""Output rendering for the md CLI.

Key modules:
    - formatting: text and JSON formatters for every command
"""
