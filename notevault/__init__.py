"""
notevault.

- backend/: Note store, cryptography, persistence, configuration
- cli/: Command-line interface (Typer + Rich)
"""
