"""
CLI Module.

Command-line client built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All business logic lives in the backend note service
- Typed backend errors are mapped to messages and exit codes here

Usage:
    python cli.py --help
    python cli.py notes new
    python cli.py notes list
    python cli.py notes show <id>
"""
