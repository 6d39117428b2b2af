"""
Utility classes for CLI argument handling.
"""

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from golfmatch.config.types import AppConfig

@dataclass
class CLIContext:
    """Context object for CLI command execution."""
    args: argparse.Namespace
    logger: logging.Logger
    config: AppConfig
    parser: argparse.ArgumentParser

@dataclass
class CommandMetadata:
    """Metadata for command registration."""
    name: str
    help_text: str
    handler: Callable[[CLIContext], int]
    options: list[dict[str, Any]]
    parent_command: str | None = None

class CLIOptionFactory:
    """Factory for creating common CLI options with consistent validation."""

    @staticmethod
    def create_format_option() -> dict[str, Any]:
        return {
            'name': '--format',
            'choices': ['text', 'json'],
            'default': 'text',
            'help': 'Output format: human-readable text or machine-readable JSON (default: text)'
        }

    @staticmethod
    def create_bounds_options() -> list[dict[str, Any]]:
        return [
            {
                'name': '--south',
                'type': float,
                'required': True,
                'help': 'Southern latitude of the search area',
                'validator': lambda x: -90 <= x <= 90
            },
            {
                'name': '--west',
                'type': float,
                'required': True,
                'help': 'Western longitude of the search area',
                'validator': lambda x: -180 <= x <= 180
            },
            {
                'name': '--north',
                'type': float,
                'required': True,
                'help': 'Northern latitude of the search area',
                'validator': lambda x: -90 <= x <= 90
            },
            {
                'name': '--east',
                'type': float,
                'required': True,
                'help': 'Eastern longitude of the search area',
                'validator': lambda x: -180 <= x <= 180
            }
        ]

class CommandRegistry:
    """Registry for CLI commands with metadata."""

    _commands: dict[str, CommandMetadata] = {}

    @classmethod
    def register(cls,
                name: str,
                help_text: str,
                options: list[dict[str, Any]] | None = None,
                parent_command: str | None = None) -> Callable[[Callable[[CLIContext], int]], Callable[[CLIContext], int]]:
        """Register a command handler.

        Subcommand names must be unique across parents, they key the registry.
        """
        def decorator(handler: Callable[[CLIContext], int]) -> Callable[[CLIContext], int]:
            cls._commands[name] = CommandMetadata(
                name=name,
                help_text=help_text,
                handler=handler,
                options=options or [],
                parent_command=parent_command
            )
            return handler
        return decorator

    @classmethod
    def commands(cls) -> list[CommandMetadata]:
        return list(cls._commands.values())

    @classmethod
    def get_command(cls, name: str) -> CommandMetadata | None:
        """Get command metadata by name."""
        return cls._commands.get(name)

class ArgumentValidator:
    """Validator for CLI arguments."""

    @staticmethod
    def validate_option(option: dict[str, Any], value: Any) -> bool:
        """Validate a single option value."""
        if 'validator' not in option:
            return True

        try:
            return bool(option['validator'](value))
        except (TypeError, ValueError):
            return False

    @staticmethod
    def validate_args(args: argparse.Namespace, command: CommandMetadata) -> list[str]:
        """Validate all arguments for a command."""
        errors = []

        for option in command.options:
            value = getattr(args, option['name'].lstrip('-').replace('-', '_'), None)
            if value is not None and not ArgumentValidator.validate_option(option, value):
                errors.append(f"Invalid value for {option['name']}: {value}")

        return errors

def add_common_options(parser: argparse.ArgumentParser) -> None:
    """Add common global options to a parser."""
    parser.add_argument(
        '--dev',
        action='store_true',
        help='Run in development mode with debug output'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging output'
    )
    parser.add_argument(
        '--log-file',
        help='Path to write log output (default: logs to stderr)'
    )
    parser.add_argument(
        '--config-dir',
        help='Directory containing config.yaml (default: $GOLFMATCH_CONFIG_DIR or current directory)'
    )

def subcommand_dest(parent_command: str) -> str:
    """Namespace attribute holding the chosen subcommand of ``parent_command``."""
    return f"{parent_command}_subcommand"

class CLIBuilder:
    """Builder for constructing CLI parsers with consistent formatting."""

    # Custom option fields that should not be passed to argparse
    _CUSTOM_FIELDS = {'validator'}

    def __init__(self, description: str):
        """Initialize CLI builder."""
        self.parser = argparse.ArgumentParser(description=description)
        self.subparsers = self.parser.add_subparsers(dest='command', required=True)
        self._parent_parsers: dict[str, argparse._SubParsersAction] = {}
        self._added: set[tuple[str | None, str]] = set()

        add_common_options(self.parser)

    def _parent_subparsers(self, parent_command: str) -> argparse._SubParsersAction:
        if parent_command not in self._parent_parsers:
            parent_parser = self.subparsers.add_parser(
                parent_command,
                help=f"{parent_command.capitalize()} commands"
            )
            self._parent_parsers[parent_command] = parent_parser.add_subparsers(
                dest=subcommand_dest(parent_command),
                required=True
            )
        return self._parent_parsers[parent_command]

    def add_command(self, command: CommandMetadata) -> None:
        """Add a command to the parser, once."""
        key = (command.parent_command, command.name)
        if key in self._added:
            return
        self._added.add(key)

        if command.parent_command:
            parser = self._parent_subparsers(command.parent_command).add_parser(
                command.name,
                help=command.help_text
            )
        else:
            parser = self.subparsers.add_parser(command.name, help=command.help_text)

        for option in command.options:
            option_dict = {k: v for k, v in option.items() if k != 'name' and k not in self._CUSTOM_FIELDS}
            name = option['name']
            if not name.startswith('-'):
                # Positional argument
                option_dict.pop('required', None)
            parser.add_argument(name, **option_dict)

        parser.set_defaults(handler_name=command.name)

    def build(self) -> argparse.ArgumentParser:
        """Build and return the parser."""
        return self.parser
