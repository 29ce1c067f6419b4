"""
Error Handling Utilities
Render pipeline errors with suggestions
"""

from difflib import get_close_matches
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from imgconv.core.conversion.registry import format_registry
from imgconv.core.exceptions import (
    ConversionFailedError,
    DecodeError,
    ImageConverterError,
    ImageIOError,
    InvalidArgumentError,
    UnsupportedFormatError,
)


class ErrorHandler:
    """Handles errors with helpful suggestions"""

    def __init__(self, known_formats: Optional[List[str]] = None):
        self.known_formats = known_formats or list(format_registry.supported_formats())

    def suggest_format(self, incorrect: str) -> Optional[str]:
        """Suggest a similar format"""
        aliases = {"jpg": "jpeg", "jpe": "jpeg", "jfif": "jpeg"}
        lowered = incorrect.lower()
        if lowered in self.known_formats:
            return lowered
        if lowered in aliases:
            return aliases[lowered]
        matches = get_close_matches(lowered, self.known_formats, n=1, cutoff=0.6)
        return matches[0] if matches else None

    def suggestions_for(self, error: Exception) -> List[str]:
        suggestions = []
        details = getattr(error, "details", {}) or {}

        if isinstance(error, (InvalidArgumentError, UnsupportedFormatError)):
            value = details.get("field_value") or details.get("requested_format")
            if value:
                suggestion = self.suggest_format(str(value))
                if suggestion:
                    suggestions.append(f"Did you mean: [cyan]{suggestion}[/cyan]?")
            if details.get("field_name") != "directory":
                suggestions.append(
                    "Supported formats: " + ", ".join(self.known_formats)
                )
        elif isinstance(error, ImageIOError):
            operation = details.get("operation")
            if operation == "remove":
                suggestions.append(
                    "The converted file was written; the original is still on disk"
                )
            elif operation in ("create", "write"):
                suggestions.append("Check that the directory is writable")
            else:
                suggestions.append("Check that the path exists and is readable")
        elif isinstance(error, (DecodeError, ConversionFailedError)):
            suggestions.append("The image may be corrupted")

        return suggestions

    def handle(self, error: Exception, console: Console, debug: bool = False):
        """Handle an error with helpful output"""
        error_text = Text()
        error_text.append("Error: ", style="bold red")
        error_text.append(str(error))

        if isinstance(error, ImageConverterError):
            error_text.append(f" [{error.error_code}]", style="dim")
            if error.result is not None and error.result.converted_count:
                error_text.append(
                    f"\n{error.result.converted_count} file(s) were converted before the error"
                )

        suggestions = self.suggestions_for(error)
        if suggestions:
            error_text.append("\n\n")
            for suggestion in suggestions:
                error_text.append_text(Text.from_markup(f"  • {suggestion}\n"))

        if debug and error.__cause__ is not None:
            error_text.append(f"\nCaused by: {error.__cause__!r}", style="dim")

        console.print(Panel(error_text, title="❌ Error", border_style="red"))


error_handler = ErrorHandler()


def handle_error(error: Exception, console: Console, debug: bool = False) -> None:
    error_handler.handle(error, console, debug=debug)
