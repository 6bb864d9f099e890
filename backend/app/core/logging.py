import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

from app.core.config import settings
from app.core.logger import JSONFormatter

# Install rich traceback handling
install_rich_traceback(show_locals=settings.DEBUG)

# Create rich console with custom theme
console = Console(
    theme=Theme(
        {
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "debug": "grey50",
            "forward": "green",
            "socat": "magenta",
        }
    )
)


def _build_handler() -> logging.Handler:
    if settings.LOG_JSON:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        return handler
    return RichHandler(
        console=console,
        rich_tracebacks=True,
        tracebacks_show_locals=settings.DEBUG,
        markup=True,
        show_time=True,
        show_path=True,
    )


handler = _build_handler()
LEVEL = logging.DEBUG if settings.DEBUG else logging.INFO

# Create logger
logger = logging.getLogger("socat_forward_manager")
logger.setLevel(LEVEL)

# Remove existing handlers and add our handler
logger.handlers = []
logger.addHandler(handler)
logger.propagate = False

# Set logging format
logging.basicConfig(
    level=LEVEL,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[handler],
)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance with rich formatting."""
    logger_name = name or "socat_forward_manager"
    logger = logging.getLogger(logger_name)

    # Configure logger if not already configured
    if not logger.handlers:
        logger.setLevel(LEVEL)
        logger.addHandler(handler)
        logger.propagate = False

    return logger


# Operational diagnostics for spawning, signalling, reaping and liveness
forward_logger = get_logger("forwards")


def log_command(logger: logging.Logger, argv: Sequence[str]) -> None:
    """Log a command execution with proper formatting."""
    logger.debug(f"[bold]Executing command:[/bold] {escape(' '.join(argv))}")
