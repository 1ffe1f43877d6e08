import logging
from rich.console import Console
from rich.logging import RichHandler
from typing import Optional

class ToolLogger:
    """Logger with rich formatting on stderr and file output support"""

    def __init__(
        self,
        name: str = "s256code",
        level: str = "INFO",
        log_file: Optional[str] = None,
        verbose: bool = False
    ):
        # stderr keeps stdout free for the verifier/challenge lines
        self.console = Console(stderr=True)

        # Create logger
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.upper())
        self.logger.propagate = False

        # Clear any existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        # Create console handler with rich formatting
        console_handler = RichHandler(
            console=self.console,
            show_time=True,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True
        )
        console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
        self.logger.addHandler(console_handler)

        # Add file handler if log_file is specified
        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def debug(self, msg: str, *args, **kwargs):
        """Log debug message"""
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        """Log info message"""
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        """Log warning message"""
        self.logger.warning(msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        """Log critical message"""
        self.logger.critical(msg, *args, **kwargs)

    def section(self, title: str):
        """Log a section header"""
        self.logger.info(f"{'='*20} {title} {'='*20}")

    def success(self, msg: str):
        """Log a success message"""
        self.logger.info(f"✓ {msg}")

    def failure(self, msg: str):
        """Log a failure message"""
        self.logger.error(f"✗ {msg}")

    def close(self):
        """Detach and close all handlers"""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

def get_logger(
    name: str = "s256code",
    level: str = "INFO",
    log_file: Optional[str] = None,
    verbose: bool = False
) -> ToolLogger:
    """Get a configured logger instance"""
    return ToolLogger(name=name, level=level, log_file=log_file, verbose=verbose)
