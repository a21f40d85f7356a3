"""Debug logging for the spotifyfetch CLI.

With --debug every module logger writes to a debug log file, and the Rich
console used for user-facing output mirrors a plain-text copy of what it
prints into the same file.
"""

import logging
from pathlib import Path
from typing import Optional, Union
from rich.console import Console as RichConsole

LOG_PREFIX = "[CONSOLE] "

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugCapturingConsole(RichConsole):
    """
    Rich Console that copies what it prints into the debug log.

    Terminal output is unchanged. The console runs with `record=True`; after
    each print call the recorded segments are exported as plain text,
    logged at DEBUG level and cleared, so the record buffer never grows
    past one call.
    """

    def __init__(self, debug_logger: Optional[logging.Logger] = None, **kwargs):
        """
        Args:
            debug_logger: Logger receiving the captured text
            **kwargs: Passed to rich.console.Console
        """
        kwargs["record"] = True
        super().__init__(**kwargs)
        self.debug_logger = debug_logger

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        # Always drain the record buffer, even when nothing is logged
        captured = self.export_text(clear=True, styles=False)
        if not self.debug_logger or not self.debug_logger.isEnabledFor(logging.DEBUG):
            return

        for line in captured.rstrip().splitlines():
            if line.strip():
                self.debug_logger.debug(f"{LOG_PREFIX}{line.rstrip()}")


def create_debug_console(debug_enabled: bool = False,
                         debug_logger: Optional[logging.Logger] = None) -> RichConsole:
    """
    Create appropriate console instance based on debug mode.

    Returns:
        DebugCapturingConsole if debug enabled, regular Console otherwise
    """
    if debug_enabled and debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger)
    return RichConsole()


def setup_debug_logging(log_file: Union[str, Path]) -> logging.Logger:
    """
    Send all logging to `log_file` at DEBUG level.

    Args:
        log_file: Path to the debug log, created with its directory if needed

    Returns:
        Logger the debug console writes captured output to
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(file_handler)

    # Keep third-party request chatter out of the log
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logging.getLogger("debug_console")
