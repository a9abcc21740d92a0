#!/usr/bin/env python3
"""
core/log_utils.py: Logging setup shared by the pdocx command-line tool.
This module contains:
- setup_logging: Configures console/file handlers and per-topic debug levels.
- ContextFilter: A logging filter to add contextual data (like the input file)
  to log records.
- RichLogFormatter: A custom logging formatter for colorful console output.
"""

import logging

PROJECT_TOPICS = {
    "pdocx": {"extract", "group", "synth", "reconstruct", "writer", "api", "config"},
}


def setup_logging(
    project_name: str,
    level=logging.INFO,
    color_logs=False,
    debug_topics=None,
    log_file: str = None,
):
    """Configures logging for the application."""
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        for h in root_logger.handlers[:]:
            root_logger.removeHandler(h)
            h.close()

    # Console Handler (always enabled)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(RichLogFormatter(use_color=color_logs))
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)

    # File Handler (optional)
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="w")
            # File logs should not be colored
            file_handler.setFormatter(RichLogFormatter(use_color=False))
            root_logger.addHandler(file_handler)
            logging.getLogger(project_name).info("Logging to file: %s", log_file)
        except IOError as e:
            logging.getLogger(project_name).error(
                "Could not open log file %s: %s", log_file, e
            )

    # Silence noisy libraries
    logging.getLogger("pdfminer").setLevel(logging.WARNING)

    if debug_topics:
        valid_topics = PROJECT_TOPICS.get(project_name, set())
        user_topics = [t.strip() for t in debug_topics.split(",")]
        if "all" in user_topics:
            topics_to_set = valid_topics
        else:
            topics_to_set = {
                full for u in user_topics for full in valid_topics if full.startswith(u)
            }
        for topic in topics_to_set:
            logging.getLogger(f"{project_name}.{topic}").setLevel(logging.DEBUG)
        return topics_to_set
    return set()


class ContextFilter(logging.Filter):
    """
    A logging filter that injects contextual information into log records.
    """

    def __init__(self, context_str=""):
        super().__init__()
        self.context_str = context_str

    def filter(self, record):
        record.context = self.context_str
        return True


# --- CUSTOM LOGGING FORMATTER ---
class RichLogFormatter(logging.Formatter):
    """A custom logging formatter for colorful and aligned console output.
    Every line is prefixed with a color-coded level and a bolded topic name
    (the logger name after the project prefix, e.g. 'synth' for
    'pdocx.synth'), followed by the optional record context.
    Args:
        use_color (bool): If True, ANSI color codes are used. Defaults to False.
    """

    def __init__(self, use_color=False):
        super().__init__()
        if use_color:
            # ANSI escape codes for 256-color terminal
            self.COLORS = {
                logging.DEBUG: "\033[38;5;252m",  # Light Grey
                logging.INFO: "\033[38;5;111m",  # Pastel Blue
                logging.WARNING: "\033[38;5;229m",  # Pale Yellow
                logging.ERROR: "\033[38;5;210m",  # Soft Red
                logging.CRITICAL: "\033[38;5;217m",  # Light Magenta
            }
            self.BOLD = "\033[1m"
            self.RESET = "\033[0m"
        else:
            self.COLORS = {}
            self.BOLD = ""
            self.RESET = ""

    def format(self, record):
        """Formats a log record, prefixing each message line."""
        color = self.COLORS.get(record.levelno, self.RESET)
        level_name = record.levelname[:5]

        name_parts = record.name.split(".")
        topic = name_parts[1][:7] if len(name_parts) > 1 else record.name[:7]

        has_ctx = getattr(record, "context", "")
        context_str = f"[{record.context}]" if has_ctx else ""

        prefix = (
            f"{color}{level_name:<5}{self.RESET}:"
            f"{self.BOLD}{topic:<7}{self.RESET}{context_str}: "
        )
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return "\n".join(f"{prefix}{line}" for line in message.split("\n"))
