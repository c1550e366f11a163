"""Custom logging handlers."""

import logging
import socket
from pathlib import Path


class LocalFileHandler(logging.Handler):
    """Log handler that appends every record to a local file."""

    def __init__(self, log_file: str):
        super().__init__()
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.worker_id = socket.gethostname()[:8]

        # Setup formatter with timestamp and host info
        formatter = logging.Formatter(
            "[%(asctime)s] [%(worker_id)s] %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.setFormatter(formatter)

    def emit(self, record: logging.LogRecord):
        """Write log record to the log file."""
        try:
            record.worker_id = self.worker_id
            message = self.format(record)

            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(message + "\n")
                f.flush()  # Ensure immediate write for tail -f

        except Exception:
            # A broken log file must not stop the search
            self.handleError(record)
