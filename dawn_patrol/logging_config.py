"""Console logging setup for applications embedding the engine."""
import logging


class ModuleNameFormatter(logging.Formatter):
    """Formatter that shows only the last component of the logger name."""

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        record.name = record.name.split(".")[-1]
        return super().format(record)


def setup_logging(level: int = logging.INFO) -> None:
    formatter = ModuleNameFormatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Replace whatever handlers were installed before
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
