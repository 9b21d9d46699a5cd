import logging


class Logger:
    """Configures root logging from settings and hands out named loggers."""

    def __init__(self, log_format: str, log_level: str) -> None:
        self.log_format = log_format
        self.log_level = log_level.upper()

        logging.basicConfig(format=self.log_format, level=self.log_level)
        logging.getLogger().setLevel(self.log_level)

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)
