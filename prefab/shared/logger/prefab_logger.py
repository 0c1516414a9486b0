import logging
from typing import Dict, Optional

import structlog
from colorama import Fore, Style
from colorama import init as colorama_init

colorama_init()


class PrefabLogger:
    """structlog-backed logger: coloured console lines, optional JSON file sink.

    Instances are cached per name so every component asking for the same
    logger shares its handlers.
    """

    _logger_cache: Dict[str, "PrefabLogger"] = {}

    LEVEL_COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA,
    }

    def __init__(
        self,
        name: str = "prefab",
        level: str = "WARNING",
        log_file: Optional[str] = None,
        json_format: bool = False,
        context: Optional[dict] = None,
    ):
        self.name = name
        self.context = context or {}

        if name in self._logger_cache:
            cached = self._logger_cache[name]
            self.console_logger = cached.console_logger
            self.file_logger = cached.file_logger
            return

        log_level = getattr(logging, level.upper(), logging.WARNING)

        # ----------------------------
        # Console processor
        # ----------------------------
        def console_processor(logger, method_name, event_dict):
            ts = event_dict.pop("timestamp", "")
            lvl = event_dict.pop("level", method_name).upper()
            logger_name = event_dict.pop("logger", self.name)
            msg = event_dict.pop("event", "")
            fields = " ".join(f"{k}={v}" for k, v in sorted(event_dict.items()))
            color = self.LEVEL_COLORS.get(lvl, Fore.WHITE)
            return f"{color}{ts} [{logger_name}] {lvl}: {msg} {fields}".rstrip() + Style.RESET_ALL

        # ----------------------------
        # Console logger
        # ----------------------------
        console_logger = logging.getLogger(f"{name}.console")
        console_logger.setLevel(log_level)
        console_logger.propagate = False
        if not console_logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(logging.Formatter("%(message)s"))
            console_logger.addHandler(ch)

        console_processors = [
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
        ]
        console_processors.append(
            structlog.processors.JSONRenderer() if json_format else console_processor
        )
        self.console_logger = structlog.wrap_logger(
            console_logger,
            processors=console_processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        ).bind(logger=name, **self.context)

        # ----------------------------
        # File logger (JSON)
        # ----------------------------
        self.file_logger = None
        if log_file:
            file_logger = logging.getLogger(f"{name}.file")
            file_logger.setLevel(log_level)
            file_logger.propagate = False
            if not any(isinstance(h, logging.FileHandler) for h in file_logger.handlers):
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(logging.Formatter("%(message)s"))
                file_logger.addHandler(fh)

            self.file_logger = structlog.wrap_logger(
                file_logger,
                processors=[
                    structlog.processors.TimeStamper(fmt="ISO"),
                    structlog.stdlib.add_log_level,
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                    structlog.processors.UnicodeDecoder(),
                    structlog.processors.JSONRenderer(),
                ],
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            ).bind(logger=name, **self.context)

        self._logger_cache[name] = self

    def _emit(self, level: str, msg: str, **extra):
        getattr(self.console_logger, level)(msg, **extra)
        if self.file_logger is not None:
            getattr(self.file_logger, level)(msg, **extra)

    # ----------------------------
    # Logging methods
    # ----------------------------
    def debug(self, msg: str, **extra):
        self._emit("debug", msg, **extra)

    def info(self, msg: str, **extra):
        self._emit("info", msg, **extra)

    def warning(self, msg: str, **extra):
        self._emit("warning", msg, **extra)

    def error(self, msg: str, **extra):
        self._emit("error", msg, **extra)

    def exception(self, msg: str, **extra):
        self._emit("exception", msg, **extra)
