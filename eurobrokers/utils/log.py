# eurobrokers/utils/log.py
# Журнал событий: один файл на день, LOG_DIR/ГГГГ/ММ/ДД.log

import os
import datetime
import logging
from aiologger import Logger
from aiologger.handlers.files import AsyncFileHandler


def format_data(data: dict | None) -> str:
    """{"id": 5, "city": "Brno"} -> "id=5 city=Brno" """
    if not data:
        return ""
    return " ".join(f"{key}={value}" for key, value in data.items())


class Log:
    def __init__(self, log_dir: str = "log", log_print: bool = False):
        self.log_dir = log_dir
        self.log_print = log_print
        self.loggers: dict[str, tuple[str, Logger]] = {}  # target -> (путь файла, логгер)

    def build_log_path(self, now: datetime.datetime) -> str:
        base_dir = os.path.join(self.log_dir, f"{now.year}", f"{now:%m}")
        os.makedirs(base_dir, exist_ok=True)
        return os.path.join(base_dir, f"{now:%d}.log")

    def format_line(self, now: datetime.datetime, level: str, target: str, message: str, data: dict | None) -> str:
        line = f"{now:%d.%m.%Y %H:%M:%S} {level} {target}: {message}"
        extra = format_data(data)
        return f"{line} [{extra}]" if extra else line

    def echo(self, line: str, is_console: bool | None):
        if self.log_print if is_console is None else is_console:
            print(line)

    # ────────────── Асинхронная запись ──────────────
    async def get_logger(self, target: str, now: datetime.datetime) -> Logger:
        """Логгер target; при смене дня старый закрывается и открывается новый файл."""
        path = self.build_log_path(now)
        current = self.loggers.get(target)
        if current is not None and current[0] == path:
            return current[1]
        if current is not None:
            await current[1].shutdown()

        target_logger = Logger(name=f"eurobrokers_{target}")
        target_logger.add_handler(AsyncFileHandler(filename=path, mode="a", encoding="utf-8"))
        self.loggers[target] = (path, target_logger)
        return target_logger

    async def write(self, level: str, target: str, message: str, data: dict | None = None, is_console: bool = None):
        now = datetime.datetime.now()
        line = self.format_line(now, level, target, message, data)
        target_logger = await self.get_logger(target, now)
        await target_logger.info(line)
        self.echo(line, is_console)

    async def log_info(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        await self.write("INFO", target, message, data, is_console)

    async def log_warning(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        await self.write("WARNING", target, message, data, is_console)

    async def log_error(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = True):
        await self.write("ERROR", target, message, data, is_console)

    # ────────────── Синхронная запись (lifespan до async-логгера) ──────────────
    def write_sync(self, level: str, target: str, message: str, data: dict | None = None, is_console: bool = None):
        now = datetime.datetime.now()
        path = os.path.abspath(self.build_log_path(now))
        line = self.format_line(now, level, target, message, data)

        logger = logging.getLogger(f"eurobrokers_sync_{target}")
        logger.setLevel(logging.INFO)
        logger.propagate = False

        # новый день или другой LOG_DIR -> другой файл
        for handler in list(logger.handlers):
            if getattr(handler, "baseFilename", None) != path:
                logger.removeHandler(handler)
                handler.close()
        if not logger.handlers:
            file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            logger.addHandler(file_handler)

        logger.info(line)
        self.echo(line, is_console)

    def log_info_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = None):
        self.write_sync("INFO", target, message, data, is_console)

    def log_error_sync(self, target: str = "", message: str = "", data: dict | None = None, is_console: bool = True):
        self.write_sync("ERROR", target, message, data, is_console)

    async def shutdown(self):
        for _, target_logger in list(self.loggers.values()):
            await target_logger.shutdown()
        self.loggers.clear()
