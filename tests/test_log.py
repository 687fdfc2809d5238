# tests/test_log.py

import datetime
from pathlib import Path

from eurobrokers.utils.log import Log, format_data


def test_format_data():
    assert format_data({"id": 5, "city": "Brno"}) == "id=5 city=Brno"
    assert format_data(None) == ""
    assert format_data({}) == ""


def test_daily_path(tmp_path):
    log = Log(str(tmp_path / "log"))
    path = log.build_log_path(datetime.datetime(2025, 3, 7, 12, 0))

    assert Path(path) == tmp_path / "log" / "2025" / "03" / "07.log"
    assert Path(path).parent.is_dir()


def test_format_line_carries_level_and_data():
    now = datetime.datetime(2025, 3, 7, 9, 5, 1)
    line = Log().format_line(now, "WARNING", "lead", "Лид не найден", {"id": 3})
    assert line == "07.03.2025 09:05:01 WARNING lead: Лид не найден [id=3]"


async def test_async_levels_reach_daily_file(log):
    await log.log_info("lead", "создан", {"id": 1})
    await log.log_warning("lead", "отклонён")
    await log.log_error("db", "сбой", is_console=False)
    await log.shutdown()

    text = Path(log.build_log_path(datetime.datetime.now())).read_text(encoding="utf-8")
    assert "INFO lead: создан [id=1]" in text
    assert "WARNING lead: отклонён" in text
    assert "ERROR db: сбой" in text


def test_sync_writer(tmp_path, capsys):
    log = Log(str(tmp_path / "log"), log_print=True)
    log.log_info_sync("startup", "старт")
    log.log_error_sync("startup", "ошибка")

    text = Path(log.build_log_path(datetime.datetime.now())).read_text(encoding="utf-8")
    assert "INFO startup: старт" in text
    assert "ERROR startup: ошибка" in text
    assert "старт" in capsys.readouterr().out
