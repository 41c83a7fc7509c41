"""测试 ClusterLogger 的六个入口。"""

import io
import re
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from colorama import Fore, Style
from loguru import logger as loguru_logger

from clusterlog.config.log import apply_logging_from_settings
from clusterlog.config.settings import Settings
from clusterlog.core.context import ProcessContext
from clusterlog.core.dispatch import Dispatcher
from clusterlog.core.errors import ForwardingFailure
from clusterlog.core.logger import ClusterLogger
from clusterlog.core.sink import LoguruSink, StreamSink
from clusterlog.utils.log import remove_output_targets


RESET = Style.RESET_ALL
LEVELS = ["success", "info", "warn", "error", "fatal", "log"]


@pytest.fixture
def buffer():
    return io.StringIO()


@pytest.fixture
def primary(buffer):
    return ClusterLogger(Dispatcher(ProcessContext.primary(), sink=StreamSink(buffer)))


@pytest.fixture
def channel():
    return MagicMock()


@pytest.fixture
def worker(channel):
    sink = MagicMock()
    dispatcher = Dispatcher(ProcessContext.worker(3, pid=4471), sink=sink, channel=channel)
    return ClusterLogger(dispatcher)


class TestPrimary:
    """主进程：每次调用写一行，不转发。"""

    def test_info_scenario(self, primary, buffer):
        """info("server started") 输出带彩色时间戳与蓝色消息的一行。"""
        primary.info("server started")

        pattern = (
            r"^\[" + re.escape(Fore.CYAN) + r".+" + re.escape(RESET) + r"\] "
            + re.escape(f"{Fore.BLUE}Info: server started{RESET}") + r"\n$"
        )
        assert re.match(pattern, buffer.getvalue())

    @pytest.mark.parametrize(
        "method,expected",
        [
            ("success", f"{Fore.GREEN}Success: a|b{RESET}"),
            ("info", f"{Fore.BLUE}Info: a|b{RESET}"),
            ("warn", f"{Fore.YELLOW}Warn: a|b{RESET}"),
            ("error", f"{Fore.RED}a|b{RESET}"),
            ("fatal", f"{Fore.RED}Fatal: a|b{RESET}"),
            ("log", "a|b"),
        ],
    )
    def test_levels(self, primary, buffer, method, expected):
        getattr(primary, method)("a", "b")

        output = buffer.getvalue()
        assert output.count("\n") == 1
        assert output.endswith(f"] {expected}\n")

    def test_no_forwarding(self, buffer):
        channel = MagicMock()
        logger = ClusterLogger(
            Dispatcher(ProcessContext.primary(), sink=StreamSink(buffer), channel=channel)
        )

        for method in LEVELS:
            getattr(logger, method)("x")

        channel.send.assert_not_called()
        assert buffer.getvalue().count("\n") == len(LEVELS)

    def test_error_scenario(self, primary, buffer):
        """error(异常) 输出红色的完整堆栈，不加 Error: 前缀。"""
        try:
            raise ValueError("boom")
        except ValueError as exc:
            primary.error(exc)

        output = buffer.getvalue()
        assert f"] {Fore.RED}Traceback (most recent call last):" in output
        assert f"ValueError: boom{RESET}\n" in output
        assert "Error: " not in output.replace("ValueError: ", "")

    def test_error_joins_multiple(self, primary, buffer):
        primary.error("first", KeyError("k"))

        assert f"{Fore.RED}first|KeyError: 'k'{RESET}" in buffer.getvalue()

    def test_cyclic_reported_via_error(self, primary, buffer):
        """循环结构不抛出：先输出序列化失败，再输出标记。"""
        cyclic = []
        cyclic.append(cyclic)

        primary.info(cyclic)

        output = buffer.getvalue()
        failure_at = output.index("SerializationFailure: cannot serialize list")
        marker_at = output.index(f"{Fore.BLUE}Info: <unserializable>{RESET}\n")
        assert failure_at < marker_at
        assert output.endswith(f"Info: <unserializable>{RESET}\n")

    def test_structured_value(self, primary, buffer):
        primary.info({"port": 8080})

        assert 'Info: {"port": 8080}' in buffer.getvalue()

    def test_non_json_values_keep_text(self, primary, buffer):
        """Path、datetime 等单个值保留其字符串形式，不触发 error 路径。"""
        primary.info(Path("/var/log"))
        primary.info(datetime(2016, 11, 24, 12, 30))

        output = buffer.getvalue()
        assert 'Info: "/var/log"' in output
        assert 'Info: "2016-11-24 12:30:00"' in output
        assert "Traceback" not in output
        assert "<unserializable>" not in output

    def test_colors_disabled(self, buffer):
        logger = ClusterLogger(
            Dispatcher(ProcessContext.primary(), sink=StreamSink(buffer), colorize=False),
            colorize=False,
        )

        logger.warn("plain")

        assert "\x1b[" not in buffer.getvalue()
        assert buffer.getvalue().endswith("] Warn: plain\n")


class TestSubordinate:
    """子进程：每次调用转发一次，不写 sink。"""

    def test_warn_scenario(self, worker, channel):
        worker.warn("disk low")

        channel.send.assert_called_once()
        payload = channel.send.call_args[0][0]
        assert payload["type"] == "logging"
        assert payload["data"]["workerID"] == 3
        assert payload["data"]["pid"] == 4471
        assert payload["data"]["message"] == f"{Fore.YELLOW}Warn: disk low{RESET}"
        worker.dispatcher.sink.write_line.assert_not_called()

    @pytest.mark.parametrize("method", LEVELS)
    def test_each_level_forwards_once(self, worker, channel, method):
        getattr(worker, method)("x")

        assert channel.send.call_count == 1
        worker.dispatcher.sink.write_line.assert_not_called()

    def test_forwarding_failure_propagates(self, worker, channel):
        channel.send.side_effect = OSError("pipe closed")

        with pytest.raises(ForwardingFailure):
            worker.info("lost")


class TestErrorFallback:
    """error 路径自身失败时写兜底 sink，不抛出。"""

    def test_forwarding_failure_goes_to_fallback(self, channel):
        channel.send.side_effect = OSError("pipe closed")
        fallback = io.StringIO()
        sink = MagicMock()
        logger = ClusterLogger(
            Dispatcher(ProcessContext.worker(1, pid=2), sink=sink, channel=channel),
            fallback=StreamSink(fallback),
        )

        logger.error("will not arrive")

        text = fallback.getvalue()
        assert "ForwardingFailure" in text
        assert "OSError: pipe closed" in text
        sink.write_line.assert_not_called()

    def test_normalization_failure_goes_to_fallback(self, primary):
        class Unprintable:
            def __str__(self):
                raise RuntimeError("no str")

        fallback = io.StringIO()
        primary.fallback = StreamSink(fallback)

        primary.error(Unprintable())

        assert "RuntimeError: no str" in fallback.getvalue()

    def test_fallback_defaults_to_stderr(self, channel, capsys):
        channel.send.side_effect = OSError("pipe closed")
        logger = ClusterLogger(Dispatcher(ProcessContext.worker(1, pid=2), channel=channel))

        logger.error("x")

        assert "ForwardingFailure" in capsys.readouterr().err


class TestFromSettings:
    """测试按 Settings 组装。"""

    def test_applies_settings(self, buffer):
        settings = Settings(delimiter=";", colorize=False, timestamp_format="TS")

        logger = ClusterLogger.from_settings(
            ProcessContext.primary(), settings=settings, sink=StreamSink(buffer)
        )
        logger.log("a", "b")

        assert buffer.getvalue() == "[TS] a;b\n"

    def test_loguru_sink_selected(self, loguru_cleanup):
        logger = ClusterLogger.from_settings(
            ProcessContext.primary(), settings=Settings(sink="loguru")
        )

        assert isinstance(logger.dispatcher.sink, LoguruSink)

    def test_channel_passed_through(self, channel):
        logger = ClusterLogger.from_settings(
            ProcessContext.worker(9, pid=1), channel=channel, settings=Settings()
        )
        logger.info("hi")

        assert channel.send.call_args[0][0]["data"]["workerID"] == 9


@pytest.fixture
def loguru_cleanup():
    yield
    remove_output_targets()
    loguru_logger.remove()
    loguru_logger.disable("clusterlog")


class TestLoguruOutput:
    """sink="loguru" 时日志行经 loguru 输出，不受诊断级别影响。"""

    def test_line_survives_diagnostics_level(self, capsys, loguru_cleanup):
        settings = Settings(sink="loguru", colorize=False, timestamp_format="TS")
        apply_logging_from_settings(settings)
        logger = ClusterLogger.from_settings(ProcessContext.primary(), settings=settings)

        logger.info("server started")
        loguru_logger.complete()

        captured = capsys.readouterr()
        assert captured.out == "[TS] Info: server started\n"
        assert "server started" not in captured.err

    def test_configure_after_sink_keeps_output(self, capsys, loguru_cleanup):
        settings = Settings(sink="loguru", colorize=False, timestamp_format="TS")
        logger = ClusterLogger.from_settings(ProcessContext.primary(), settings=settings)
        apply_logging_from_settings(settings)

        logger.warn("disk low")
        loguru_logger.complete()

        assert capsys.readouterr().out == "[TS] Warn: disk low\n"

    def test_without_diagnostics_config(self, capsys, loguru_cleanup):
        settings = Settings(sink="loguru", colorize=False, timestamp_format="TS")
        logger = ClusterLogger.from_settings(ProcessContext.primary(), settings=settings)

        logger.log("plain")

        captured = capsys.readouterr()
        assert captured.out == "[TS] plain\n"
        assert captured.err == ""
