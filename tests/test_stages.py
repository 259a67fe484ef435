# ==============================================
# Tests for ConsoleOutput and ReportWriter
# ==============================================

import pytest

from bulk.errors import InvalidConfigurationError, ReportWriteError
from bulk.stages import ConsoleOutput, ReportWriter


class TestConsoleOutput:
    def test_writes_line_and_forwards(self, output, recorder, make_command):
        stage = ConsoleOutput(recorder, stream=output)
        command = make_command("bulk: a, b")
        stage.accept(command)

        assert output.getvalue() == "bulk: a, b\n"
        assert recorder.commands == [command]
        assert stage.lines_written == 1

    def test_defaults_to_stdout(self, make_command, capsys):
        ConsoleOutput().accept(make_command("hello"))
        assert capsys.readouterr().out == "hello\n"

    def test_empty_text(self, output, make_command):
        ConsoleOutput(stream=output).accept(make_command(""))
        assert output.getvalue() == "\n"


class TestReportWriter:
    def test_file_named_by_seconds(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path))
        command = make_command("bulk: x")
        writer.accept(command)

        path = tmp_path / f"bulk{command.epoch_seconds()}.log"
        assert path.read_text(encoding="utf-8") == "bulk: x"
        assert writer.files_written == 1

    def test_no_trailing_newline(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path))
        command = make_command("bulk: x")
        writer.accept(command)
        assert writer.get_path(command).read_bytes() == b"bulk: x"

    def test_file_named_by_millis(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path), timestamp_unit="ms")
        command = make_command("a")
        assert writer.get_filename(command) == f"bulk{command.epoch_millis()}.log"

    def test_overwrites_same_name(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path))
        writer.accept(make_command("first"))
        writer.accept(make_command("second"))
        files = list(tmp_path.iterdir())
        assert len(files) == 1
        assert files[0].read_text(encoding="utf-8") == "second"

    def test_creates_missing_directory(self, tmp_path, make_command):
        report_dir = tmp_path / "reports" / "today"
        writer = ReportWriter(report_dir=str(report_dir))
        writer.accept(make_command("a"))
        assert len(list(report_dir.iterdir())) == 1

    def test_terminal_does_not_forward(self, tmp_path, recorder, make_command):
        writer = ReportWriter(recorder, report_dir=str(tmp_path))
        writer.accept(make_command("a"))
        assert recorder.commands == []

    def test_tee_forwards(self, tmp_path, recorder, make_command):
        writer = ReportWriter(recorder, report_dir=str(tmp_path), terminal=False)
        writer.accept(make_command("a"))
        assert recorder.texts == ["a"]

    def test_write_returns_result(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path))
        result = writer.write(make_command("héllo"))
        assert result.ok
        assert result.bytes_written == len("héllo".encode("utf-8"))
        assert writer.last_result is result

    def test_write_failure_is_a_result(self, tmp_path, make_command):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        writer = ReportWriter(report_dir=str(blocker))

        result = writer.write(make_command("a"))
        assert not result.ok
        assert "Could not write" in result.error
        assert writer.files_written == 0

    def test_accept_raises_on_failure(self, tmp_path, recorder, make_command):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        writer = ReportWriter(recorder, report_dir=str(blocker), terminal=False)

        with pytest.raises(ReportWriteError) as excinfo:
            writer.accept(make_command("a"))
        assert excinfo.value.result is writer.last_result
        assert isinstance(excinfo.value, OSError)
        assert recorder.commands == []

    def test_undecodable_bytes_written_back(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path))
        command = make_command(b"b\xff".decode("utf-8", "surrogateescape"))

        result = writer.write(command)

        assert result.ok
        assert result.bytes_written == 2
        assert writer.get_path(command).read_bytes() == b"b\xff"

    def test_unencodable_text_is_a_result(self, tmp_path, make_command):
        writer = ReportWriter(report_dir=str(tmp_path))

        result = writer.write(make_command("\ud800"))

        assert not result.ok
        assert writer.files_written == 0

    def test_rejects_unknown_unit(self):
        with pytest.raises(InvalidConfigurationError):
            ReportWriter(timestamp_unit="minutes")
