# tests/test_cli.py
"""
s12_core_tracer.cliモジュールの結合テスト。
ファイルの読み込みから出力ファイルとコンソール概要までを検証します。
"""
import pytest

from s12_core_tracer.cli import derive_base, main

# @intent:test_suite コマンドラインドライバの結合テスト。

PROGRAM = """
# add two numbers and halt
00000000 000000000000
00 010000010000   # LOAD 10
01 001100010001   # ADD 11
02 010100010010   # STORE 12
03 111100000000   # HALT
10 000000000101
11 000000000111
"""

@pytest.fixture
def program(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "add.mem"
    path.write_text(PROGRAM)
    return path

class TestCli:
    def test_derive_base(self):
        assert derive_base("some/dir/prog.mem") == "prog"
        assert derive_base("prog") == "prog"

    def test_run_to_halt(self, program, tmp_path, capsys):
        assert main([str(program)]) == 0
        out = capsys.readouterr().out
        assert "Cycles Executed: 4" in out
        assert "PC: 0x03" in out
        assert "ACC: 0x00C" in out

        trace = (tmp_path / "add_trace").read_text()
        assert trace == "LOAD 10\nADD 11\nSTORE 12\nHALT 00\n"
        mem_out = (tmp_path / "add_memOut").read_text().split("\n")
        assert mem_out[0] == "00000011 000000001100"
        assert mem_out[0x12 + 1] == "12 000000001100"

    def test_output_base_and_cycle_cap(self, program, tmp_path, capsys):
        assert main([str(program), "-o", "capped", "-c", "2"]) == 0
        out = capsys.readouterr().out
        assert "Cycles Executed: 2" in out
        assert "PC: 0x02" in out
        assert (tmp_path / "capped_trace").read_text() == "LOAD 10\nADD 11\n"
        assert (tmp_path / "capped_memOut").exists()

    def test_breakpoint_flag(self, program, capsys):
        assert main([str(program), "-b", "0x02"]) == 0
        out = capsys.readouterr().out
        assert "Cycles Executed: 2" in out

    def test_listing(self, program, capsys):
        assert main([str(program), "--listing"]) == 0
        out = capsys.readouterr().out
        assert "00  010000010000  LOAD 10" in out
        assert "11  000000000111  OP0 07" in out

    def test_config_file(self, program, tmp_path, capsys):
        config = tmp_path / "run.yaml"
        config.write_text("max_cycles: 1\noutput_base: cfg\ntrace_suffix: .trc\n")
        assert main([str(program), "--config", str(config)]) == 0
        assert "Cycles Executed: 1" in capsys.readouterr().out
        assert (tmp_path / "cfg.trc").read_text() == "LOAD 10\n"

    def test_cli_flags_override_config(self, program, tmp_path, capsys):
        config = tmp_path / "run.yaml"
        config.write_text("max_cycles: 1\n")
        assert main([str(program), "--config", str(config), "-c", "3"]) == 0
        assert "Cycles Executed: 3" in capsys.readouterr().out

    # @intent:test_case_load_failure 読み込み失敗はERRORログ1件のみで報告され、出力ファイルが作られないことを検証します。
    def test_load_failure(self, tmp_path, monkeypatch, capsys, caplog):
        monkeypatch.chdir(tmp_path)
        bad = tmp_path / "bad.mem"
        bad.write_text("00000000\n")
        assert main([str(bad)]) == 1
        errors = [r.getMessage() for r in caplog.records if r.levelname == "ERROR"]
        assert len(errors) == 1
        assert errors[0].startswith("Failed to initialize memory from")
        # stderrに出る場合もログ行のみ
        for line in capsys.readouterr().err.splitlines():
            assert line.startswith("ERROR s12_core_tracer.core.cpu:")
        assert not (tmp_path / "bad_trace").exists()

    def test_invalid_config(self, program, tmp_path, capsys):
        config = tmp_path / "run.yaml"
        config.write_text("max_cycles: -1\n")
        assert main([str(program), "--config", str(config)]) == 1
        assert "Invalid run configuration" in capsys.readouterr().err

    def test_write_failure(self, program, tmp_path, capsys, caplog):
        assert main([str(program), "-o", str(tmp_path / "missing" / "out")]) == 1
        errors = [r.getMessage() for r in caplog.records if r.levelname == "ERROR"]
        assert len(errors) == 2
        assert errors[0].startswith("Failed to write memory snapshot")
        assert errors[1].startswith("Failed to write trace")
        captured = capsys.readouterr()
        for line in captured.err.splitlines():
            assert line.startswith("ERROR s12_core_tracer.core.cpu:")
        assert "Cycles Executed: 4" in captured.out

    @pytest.mark.parametrize("args", [[], ["x.mem", "-c", "0"], ["x.mem", "-c", "many"], ["x.mem", "-b", "zz"]])
    def test_usage_errors(self, args):
        with pytest.raises(SystemExit) as excinfo:
            main(args)
        assert excinfo.value.code == 2
