## linebasic — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def run_cli(*cli_args: str | Path, stdin: str = "", cwd: Path | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "linebasic", "--plain"]
    args.extend(str(arg) for arg in cli_args)
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(repo_root() / "src"), env.get("PYTHONPATH")]))
    return subprocess.run(args, input=stdin, capture_output=True, text=True, env=env, cwd=cwd)


def test_cli_runs_file(tmp_path):
    script = tmp_path / "hello.bas"
    script.write_text('20 PRINT "world"\n10 PRINT "hello"\n30 END\n', encoding="utf-8")
    result = run_cli(script)
    assert result.returncode == 0
    assert result.stdout == "hello\nworld\n"


def test_cli_file_input_reads_stdin(tmp_path):
    script = tmp_path / "add.bas"
    script.write_text('10 INPUT A, B\n20 PRINT A + B\n30 END\n', encoding="utf-8")
    result = run_cli("run-file", script, stdin="2, 3\n")
    assert result.returncode == 0
    assert result.stdout == "5\n"


def test_cli_piped_stdin_is_typed_lines():
    result = run_cli(stdin='10 PRINT 6 * 7\n20 END\nRUN\nLIST\n')
    assert result.returncode == 0
    assert result.stdout == "42\n10 PRINT 6 * 7\n20 END\n"


def test_cli_runtime_error_exit_code(tmp_path):
    script = tmp_path / "fault.bas"
    script.write_text('10 PRINT "before"\n20 GOTO 99\n', encoding="utf-8")
    result = run_cli(script)
    assert result.returncode != 0
    assert "before" in result.stdout
    assert "ERROR." in result.stdout
    assert "Line 99 is not defined" in result.stdout


def test_cli_syntax_error_shows_caret():
    result = run_cli("run-stdin", stdin='PRINT 1 @ 2\n')
    assert result.returncode != 0
    assert "Syntax error at column 9" in result.stdout
    assert "    PRINT 1 @ 2\n            ^" in result.stdout


def test_cli_ignore_flag_forces_success():
    result = run_cli("--ignore", stdin='GOTO 5\n')
    assert result.returncode == 0


def test_cli_save_writes_into_working_directory(tmp_path):
    result = run_cli(stdin='10 END\nSAVE "out.bas"\n', cwd=tmp_path)
    assert result.returncode == 0
    assert (tmp_path / "out.bas").read_text(encoding="utf-8") == "10 END\n"


def test_cli_verbose_traces_each_line(tmp_path):
    script = tmp_path / "trace.bas"
    script.write_text('10 LET A = 4\n20 END\n', encoding="utf-8")
    result = run_cli("-vv", script)
    assert result.returncode == 0
    assert "   10 :  LET A = 4" in result.stdout
    assert "A=4" in result.stdout
    assert "   20 :  END" in result.stdout


def test_cli_stats_reports_steps(tmp_path):
    script = tmp_path / "loop.bas"
    script.write_text('10 PRINT 1\n20 END\n', encoding="utf-8")
    result = run_cli("--stats", script)
    assert result.returncode == 0
    assert "STATISTICS." in result.stdout
    assert "step\t2" in result.stdout
