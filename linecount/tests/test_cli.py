"""
Copyright (c) 2025. All rights reserved.
"""

"""
Tests for the command line entry point, in process and as a subprocess.
"""

import os
import subprocess
import sys

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

import pytest

from linecount.cli import main, parse_arguments
from linecount.configs import SortOrder

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
SAMPLE = b"b\nc\na\nb\nb\nc\n"


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_bytes(SAMPLE)
    return str(path)


def run_cli(args, input_bytes=None, extra_env=None):
    env = dict(os.environ)
    env.update(extra_env or {})
    env["PYTHONPATH"] = REPO_ROOT + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, "-m", "linecount", *args],
        input=input_bytes,
        capture_output=True,
        env=env,
        timeout=60,
    )


class TestParseArguments:
    """Test suite for parse_arguments."""

    def test_defaults(self):
        args = parse_arguments([])
        assert args.sort_by is SortOrder.COUNT
        assert args.max_items is None
        assert args.num_workers is None
        assert args.input is None
        assert not args.verbose

    def test_short_flags(self):
        args = parse_arguments(["-s", "KEY", "-m", "5", "-w", "2", "-v", "in.txt"])
        assert args.sort_by is SortOrder.KEY
        assert args.max_items == 5
        assert args.num_workers == 2
        assert args.verbose
        assert args.input == "in.txt"

    def test_long_flags(self):
        args = parse_arguments(["--sort-by", "none", "--max-items", "1"])
        assert args.sort_by is SortOrder.NONE
        assert args.max_items == 1

    @pytest.mark.parametrize(
        "argv",
        [
            ["--sort-by", "frequency"],
            ["--max-items", "0"],
            ["--max-items", "-1"],
            ["--max-items", "ten"],
            ["--num-workers", "0"],
        ],
    )
    def test_invalid_arguments(self, argv, capsys):
        with pytest.raises(SystemExit) as excinfo:
            parse_arguments(argv)
        assert excinfo.value.code == 2


class TestMain:
    """Test suite for main, run in process."""

    def test_count_order(self, sample_file, capsys):
        assert main([sample_file]) == 0
        assert capsys.readouterr().out == "b\t3\nc\t2\na\t1\n"

    def test_key_order_with_limit(self, sample_file, capsys):
        assert main(["--sort-by", "key", "--max-items", "2", sample_file]) == 0
        assert capsys.readouterr().out == "a\t1\nb\t3\n"

    def test_missing_input(self, tmp_path, capsys):
        assert main([str(tmp_path / "no_test_file_here")]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_utf8(self, tmp_path, capsys):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\n")
        assert main([str(path)]) == 1


class TestSubprocess:
    """End-to-end tests running python -m linecount."""

    def test_file_input(self, sample_file):
        result = run_cli([sample_file])
        assert result.returncode == 0
        assert result.stdout == b"b\t3\nc\t2\na\t1\n"
        assert result.stderr == b""

    def test_standard_input(self):
        result = run_cli(["-s", "key", "-m", "2"], input_bytes=SAMPLE)
        assert result.returncode == 0
        assert result.stdout == b"a\t1\nb\t3\n"

    def test_missing_input(self, tmp_path):
        result = run_cli([str(tmp_path / "no_test_file_here")])
        assert result.returncode != 0
        assert result.stdout == b""
        assert b"no_test_file_here" in result.stderr

    def test_invalid_utf8_reports_error(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"good\ngood\n\xc3\x28\n")
        result = run_cli([str(path)])
        assert result.returncode == 1
        assert result.stdout == b"good\t2\n"
        assert b"not valid UTF-8" in result.stderr

    @pytest.mark.parametrize("encoding", ["latin-1", "ascii"])
    def test_output_is_utf8_whatever_the_locale(self, tmp_path, encoding):
        """Report bytes are UTF-8 with LF endings even when stdout defaults differ."""
        path = tmp_path / "unicode.txt"
        path.write_bytes("日本\n日本\né\n".encode("utf-8"))
        result = run_cli([str(path)], extra_env={"PYTHONIOENCODING": encoding})
        assert result.returncode == 0, result.stderr
        assert result.stdout == "日本\t2\né\t1\n".encode("utf-8")
        assert result.stderr == b""

    def test_verbose_logs_to_stderr(self, sample_file):
        result = run_cli(["-v", sample_file])
        assert result.returncode == 0
        assert result.stdout == b"b\t3\nc\t2\na\t1\n"
        assert b"Counted 6 records" in result.stderr

    def test_closed_output_is_not_an_error(self, tmp_path):
        """Closing the read end of stdout early ends the run successfully."""
        path = tmp_path / "many.txt"
        path.write_bytes(b"".join(f"line {i}\n".encode() for i in range(200000)))

        env = dict(os.environ)
        env["PYTHONPATH"] = REPO_ROOT + os.pathsep + env.get("PYTHONPATH", "")
        proc = subprocess.Popen(
            [sys.executable, "-m", "linecount", "-s", "key", str(path)],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
        )
        first_line = proc.stdout.readline()
        proc.stdout.close()
        stderr = proc.stderr.read()
        proc.stderr.close()
        returncode = proc.wait(timeout=60)

        assert first_line == b"line 0\t1\n"
        assert returncode == 0
        assert stderr == b""
