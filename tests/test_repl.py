import builtins
from collections.abc import Iterator

import pytest

from monkey import monkey_repl
from monkey.monkey_repl import eval_source, read_source, start_repl


def feed(monkeypatch: pytest.MonkeyPatch, *lines: str) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(_prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_repl_quit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "quit")
    start_repl()
    assert "Exiting Monkey REPL" in capsys.readouterr().out


def test_repl_exit(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch, "exit")
    start_repl()
    assert "Exiting Monkey REPL" in capsys.readouterr().out


def test_repl_eof_exits(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    feed(monkeypatch)
    start_repl()
    assert "Exiting Monkey REPL" in capsys.readouterr().out


def test_repl_prints_rendering(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "   ", "a + b * c", "quit")
    start_repl()
    assert "[ok] >>> (a + (b * c))" in capsys.readouterr().out


def test_repl_prints_parser_errors(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "let 5;", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>> parser errors:" in out
    assert "expected next token to be IDENT, got INT instead" in out


def test_repl_multiline_block(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "if (x) {", "  y", "} else {", "  z", "}", "quit")
    start_repl()
    assert "[ok] >>> ifx yelse z" in capsys.readouterr().out


def test_read_source_returns_none_on_quit(monkeypatch: pytest.MonkeyPatch) -> None:
    feed(monkeypatch, "quit")
    assert read_source() is None


def test_read_source_quit_inside_block_is_source(monkeypatch: pytest.MonkeyPatch) -> None:
    feed(monkeypatch, "fn() {", "quit", "}")
    assert read_source() == "fn() {\nquit\n}"


def test_verbose_mode_toggle(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    feed(monkeypatch, "verbose-mode", "x", "verbose-mode", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[mode] >>> Verbose mode ON" in out
    assert "[token] >>> IDENT 'x'" in out
    assert "[mode] >>> Verbose mode OFF" in out


def test_eval_source_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    eval_source("!5", verbose=True)
    out = capsys.readouterr().out
    assert "[token] >>> ! '!'" in out
    assert "[token] >>> EOF ''" in out
    assert "[ok] >>> (!5)" in out


def test_repl_survives_internal_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def boom(src: str, verbose: bool = False) -> None:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(monkey_repl, "eval_source", boom)
    feed(monkeypatch, "x", "quit")
    start_repl()
    out = capsys.readouterr().out
    assert "[error] >>>" in out
    assert "kaboom" in out
    assert "Exiting Monkey REPL" in out
