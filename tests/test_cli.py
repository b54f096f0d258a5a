import json

import pytest

from authorcheck.cli import _load_text, build_parser, main


def test_load_text_requires_one_source(tmp_path):
    with pytest.raises(ValueError):
        _load_text(None, None)
    with pytest.raises(ValueError):
        _load_text("hello", str(tmp_path / "a.txt"))


def test_load_text_reads_text_file(tmp_path):
    path = tmp_path / "essay.md"
    path.write_text("# Draft\n\nSome words here.", encoding="utf-8")

    assert _load_text(None, str(path)) == "# Draft\n\nSome words here."


def test_parser_analyze_options():
    args = build_parser().parse_args(
        ["analyze", "--text", "hi", "--no-ai", "--timeout", "9000", "--fallback-mode", "heuristic"]
    )

    assert args.command == "analyze"
    assert args.no_ai is True
    assert args.timeout == 9000
    assert args.fallback_mode == "heuristic"


def test_parser_rejects_unknown_fallback_mode():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["analyze", "--text", "hi", "--fallback-mode", "random"])


def test_analyze_without_ai_prints_statistics(tmp_path, capsys):
    output = tmp_path / "out" / "result.json"

    main(["analyze", "--text", "The cat sat. The dog ran.", "--no-ai", "--output-file", str(output)])

    printed = json.loads(capsys.readouterr().out)
    assert printed["wordCount"] == 6
    assert printed["sentenceCount"] == 2
    assert printed["aiAnalysis"]["aiOrHuman"] == "unknown"
    assert json.loads(output.read_text(encoding="utf-8")) == printed


def test_analyze_missing_input_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["analyze", "--no-ai"])

    assert exc.value.code == 2
    assert "Provide --text or --input-file." in capsys.readouterr().err


def test_serve_leaves_logging_to_the_app(monkeypatch):
    import uvicorn

    from authorcheck import cli

    runs = []
    configured = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: runs.append((app, kwargs)))
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: configured.append(kwargs))

    main(["serve", "--port", "9001"])

    assert runs == [("authorcheck.main:app", {"host": "127.0.0.1", "port": 9001, "reload": False})]
    assert configured == []


def test_analyze_logs_warnings_to_stderr(monkeypatch, capsys):
    import logging
    import sys

    from authorcheck import cli

    configured = []
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: configured.append(kwargs))

    main(["analyze", "--text", "Hello there.", "--no-ai"])

    assert configured == [{"level": logging.WARNING, "stream": sys.stderr}]
    assert json.loads(capsys.readouterr().out)["wordCount"] == 2
