import pytest

from main import build_parser, main

from tests.conftest import commit_file


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])

    assert exc_info.value.code == 0
    assert "ai-code-review version 0.0.1" in capsys.readouterr().out


def test_unknown_option_exits_with_one(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--target", "main", "--bogus"])

    assert exc_info.value.code == 1
    assert "unrecognized arguments: --bogus" in capsys.readouterr().err


def test_target_is_required(capsys):
    assert main([]) == 1

    captured = capsys.readouterr()
    assert "Target branch is required" in captured.err
    assert "usage: ai-code-review" in captured.out


def test_unsupported_language(capsys):
    assert main(["--target", "main", "--language", "xx"]) == 1

    captured = capsys.readouterr()
    assert "Unsupported language: xx" in captured.err
    assert "vi (Vietnamese)" in captured.out


def test_parser_defaults():
    args = build_parser().parse_args(["--target", "develop"])

    assert args.target == "develop"
    assert args.save_to is None
    assert not args.no_save
    assert args.language is None
    assert not (args.setup or args.repair)


def test_review_run_exit_codes(git_repo, fake_gemini, monkeypatch):
    monkeypatch.chdir(git_repo)
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "test-project")
    commit_file(git_repo, "app.py", "print('hello')\n", "Add app")

    assert main(["--target", "main", "--no-save"]) == 0

    (git_repo / "app.py").write_text("print('dirty')\n", encoding="utf-8")
    assert main(["--target", "main", "--no-save"]) == 1
