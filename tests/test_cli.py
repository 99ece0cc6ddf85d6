"""Tests for summarist/cli.py — argument parsing and startup behaviour."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from summarist.cli import _build_parser, build_controller, main
from summarist.models import Config, ConfigError, SessionState


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def test_parser_defaults():
    with patch.dict(os.environ, {}, clear=False):
        os.environ.pop("SUMMARIST_MODEL", None)
        args = _build_parser().parse_args([])
    assert args.model == "gemini-2.0-flash"
    assert args.base_url == "https://generativelanguage.googleapis.com/v1beta/openai/"
    assert args.extractor == "auto"
    assert args.output_dir == "."
    assert args.timeout == 120
    assert args.verbose is False
    assert args.log_file is None
    assert args.smtp_host == "smtp.gmail.com"
    assert args.smtp_port == 465


def test_parser_model_env_var_used_as_default():
    with patch.dict(os.environ, {"SUMMARIST_MODEL": "env-model"}):
        args = _build_parser().parse_args([])
    assert args.model == "env-model"


def test_parser_rejects_non_positive_timeout():
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["--timeout", "0"])


def test_parser_rejects_unknown_extractor():
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["--extractor", "ocr"])


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


def test_main_exits_when_api_key_missing(tmp_path, capsys):
    with (
        patch("sys.argv", ["summarist", "--log-file", str(tmp_path / "run.log")]),
        patch("summarist.cli.load_dotenv"),
        patch.dict(os.environ, {}, clear=True),
    ):
        with pytest.raises(SystemExit) as exc_info:
            main()
    assert exc_info.value.code == 1
    assert "GEMINI_API_KEY" in capsys.readouterr().err


def test_main_builds_config_from_flags_and_runs(tmp_path):
    with (
        patch(
            "sys.argv",
            [
                "summarist",
                "--log-file",
                str(tmp_path / "run.log"),
                "--output-dir",
                str(tmp_path / "out"),
                "--extractor",
                "pypdf",
                "--timeout",
                "30",
                "--smtp-port",
                "2465",
            ],
        ),
        patch("summarist.cli.load_dotenv"),
        patch("summarist.cli.build_controller") as mock_build,
    ):
        main()

    config = mock_build.call_args[0][0]
    assert config.output_dir == Path(tmp_path / "out")
    assert config.extractor == "pypdf"
    assert config.timeout_s == 30
    assert config.smtp_port == 2465
    mock_build.return_value.run.assert_called_once_with()


def test_main_writes_log_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    with (
        patch("sys.argv", ["summarist", "--log-file", str(log_file)]),
        patch("summarist.cli.load_dotenv"),
        patch("summarist.cli.build_controller"),
    ):
        main()
    assert log_file.exists()


# ---------------------------------------------------------------------------
# build_controller
# ---------------------------------------------------------------------------


def test_build_controller_wires_collaborators():
    config = Config(api_key="k", smtp_host="smtp.test", smtp_port=2465)
    with (
        patch("summarist.llm._openai.OpenAI"),
        patch("summarist.cli.LexiconSentimentScorer") as MockScorer,
        patch("summarist.cli.SpacyKeywordExtractor") as MockExtractor,
    ):
        controller = build_controller(config)

    assert controller.state is SessionState.MAIN_MENU
    assert controller.scorer is MockScorer.return_value
    assert controller.keyword_extractor is MockExtractor.return_value
    assert controller.mail_sender.host == "smtp.test"
    assert controller.mail_sender.port == 2465
    assert controller.session.generator.model == config.model


def test_build_controller_propagates_missing_analysis_model():
    with (
        patch("summarist.llm._openai.OpenAI"),
        patch("summarist.cli.LexiconSentimentScorer"),
        patch(
            "summarist.cli.SpacyKeywordExtractor",
            side_effect=ConfigError("spaCy model 'en_core_web_sm' is not installed"),
        ),
    ):
        with pytest.raises(ConfigError):
            build_controller(Config(api_key="k"))
