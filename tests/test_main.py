"""
Tests for configuration loading and the command line entry point.
"""
import builtins
import re

import pytest
from pydantic import ValidationError

from s256code.main import main, parse_args
from s256code.utils import pkce
from s256code.utils.config import ConfigLoader
from s256code.utils.logger import get_logger
from s256code.utils.pkce import derive, validate


def printed_pair(out: str):
    """Prompts have no trailing newline, so labels may share a line with them."""
    verifier = re.search(r"codeVerifier = (\S+)", out)
    challenge = re.search(r"challenge    = (\S+)", out)
    assert verifier and challenge
    return verifier.group(1), challenge.group(1)


class TestConfigLoader:
    """Test settings defaults and environment overrides."""

    def test_defaults(self):
        config = ConfigLoader().get_config()
        assert config.entropy_bytes == 64
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("S256CODE_ENTROPY", "32")
        monkeypatch.setenv("S256CODE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("S256CODE_LOG_FILE", str(tmp_path / "tool.log"))
        config = ConfigLoader().get_config()
        assert config.entropy_bytes == 32
        assert config.log_level == "DEBUG"
        assert config.log_file == str(tmp_path / "tool.log")

    def test_empty_values_ignored(self, monkeypatch):
        monkeypatch.setenv("S256CODE_ENTROPY", "")
        assert ConfigLoader().get_config().entropy_bytes == 64

    def test_dotenv_file(self, monkeypatch, tmp_path):
        dotenv = tmp_path / ".env"
        dotenv.write_text("S256CODE_ENTROPY=48\n")
        assert ConfigLoader(str(dotenv)).get_config().entropy_bytes == 48
        monkeypatch.delenv("S256CODE_ENTROPY")

    def test_invalid_entropy_value(self, monkeypatch):
        monkeypatch.setenv("S256CODE_ENTROPY", "lots")
        with pytest.raises(ValidationError):
            ConfigLoader()

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("S256CODE_LOG_LEVEL", "warning")
        assert ConfigLoader().get_config().log_level == "WARNING"

    def test_unknown_log_level(self, monkeypatch):
        """Unknown levels fail while the configuration loads."""
        monkeypatch.setenv("S256CODE_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            ConfigLoader()


class TestLogger:
    """Test the rich backed logger."""

    def test_file_output(self, tmp_path):
        log_file = tmp_path / "tool.log"
        logger = get_logger(name="s256code-test", level="DEBUG", log_file=str(log_file))
        logger.section("Deriving challenge")
        logger.success("done")
        logger.failure("broken")
        logger.close()
        text = log_file.read_text()
        assert "Deriving challenge" in text
        assert "✓ done" in text
        assert "ERROR - ✗ broken" in text

    def test_level_filtering(self, tmp_path):
        log_file = tmp_path / "tool.log"
        logger = get_logger(name="s256code-test", level="WARNING", log_file=str(log_file))
        logger.info("hidden")
        logger.warning("shown")
        logger.close()
        text = log_file.read_text()
        assert "hidden" not in text
        assert "shown" in text


class TestParseArgs:
    """Test command line parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert not args.generate
        assert args.verifier is None
        assert args.entropy is None

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--generate", "--verifier", "x" * 43])


class TestMain:
    """Test end to end runs and exit codes."""

    def test_generate(self, capsys):
        assert main(["--generate"]) == 0
        verifier, challenge = printed_pair(capsys.readouterr().out)
        assert len(verifier) == 86
        assert derive(validate(verifier)).value == challenge

    def test_generate_with_entropy(self, capsys):
        assert main(["--generate", "--entropy", "96"]) == 0
        verifier, _ = printed_pair(capsys.readouterr().out)
        assert len(verifier) == 128

    def test_generate_entropy_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("S256CODE_ENTROPY", "32")
        assert main(["--generate"]) == 0
        verifier, _ = printed_pair(capsys.readouterr().out)
        assert len(verifier) == 43

    @pytest.mark.parametrize("entropy", ["31", "97"])
    def test_generate_entropy_out_of_range(self, capsys, entropy):
        assert main(["--generate", "--entropy", entropy]) == 1
        assert "codeVerifier = " not in capsys.readouterr().out

    def test_verifier(self, capsys, rfc_vector):
        assert main(["--verifier", rfc_vector["verifier"]]) == 0
        assert printed_pair(capsys.readouterr().out) == (rfc_vector["verifier"], rfc_vector["challenge"])

    def test_invalid_verifier(self, capsys):
        assert main(["--verifier", "too-short"]) == 1
        assert "challenge" not in capsys.readouterr().out

    def test_hash_unavailable(self, monkeypatch, rfc_vector):
        def no_hash(name, *args, **kwargs):
            raise ValueError(f"unsupported hash type {name}")

        monkeypatch.setattr(pkce.hashlib, "new", no_hash)
        assert main(["--verifier", rfc_vector["verifier"]]) == 2

    def test_invalid_configuration(self, monkeypatch):
        monkeypatch.setenv("S256CODE_ENTROPY", "lots")
        assert main(["--generate"]) == 1

    def test_unknown_log_level(self, capsys, monkeypatch):
        monkeypatch.setenv("S256CODE_LOG_LEVEL", "LOUD")
        assert main(["--generate"]) == 1
        assert "codeVerifier = " not in capsys.readouterr().out

    def test_log_file_in_missing_directory(self, capsys, tmp_path):
        log_file = tmp_path / "missing" / "tool.log"
        assert main(["--generate", "--log-file", str(log_file)]) == 1
        assert "codeVerifier = " not in capsys.readouterr().out

    def test_log_file(self, tmp_path, rfc_vector):
        log_file = tmp_path / "tool.log"
        assert main(["--verifier", rfc_vector["verifier"], "--log-file", str(log_file)]) == 0
        assert "Deriving challenge" in log_file.read_text()

    def test_interactive(self, capsys, monkeypatch, rfc_vector):
        lines = iter(["2", rfc_vector["verifier"]])
        monkeypatch.setattr(builtins, "input", lambda *args: next(lines))
        assert main([]) == 0
        assert printed_pair(capsys.readouterr().out) == (rfc_vector["verifier"], rfc_vector["challenge"])

    def test_interactive_exit(self, capsys, monkeypatch):
        monkeypatch.setattr(builtins, "input", lambda *args: "0")
        assert main([]) == 0
        assert "codeVerifier = " not in capsys.readouterr().out
