"""
Tests for excsig/main.py - the command-line demonstration.
"""

from excsig.main import build_parser, main


class TestMain:
    """Tests for the demo entry point."""

    def test_parser_defaults(self):
        """Test argument defaults."""
        args = build_parser().parse_args([])
        assert args.no_preprocess is False
        assert args.origin_only is False
        assert args.no_inner is False
        assert args.config is None

    def test_prints_signature(self, capsys):
        """Test the demo prints the message and signature."""
        assert main(["--quiet"]) == 0
        out = capsys.readouterr().out
        assert "Signature" in out
        assert "Could not complete action" in out

    def test_output_is_deterministic(self, capsys):
        """Test that two runs print the same signature."""
        main(["--quiet", "--digest"])
        first = capsys.readouterr().out
        main(["--quiet", "--digest"])
        second = capsys.readouterr().out
        assert first == second
        assert "Digest" in first

    def test_options_change_signature(self, capsys):
        """Test that configuration flags affect the result."""
        main(["--quiet"])
        default = capsys.readouterr().out
        main(["--quiet", "--no-inner"])
        no_inner = capsys.readouterr().out
        assert default != no_inner

    def test_bad_config(self, tmp_path, capsys):
        """Test that an unreadable config file returns an error code."""
        path = tmp_path / "bad.json"
        path.write_text("{oops")
        assert main(["--config", str(path)]) == 1
        assert "Error loading config" in capsys.readouterr().out
