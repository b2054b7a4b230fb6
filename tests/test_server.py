"""
Tests for the server entry point's command line.
"""

from chuk_mcp_fretboard.server import build_parser


class TestArguments:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """Defaults run stdio without preloading."""
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.voicings_dir is None
        assert args.preload is False
        assert args.debug is False

    def test_http_with_options(self) -> None:
        """All options parse together."""
        args = build_parser().parse_args(
            ["--transport", "http", "--port", "9000", "--voicings-dir", "~/shapes", "--preload"]
        )
        assert args.transport == "http"
        assert args.port == 9000
        assert args.voicings_dir == "~/shapes"
        assert args.preload is True
