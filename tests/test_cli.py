"""
Tests for the command-line entry point.

Network access is never needed: these use data: and file: URLs.
"""

import pytest

from vanadium import cli


class TestMain:

    def test_renders_url(self, capsys):
        assert cli.main(["data:text/html,<b>hi &lt; there</b>"]) == 0
        assert capsys.readouterr().out == "hi < there"

    def test_view_source(self, capsys):
        assert cli.main(["view-source:data:text/html,<b>hi</b>"]) == 0
        assert capsys.readouterr().out == "     1 <b>hi</b>\n"

    def test_default_url_from_env(self, capsys, monkeypatch, tmp_path):
        path = tmp_path / "home.html"
        path.write_text("<h1>home</h1>\n", encoding="utf-8")
        monkeypatch.setenv("VANADIUM_DEFAULT_URL", f"file://{path}")

        assert cli.main([]) == 0
        assert capsys.readouterr().out == "home\n"

    def test_default_url_is_readme(self, capsys, monkeypatch, tmp_path):
        (tmp_path / "README.md").write_text("# readme\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert cli.main([]) == 0
        assert capsys.readouterr().out == "# readme\n"

    def test_failure_exit_status(self, capsys, tmp_path):
        url = f"file://{tmp_path / 'missing.html'}"
        assert cli.main([url]) == 1

        err = capsys.readouterr().err
        assert f"vanadium: {url}: File error" in err

    def test_unsupported_scheme(self, capsys):
        assert cli.main(["ftp://example.com/"]) == 1
        assert "unsupported scheme 'ftp'" in capsys.readouterr().err

    def test_invalid_env(self, capsys, monkeypatch):
        monkeypatch.setenv("VANADIUM_MAX_REDIRECTS", "lots")
        assert cli.main(["data:text/plain,x"]) == 2
        assert "max_redirects" in capsys.readouterr().err

    def test_negative_max_redirects(self, capsys):
        assert cli.main(["--max-redirects", "-1", "data:text/plain,x"]) == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--version"])
        assert exc_info.value.code == 0
        assert "vanadium 0.1.0" in capsys.readouterr().out


class TestParser:

    def test_options(self):
        parser = cli.build_parser(cli.ClientConfig())
        args = parser.parse_args(
            ["-v", "--max-redirects", "3", "--user-agent", "ua/1", "http://a.com/"]
        )
        assert args.verbose is True
        assert args.max_redirects == 3
        assert args.user_agent == "ua/1"
        assert args.url == "http://a.com/"

    def test_defaults(self):
        args = cli.build_parser(cli.ClientConfig()).parse_args([])
        assert args.url == "file://README.md"
        assert args.max_redirects is None
        assert args.verbose is False
