import sys

import pytest

from urlshort import __main__ as runner
from urlshort.yamlconfig import ParseError


DOCUMENT = b"""
- path: /golang
  url: https://golang.org
"""


@pytest.fixture
def client():
    return runner.create_site(DOCUMENT).test_client()


def test_redirect(client):
    response = client.get("/golang")
    assert response.status_code == 302
    assert response.headers["Location"] == "https://golang.org"


@pytest.mark.parametrize("path", ["/", "/missing", "/golang/", "/a/b"])
def test_unknown_redirect(client, path):
    response = client.get(path)
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "unknown redirect"


def test_invalid_document():
    with pytest.raises(ParseError):
        runner.create_site(b"- path: /golang\n")


def test_main_runs_site(tmp_path, monkeypatch):
    paths = tmp_path / "paths.yaml"
    paths.write_bytes(DOCUMENT)
    calls = []
    monkeypatch.setattr("flask.Flask.run",
                        lambda site, **kw: calls.append((site, kw)))
    monkeypatch.setattr(sys, "argv",
                        ["urlshort", "--port", "9090", str(paths)])

    runner.main()

    (site, kw), = calls
    assert kw == {"host": "127.0.0.1", "port": 9090}
    assert site.test_client().get("/golang").status_code == 302


def test_main_refuses_invalid_file(tmp_path, monkeypatch):
    paths = tmp_path / "paths.yaml"
    paths.write_bytes(b"- path: /golang\n  link: https://golang.org\n")
    monkeypatch.setattr("flask.Flask.run",
                        lambda site, **kw: pytest.fail("site must not run"))
    monkeypatch.setattr(sys, "argv", ["urlshort", str(paths)])

    with pytest.raises(ParseError):
        runner.main()
