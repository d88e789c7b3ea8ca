import os
import pytest

import bkmerge.config


@pytest.fixture(autouse=True)
def clean_bkmerge_env(monkeypatch, tmp_path):
    """
    Isolate every test from real configuration.

    Removes BKMERGE_ environment variables, points HOME at a temp
    directory, runs from tmp_path and drops the cached global config.
    """
    for key in list(os.environ.keys()):
        if key.startswith("BKMERGE_"):
            monkeypatch.delenv(key, raising=False)

    mock_home = tmp_path / "home"
    mock_home.mkdir()
    monkeypatch.setenv("HOME", str(mock_home))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(bkmerge.config, "_config", None)

    return tmp_path


@pytest.fixture
def sample_html_bookmarks():
    """Sample HTML bookmarks in Netscape format."""
    return """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3>Programming</H3>
    <DL><p>
        <DT><A HREF="https://www.python.org/" ADD_DATE="1677247196" ICON="data:image/png;base64,iVBORw0KGg...">Python.org</A>
        <DT><A HREF="https://docs.python.org/" ADD_DATE="1677247196" TAGS="python,docs">Python Documentation</A>
    </DL><p>
    <DT><H3>Tools</H3>
    <DL><p>
        <DT><A HREF="https://github.com/" ADD_DATE="1678969800" ICON="data:image/png;base64,iVBORw0KGg...">GitHub</A>
    </DL><p>
</DL><p>
"""


@pytest.fixture
def second_html_bookmarks():
    """A second export overlapping the first on one URL."""
    return """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3>Work</H3>
    <DL><p>
        <DT><A HREF="https://github.com/">Code</A>
        <DT><A HREF="https://news.ycombinator.com/">Hacker News</A>
    </DL><p>
</DL><p>
"""


@pytest.fixture
def write_export(tmp_path):
    """
    Factory writing a bookmark export into tmp_path.

    Usage:
        path = write_export("chrome.html", html)
    """
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write
