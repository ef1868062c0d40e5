"""Shared fixtures for html2txt tests."""

from __future__ import annotations

import pytest

from html2txt import Options
from html2txt.layout import BlockTextBuilder


@pytest.fixture()
def options() -> Options:
    """Default options; tests tweak them in place."""
    return Options()


@pytest.fixture()
def builder(options: Options) -> BlockTextBuilder:
    return BlockTextBuilder(options)


SAMPLE_HTML = """\
<!DOCTYPE html>
<html>
<head>
    <title>Test Page</title>
    <script>var x = 1;</script>
    <style>body { color: red; }</style>
</head>
<body>
    <p class="normal-space small">Hello <b>World</b></p>
    <table class="address">
        <tr><td>Street</td><td>Main St 1</td></tr>
        <tr><td>City</td><td>Springfield</td></tr>
    </table>
    <p class="normal-space">Second paragraph.</p>
    <p class="normal-space small">Third paragraph.</p>
</body>
</html>
"""


@pytest.fixture()
def sample_html() -> str:
    return SAMPLE_HTML
