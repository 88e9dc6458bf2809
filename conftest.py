import pytest


@pytest.fixture
def svg_file(tmp_path):
    """Write markup to an .svg file in a temporary directory and return its path."""

    def make(text: str, name: str = "drawing.svg"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return make
