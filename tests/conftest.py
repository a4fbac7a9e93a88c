from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from iconiic.engine import SourceImage


@pytest.fixture
def source_png(tmp_path: Path) -> Path:
    path = tmp_path / "a.png"
    image = Image.new("RGBA", (64, 48), (255, 0, 0, 255))
    image.putpixel((0, 0), (0, 0, 255, 255))
    image.save(path, format="PNG")
    return path


@pytest.fixture
def source_image() -> SourceImage:
    return SourceImage(Path("a.png"), Image.new("RGBA", (64, 48), (255, 0, 0, 255)))
