import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import printbook
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def frame():
    """A 400x600 solid red frame (4x6 in trim at 100 px/in)."""
    return Image.new("RGBA", (400, 600), (255, 0, 0, 255))


@pytest.fixture
def make_frames():
    """Factory for distinct solid-colour frames."""
    def _make(count: int, size=(400, 600)):
        return [
            Image.new("RGBA", size, ((i * 37) % 256, (i * 91) % 256, 200, 255))
            for i in range(count)
        ]
    return _make


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
