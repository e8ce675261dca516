"""Shared test helpers."""
import io

from PIL import Image


def make_png(color=(255, 0, 0), size=(4, 3)) -> bytes:
    """Encode a solid-colour RGB image as PNG bytes."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()
