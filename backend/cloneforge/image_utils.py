"""Screenshot encoding: downscale oversized full-page captures, emit PNG data URIs."""
from PIL import Image
import io
import base64

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def limit_screenshot_size(screenshot_bytes: bytes, max_dim: int) -> bytes:
    """
    Downscale a PNG so neither side exceeds max_dim, keeping aspect ratio.
    Full-page captures of very long pages can run past 30k px tall.
    Returns the input unchanged when it already fits.
    """
    img = Image.open(io.BytesIO(screenshot_bytes))
    w, h = img.size
    if w <= max_dim and h <= max_dim:
        return screenshot_bytes

    scale = min(max_dim / w, max_dim / h)
    img = img.resize((max(1, int(w * scale)), max(1, int(h * scale))), Image.LANCZOS)
    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return buf.getvalue()


def screenshot_to_data_uri(screenshot_bytes: bytes, max_dim: int | None = None) -> str:
    if max_dim:
        screenshot_bytes = limit_screenshot_size(screenshot_bytes, max_dim)
    return PNG_DATA_URI_PREFIX + base64.b64encode(screenshot_bytes).decode()
