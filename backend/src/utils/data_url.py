"""Read local image files into `data:` URLs for upload."""

import base64
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from src.exceptions import ValidationError


def image_to_data_url(path: str | Path) -> str:
    """Return `data:<mime>;base64,<payload>` for an image file.

    Raises:
        ValidationError: the file is missing or is not an image Pillow can read
    """
    p = Path(path)
    if not p.is_file():
        raise ValidationError(f"File not found: {p.name}", field="file")

    try:
        with Image.open(p) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(f"Not an image file: {p.name}", field="file") from e

    mime_type = Image.MIME.get(image_format or "", "application/octet-stream")
    payload = base64.b64encode(p.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{payload}"
