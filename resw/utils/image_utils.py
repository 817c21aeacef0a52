# resw/utils/image_utils.py
from PIL import Image, UnidentifiedImageError
import logging
import os
from typing import List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

# Sizes written into a generated .ico; Pillow skips the ones larger than the source image.
DEFAULT_ICON_SIZES: List[Tuple[int, int]] = [(16, 16), (24, 24), (32, 32), (48, 48), (64, 64), (128, 128), (256, 256)]


class ImageConversionError(Exception):
    """Custom exception for images Pillow cannot read or write."""
    pass


def _open_image(src_path: PathLike) -> Image.Image:
    try:
        with Image.open(src_path) as img:
            img.load()
            return img.copy()
    except UnidentifiedImageError as e:
        raise ImageConversionError(f"Cannot identify image format of '{os.fspath(src_path)}'.") from e


def convert_image_to_icon(src_path: PathLike, ico_path: PathLike,
                          sizes: Optional[Sequence[Tuple[int, int]]] = None) -> str:
    """
    Converts any image Pillow can read into a multi-size .ico file.
    Returns ico_path as a string, ready to be referenced by an ICON resource.
    """
    img = _open_image(src_path).convert("RGBA")
    requested = list(sizes) if sizes else DEFAULT_ICON_SIZES
    usable = [(w, h) for (w, h) in requested if w <= img.width and h <= img.height]
    if not usable:
        # Smaller than every requested size: keep the image at its own size.
        usable = [(img.width, img.height)]
    try:
        img.save(ico_path, format="ICO", sizes=usable)
    except (OSError, ValueError) as e:
        raise ImageConversionError(f"Error saving icon to '{os.fspath(ico_path)}': {e}") from e
    logger.info("Icon written to %s (sizes: %s).", os.fspath(ico_path), usable)
    return os.fspath(ico_path)


def convert_image_to_bitmap(src_path: PathLike, bmp_path: PathLike) -> str:
    """Converts any image Pillow can read into a 24-bit .bmp file. Transparency is dropped."""
    img = _open_image(src_path)
    if img.mode in ("RGBA", "LA", "P"):
        background = Image.new("RGB", img.size, (255, 255, 255))
        rgba = img.convert("RGBA")
        background.paste(rgba, mask=rgba.getchannel("A"))
        img = background
    else:
        img = img.convert("RGB")
    try:
        img.save(bmp_path, format="BMP")
    except (OSError, ValueError) as e:
        raise ImageConversionError(f"Error saving bitmap to '{os.fspath(bmp_path)}': {e}") from e
    logger.info("Bitmap written to %s (%dx%d).", os.fspath(bmp_path), img.width, img.height)
    return os.fspath(bmp_path)
