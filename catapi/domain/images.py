"""Uploaded cat images: storage, thumbnails and GPS location from EXIF."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Mapping, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from catapi.core.errors import BadRequestError

logger = logging.getLogger(__name__)

GPS_IFD = 0x8825
_GPS_LAT_REF, _GPS_LAT, _GPS_LNG_REF, _GPS_LNG = 1, 2, 3, 4
THUMBNAIL_SIZE = (160, 160)
ALLOWED_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


@dataclass
class StoredImage:
    filename: str
    path: Path
    gps: Optional[Tuple[float, float]]  # (lng, lat)


def _dms_to_degrees(value: Any) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    degrees, minutes, seconds = (float(part) for part in value)
    return degrees + minutes / 60.0 + seconds / 3600.0


def gps_to_point(gps: Mapping[int, Any] | None) -> Optional[Tuple[float, float]]:
    """Convert an EXIF GPS IFD into ``(lng, lat)``; None when incomplete."""
    if not gps:
        return None
    try:
        lat = _dms_to_degrees(gps[_GPS_LAT])
        lng = _dms_to_degrees(gps[_GPS_LNG])
    except (KeyError, TypeError, ValueError, ZeroDivisionError):
        return None
    if str(gps.get(_GPS_LAT_REF, "N")).upper().startswith("S"):
        lat = -lat
    if str(gps.get(_GPS_LNG_REF, "E")).upper().startswith("W"):
        lng = -lng
    return lng, lat


def thumbnail_name(filename: str) -> str:
    return f"{Path(filename).stem}_thumb.png"


def store_image(upload: BinaryIO, original_name: str, uploads_dir: str | Path) -> StoredImage:
    """
    Persist an uploaded image under a random name and write its thumbnail.

    Raises BadRequestError when the payload is not an image Pillow can read.
    """
    suffix = Path(original_name or "").suffix.lower()
    if suffix not in ALLOWED_SUFFIXES:
        raise BadRequestError("Only image files are allowed")

    target_dir = Path(uploads_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{secrets.token_hex(16)}{suffix}"
    path = target_dir / filename
    with path.open("wb") as handle:
        for chunk in iter(lambda: upload.read(1024 * 1024), b""):
            handle.write(chunk)

    try:
        with Image.open(path) as img:
            gps = gps_to_point(img.getexif().get_ifd(GPS_IFD))
            thumb = ImageOps.exif_transpose(img)
            # PNG cannot hold CMYK or YCbCr
            thumb = thumb.convert("RGBA" if "A" in thumb.getbands() else "RGB")
            thumb.thumbnail(THUMBNAIL_SIZE, Image.LANCZOS)
            thumb.save(target_dir / thumbnail_name(filename), format="PNG")
    except (UnidentifiedImageError, OSError) as exc:
        path.unlink(missing_ok=True)
        raise BadRequestError("Only image files are allowed") from exc

    logger.info("Stored upload %s (gps=%s)", filename, gps)
    return StoredImage(filename=filename, path=path, gps=gps)


def discard_image(stored: StoredImage) -> None:
    """Remove an upload and its thumbnail, e.g. when the cat insert fails."""
    stored.path.unlink(missing_ok=True)
    (stored.path.parent / thumbnail_name(stored.filename)).unlink(missing_ok=True)
    logger.info("Discarded upload %s", stored.filename)
