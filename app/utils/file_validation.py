"""Image upload validation with MIME + magic byte dual verification.

Security measures:
- Content-Type header check against the image allowlist
- Magic byte detection for real file type verification
- File size limit
- Random object names (original filename never reaches storage)
"""
import io
import logging
import secrets
import time

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_MIMES: list[str] = ["image/jpeg", "image/png", "image/gif", "image/webp"]

EXTENSION_MAP: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

# Magic byte signatures for file type detection
MAGIC_SIGNATURES: dict[str, list[tuple[bytes, int]]] = {
    "image/jpeg": [(b"\xff\xd8\xff", 0)],
    "image/png": [(b"\x89PNG\r\n\x1a\n", 0)],
    "image/gif": [(b"GIF87a", 0), (b"GIF89a", 0)],
    "image/webp": [(b"RIFF", 0)],  # RIFF....WEBP
}

# Bucket -> square edge in pixels; buckets not listed are stored as uploaded
SQUARE_CROP_SIZES: dict[str, int] = {
    "advisor-headshots": 600,
}


class FileValidationError(ValueError):
    """Raised when file validation fails."""
    pass


def detect_mime_by_magic(file_bytes: bytes) -> str | None:
    """Detect MIME type by examining magic bytes."""
    if len(file_bytes) < 12:
        return None

    for mime, signatures in MAGIC_SIGNATURES.items():
        for magic_bytes, offset in signatures:
            end = offset + len(magic_bytes)
            if file_bytes[offset:end] == magic_bytes:
                if mime == "image/webp" and file_bytes[8:12] != b"WEBP":
                    continue
                return mime

    return None


def validate_content_type(content_type: str) -> None:
    """Validate Content-Type header against allowlist."""
    if content_type not in ALLOWED_IMAGE_MIMES:
        raise FileValidationError(
            f"Invalid content type '{content_type}'. "
            f"Allowed: {', '.join(ALLOWED_IMAGE_MIMES)}"
        )


def validate_magic_bytes(file_bytes: bytes, content_type: str) -> str:
    """Verify magic bytes match the declared content type; return the detected MIME."""
    detected = detect_mime_by_magic(file_bytes)
    if detected is None:
        raise FileValidationError("Cannot determine file type from magic bytes")
    if detected != content_type:
        raise FileValidationError(
            f"MIME mismatch: header={content_type}, detected={detected}"
        )
    return detected


def validate_file_size(size: int, max_size: int) -> None:
    """Validate file size against the limit."""
    if size == 0:
        raise FileValidationError("File is empty")
    if size > max_size:
        max_mb = max_size / (1024 * 1024)
        raise FileValidationError(f"File too large: {size} bytes (max: {max_mb:.0f} MB)")


def generate_object_name(content_type: str) -> str:
    """Random object name: ``<epoch-ms>-<random>.<ext>``."""
    ext = EXTENSION_MAP.get(content_type, "bin")
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"


def validate_image(file_bytes: bytes, content_type: str, max_size: int) -> str:
    """Full validation pipeline for an uploaded image.

    Returns:
        The MIME type confirmed by magic bytes.

    Raises:
        FileValidationError: If any validation fails
    """
    validate_content_type(content_type)
    validate_file_size(len(file_bytes), max_size)
    return validate_magic_bytes(file_bytes, content_type)


def crop_to_square(file_bytes: bytes, size: int) -> bytes:
    """Centre-crop an image to a square and resize it to ``size`` pixels.

    Returns the original bytes when the image cannot be processed.
    """
    from PIL import Image, UnidentifiedImageError

    try:
        img = Image.open(io.BytesIO(file_bytes))
        fmt = img.format or "PNG"
        edge = min(img.width, img.height)
        left = (img.width - edge) // 2
        top = (img.height - edge) // 2
        img = img.crop((left, top, left + edge, top + edge))
        if edge > size:
            img = img.resize((size, size), Image.LANCZOS)

        if fmt == "JPEG" and img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        output = io.BytesIO()
        img.save(output, format=fmt)
        return output.getvalue()
    except (UnidentifiedImageError, OSError, ValueError):
        logger.warning("Image crop failed, storing original")
        return file_bytes


def prepare_image(file_bytes: bytes, bucket: str) -> bytes:
    """Apply the bucket's image transformation, if any."""
    size = SQUARE_CROP_SIZES.get(bucket)
    if size is None:
        return file_bytes
    return crop_to_square(file_bytes, size)
