from django.conf import settings
from django.core.exceptions import ValidationError
from PIL import Image, UnidentifiedImageError

from .services.storage import BYTES_IN_MB

PDF_MAGIC = b"%PDF-"


def _check_size(uploaded_file, setting_name, default_mb):
    max_mb = int(getattr(settings, setting_name, default_mb))
    if uploaded_file.size > max_mb * BYTES_IN_MB:
        raise ValidationError(f"File too large: max {max_mb} MB")


def validate_image_file(uploaded_file):
    """
    Validate a single uploaded property photo against:
      1) max file size (MB)
      2) integrity + allowed formats (JPEG/PNG/WEBP/GIF by default)
      3) max dimensions (width/height)
    Leaves the file pointer at position 0 for subsequent saving.
    """
    _check_size(uploaded_file, "PROPERTY_IMAGE_MAX_MB", 20)

    try:
        uploaded_file.seek(0)
        img = Image.open(uploaded_file)
        img.verify()
    except UnidentifiedImageError:
        raise ValidationError("Unsupported or corrupted image")

    # verify() closes the fp; reopen to read size/format
    uploaded_file.seek(0)
    img = Image.open(uploaded_file)

    fmt = (img.format or "").upper()
    allowed = set(getattr(settings, "PROPERTY_IMAGE_ALLOWED_FORMATS", {"JPEG", "PNG", "WEBP", "GIF"}))
    if fmt not in allowed:
        raise ValidationError(f"Unsupported format: {fmt}. Allowed: {', '.join(sorted(allowed))}")

    w, h = img.size
    max_w = int(getattr(settings, "PROPERTY_IMAGE_MAX_WIDTH", 8000))
    max_h = int(getattr(settings, "PROPERTY_IMAGE_MAX_HEIGHT", 8000))
    if w > max_w or h > max_h:
        raise ValidationError(f"Image too large: {w}x{h}px (max {max_w}x{max_h}px)")

    uploaded_file.seek(0)


def validate_brochure_file(uploaded_file):
    """PDF only: extension plus the %PDF- header."""
    _check_size(uploaded_file, "PROPERTY_BROCHURE_MAX_MB", 20)

    if not (uploaded_file.name or "").lower().endswith(".pdf"):
        raise ValidationError("Only PDF files are allowed for brochures")

    uploaded_file.seek(0)
    head = uploaded_file.read(len(PDF_MAGIC))
    uploaded_file.seek(0)
    if head != PDF_MAGIC:
        raise ValidationError("File is not a valid PDF")
