# gerber_preview/ingest/__init__.py

from .layer_classifier import (
    CLASSIFICATION_RULES,
    COPPER_ROLES,
    SOLDER_MASK_COLORS,
    ClassificationRule,
    LayerClassification,
    LayerRole,
    classify,
    is_copper_role,
    solder_mask_hex,
)
from .uploads import (
    DuplicateFileName,
    FileReadError,
    FileRejected,
    UploadedFile,
    validate_uploads,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "COPPER_ROLES",
    "SOLDER_MASK_COLORS",
    "ClassificationRule",
    "LayerClassification",
    "LayerRole",
    "classify",
    "is_copper_role",
    "solder_mask_hex",
    "DuplicateFileName",
    "FileReadError",
    "FileRejected",
    "UploadedFile",
    "validate_uploads",
]
