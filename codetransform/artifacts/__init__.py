"""
Transformation Artifacts

Provides functionality for expanding, loading, and validating transformation
result archives.
"""

from codetransform.artifacts.extract import (
    UnsafeArchiveError,
    expand_archive,
    validate_archive,
    validate_entry_name,
)

from codetransform.artifacts.workspace import (
    EXTRACTION_DIR_NAME,
    ExtractionWorkspace,
    clear_extraction_cache,
    get_extraction_root,
)

from codetransform.artifacts.bundle import (
    Bundle,
    DescribedMultiPatch,
    LegacySinglePatch,
    PatchFile,
    PatchSet,
)

from codetransform.artifacts.io import (
    BundleLoader,
    create_bundle,
    find_description,
    find_manifest,
    load_bundle,
    validate_bundle_files,
)

__all__ = [
    # Extraction
    "UnsafeArchiveError",
    "expand_archive",
    "validate_archive",
    "validate_entry_name",
    # Workspace
    "EXTRACTION_DIR_NAME",
    "ExtractionWorkspace",
    "clear_extraction_cache",
    "get_extraction_root",
    # Bundle
    "Bundle",
    "DescribedMultiPatch",
    "LegacySinglePatch",
    "PatchFile",
    "PatchSet",
    # IO
    "BundleLoader",
    "create_bundle",
    "find_description",
    "find_manifest",
    "load_bundle",
    "validate_bundle_files",
]
