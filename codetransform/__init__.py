"""
Code transformation result ingestion.

Public API:
- load_bundle: Load a downloaded result archive into a validated Bundle
- BundleLoader: Loader bound to a LoaderConfig
- validate_bundle_files: Non-raising validation returning a VerificationResult
- clear_extraction_cache: Remove all extracted archives
"""

from codetransform.artifacts import (
    Bundle,
    BundleLoader,
    DescribedMultiPatch,
    LegacySinglePatch,
    PatchFile,
    clear_extraction_cache,
    create_bundle,
    load_bundle,
    validate_bundle_files,
)

__all__ = [
    "Bundle",
    "BundleLoader",
    "DescribedMultiPatch",
    "LegacySinglePatch",
    "PatchFile",
    "clear_extraction_cache",
    "create_bundle",
    "load_bundle",
    "validate_bundle_files",
]
