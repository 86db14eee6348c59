"""
Transformation Artifacts
File: io.py

Purpose: Load and validate transformation result archives.

Load sequence:
1. Expand the archive into a private workspace
2. Locate and parse the manifest
3. Check the manifest version (newer versions only warn)
4. Probe the patches root for a description file to pick the format branch
5. Resolve patch files
6. Read the summary
7. Assemble the Bundle

Every step fails fast with a distinct BundleException subclass; there is no
partial bundle.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from core.config.runtime import LoaderConfig, get_default_config
from core.schemas.description import DescriptionContent
from core.schemas.errors import (
    ArchiveCorruptError,
    ArchiveNotFoundError,
    BundleException,
    DescriptionCorruptError,
    InvalidManifestError,
    ManifestNotFoundError,
    PatchNotFoundError,
)
from core.schemas.manifest import Manifest
from core.schemas.summary import TransformationSummary
from core.schemas.verification import CheckResult, VerificationResult
from core.schemas.versioning import is_supported_manifest_version

from codetransform.artifacts.bundle import (
    Bundle,
    DescribedMultiPatch,
    LegacySinglePatch,
    PatchFile,
)
from codetransform.artifacts.extract import expand_archive
from codetransform.artifacts.workspace import ExtractionWorkspace

logger = logging.getLogger(__name__)


def find_manifest(root: Path, filename: str) -> tuple[Path, list[Path]]:
    """
    Find the manifest anywhere under `root` by filename suffix.

    Candidates are ordered by depth, then path, so the shallowest match wins
    deterministically.

    Returns:
        (chosen manifest path, all candidates)

    Raises:
        ManifestNotFoundError: If no file matches.
    """
    candidates = sorted(
        (p for p in root.rglob("*") if p.is_file() and p.name.endswith(filename)),
        key=lambda p: (len(p.relative_to(root).parts), p.relative_to(root).as_posix()),
    )
    if not candidates:
        raise ManifestNotFoundError(filename)
    return candidates[0], candidates


def find_description(
    patches_dir: Path,
    suffix: str,
    exclude: Optional[Path] = None,
) -> tuple[Optional[Path], list[Path]]:
    """Find the description file directly under the patches root, if any."""
    candidates = sorted(
        (
            p for p in patches_dir.iterdir()
            if p.is_file() and p.name.endswith(suffix) and p != exclude
        ),
        key=lambda p: p.name,
    )
    if not candidates:
        return None, []
    return candidates[0], candidates


class BundleLoader:
    """
    Loads transformation result archives into Bundles.

    Stateless apart from its configuration; safe to share between threads
    since every load gets its own workspace.
    """

    def __init__(self, config: LoaderConfig | None = None) -> None:
        self.config = config or get_default_config()

    def load(self, archive_path: str | Path) -> Bundle:
        """
        Load and validate an archive.

        Args:
            archive_path: Path to the downloaded zip archive

        Returns:
            Fully validated Bundle

        Raises:
            BundleException: One subclass per failure kind.
        """
        path = Path(archive_path)
        if not path.is_file():
            raise ArchiveNotFoundError(str(path))

        workspace = ExtractionWorkspace.create(path, self.config.extraction_root)
        try:
            bundle = self._load_into(path, workspace)
        except BundleException as e:
            logger.error(f"Failed to load transformation artifact {path}: {e.message}")
            if self.config.cleanup_on_failure:
                workspace.cleanup()
            raise

        logger.info(
            f"Loaded transformation artifact {path.name}: "
            f"{len(bundle.patches)} patch(es), manifest v{bundle.manifest.version}"
        )
        return bundle

    def _load_into(self, path: Path, workspace: ExtractionWorkspace) -> Bundle:
        config = self.config
        warnings: list[CheckResult] = []

        if not expand_archive(
            path,
            workspace.path,
            max_entries=config.max_entries,
            max_total_bytes=config.max_total_bytes,
        ):
            raise ArchiveCorruptError(str(path))

        manifest_path, candidates = find_manifest(workspace.path, config.manifest_filename)
        if len(candidates) > 1:
            warnings.append(self._warn(
                "manifest_ambiguous",
                f"Found {len(candidates)} manifest candidates, using {manifest_path.name}",
                {"candidates": [p.relative_to(workspace.path).as_posix() for p in candidates]},
            ))
        manifest = Manifest.from_file(manifest_path)

        if not is_supported_manifest_version(manifest.version, config.max_supported_version):
            # Consumed fields are expected to stay backward compatible
            warnings.append(self._warn(
                "manifest_version",
                f"Unsupported version: {manifest.version}",
                {"version": manifest.version, "max_supported": config.max_supported_version},
            ))

        patches_dir = self._resolve_root(workspace, "patchesRoot", manifest.patches_root)
        description_path, descriptions = find_description(
            patches_dir, config.description_suffix, exclude=manifest_path.resolve(),
        )
        if len(descriptions) > 1:
            warnings.append(self._warn(
                "description_ambiguous",
                f"Found {len(descriptions)} description files, using {description_path.name}",
                {"candidates": [p.name for p in descriptions]},
            ))

        if description_path is None:
            patch_set = LegacySinglePatch(
                patch=self._read_patch(patches_dir, config.single_patch_filename),
            )
        else:
            description = DescriptionContent.from_file(description_path)
            if not description.content:
                raise DescriptionCorruptError(description_path.name, "no patches listed")
            patch_set = DescribedMultiPatch(
                description_file=description_path,
                entries=tuple(description.content),
                patches=tuple(
                    self._read_patch(patches_dir, info.filename)
                    for info in description.content
                ),
            )

        summary_dir = self._resolve_root(workspace, "summaryRoot", manifest.summary_root)
        summary_file = summary_dir / config.summary_filename
        summary = TransformationSummary.from_file(summary_file)

        return Bundle(
            source_archive_path=path,
            manifest=manifest,
            patch_set=patch_set,
            summary=summary,
            summary_file=summary_file,
            workspace=workspace.path,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _resolve_root(workspace: ExtractionWorkspace, field_name: str, root: str) -> Path:
        try:
            directory = workspace.resolve(root)
        except ValueError:
            raise InvalidManifestError(field_name, root, "escapes the archive") from None
        if not directory.is_dir():
            raise InvalidManifestError(field_name, root)
        return directory

    @staticmethod
    def _read_patch(patches_dir: Path, filename: str) -> PatchFile:
        patch_path = (patches_dir / filename).resolve()
        if patches_dir not in patch_path.parents or not patch_path.is_file():
            raise PatchNotFoundError(filename, str(patches_dir))
        try:
            return PatchFile.read(patch_path, filename)
        except OSError as e:
            raise PatchNotFoundError(filename, str(patches_dir)) from e

    @staticmethod
    def _warn(check_id: str, message: str, details: dict) -> CheckResult:
        logger.warning(message)
        return CheckResult.warning(check_id, message, details)


def load_bundle(archive_path: str | Path, config: LoaderConfig | None = None) -> Bundle:
    """
    Load a transformation result archive.

    Args:
        archive_path: Path to the downloaded zip archive
        config: Loader configuration (default: get_default_config())

    Returns:
        Loaded Bundle
    """
    return BundleLoader(config).load(archive_path)


create_bundle = load_bundle


def validate_bundle_files(
    archive_path: str | Path,
    config: LoaderConfig | None = None,
) -> VerificationResult:
    """
    Validate an archive without raising.

    Returns VerificationResult with an `archive_load` check plus, on success,
    the load warnings and a few structural checks.
    """
    try:
        bundle = load_bundle(archive_path, config)
    except BundleException as e:
        return VerificationResult.failure(
            checks=[CheckResult.failed("archive_load", e.message, {"code": e.code, **e.details})],
            error=e.to_error_model(),
        )

    checks: list[CheckResult] = [CheckResult.passed("archive_load", "Artifact loaded")]
    checks.extend(bundle.warnings)
    checks.append(CheckResult.passed(
        "patch_count",
        f"{len(bundle.patches)} patch(es) resolved",
        {"count": len(bundle.patches), "legacy": bundle.is_legacy},
    ))
    if bundle.summary.text.strip():
        checks.append(CheckResult.passed("summary_present", "Summary has content"))
    else:
        checks.append(CheckResult.warning("summary_present", "Summary is empty"))

    return VerificationResult.success(checks)


__all__ = [
    "BundleLoader",
    "load_bundle",
    "create_bundle",
    "validate_bundle_files",
    "find_manifest",
    "find_description",
]
