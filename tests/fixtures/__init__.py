"""
Test fixtures package for bundle loader tests.

Usage:
    from fixtures.archives import make_legacy_archive, make_manifest

    def test_something(workdir):
        archive = make_legacy_archive(workdir / "artifact.zip")
"""

from .archives import (
    DEFAULT_PATCH,
    DEFAULT_SUMMARY,
    corrupt_entry_data,
    make_described_archive,
    make_description,
    make_legacy_archive,
    make_manifest,
    write_archive,
)

__all__ = [
    "DEFAULT_PATCH",
    "DEFAULT_SUMMARY",
    "corrupt_entry_data",
    "make_described_archive",
    "make_description",
    "make_legacy_archive",
    "make_manifest",
    "write_archive",
]
