"""
Diff engine for artifact snapshots.

Partitions the images and CVEs of two artifacts into added, removed,
changed and unchanged sets. Pure and deterministic: no I/O, no logging.
"""

from core.exceptions import MalformedSnapshotException
from core.models import Artifact, DiffResult, Image


def validate_snapshot(artifact: Artifact) -> dict[str, Image]:
    """
    Check an artifact against the data model invariants and index its images.

    Args:
        artifact: Snapshot to validate

    Returns:
        Mapping of image name to Image, in artifact order

    Raises:
        MalformedSnapshotException: On duplicate image names, a missing
            vulnerability map, or a CVE key that disagrees with its finding
    """
    index: dict[str, Image] = {}
    for image in artifact.images:
        if image.name in index:
            raise MalformedSnapshotException(
                artifact.reference, "duplicate image name", image=image.name
            )
        if image.vulnerabilities is None:
            raise MalformedSnapshotException(
                artifact.reference,
                "image has no vulnerability data (unresolved scan)",
                image=image.name,
            )
        for cve_id, vuln in image.vulnerabilities.items():
            if cve_id != vuln.id:
                raise MalformedSnapshotException(
                    artifact.reference,
                    f"vulnerability keyed as {cve_id} carries id {vuln.id}",
                    image=image.name,
                    cve_id=cve_id,
                )
        index[image.name] = image
    return index


def _record(cves: dict, cve_id: str, image_name: str, vuln) -> None:
    cves.setdefault(cve_id, {})[image_name] = vuln


def _compare_image_vulnerabilities(
    before: Image,
    after: Image,
    name: str,
    added: dict,
    removed: dict,
    unchanged: dict,
) -> None:
    """CVE-level sub-diff for one image whose tag changed."""
    before_vulns = before.vulnerabilities
    after_vulns = after.vulnerabilities

    for cve_id, vuln in before_vulns.items():
        if cve_id in after_vulns:
            _record(unchanged, cve_id, name, vuln)
        else:
            _record(removed, cve_id, name, vuln)

    for cve_id, vuln in after_vulns.items():
        if cve_id not in before_vulns:
            _record(added, cve_id, name, vuln)


def compare(before: Artifact, after: Artifact) -> DiffResult:
    """
    Compare two artifact snapshots.

    Images are matched by name. A matched pair whose tag differs is Changed
    and gets a CVE-level comparison; an equal tag is Unchanged and all of the
    before image's CVEs count as unchanged, whatever the after scan reports.

    Args:
        before: Earlier snapshot
        after: Later snapshot

    Returns:
        DiffResult partitioning every image and CVE

    Raises:
        MalformedSnapshotException: If either snapshot is malformed
    """
    before_images = validate_snapshot(before)
    after_images = validate_snapshot(after)

    added_images, removed_images = {}, {}
    changed_images, unchanged_images = {}, {}
    added_cves, removed_cves, unchanged_cves = {}, {}, {}

    for name, before_img in before_images.items():
        after_img = after_images.get(name)
        if after_img is None:
            removed_images[name] = before_img
            for cve_id, vuln in before_img.vulnerabilities.items():
                _record(removed_cves, cve_id, name, vuln)
        elif before_img.tag != after_img.tag:
            changed_images[name] = (before_img, after_img)
            _compare_image_vulnerabilities(
                before_img, after_img, name, added_cves, removed_cves, unchanged_cves
            )
        else:
            unchanged_images[name] = (before_img, after_img)
            for cve_id, vuln in before_img.vulnerabilities.items():
                _record(unchanged_cves, cve_id, name, vuln)

    for name, after_img in after_images.items():
        if name not in before_images:
            added_images[name] = after_img
            for cve_id, vuln in after_img.vulnerabilities.items():
                _record(added_cves, cve_id, name, vuln)

    return DiffResult(
        before=before,
        after=after,
        added_images=added_images,
        removed_images=removed_images,
        changed_images=changed_images,
        unchanged_images=unchanged_images,
        added_cves=added_cves,
        removed_cves=removed_cves,
        unchanged_cves=unchanged_cves,
    )


__all__ = ["compare", "validate_snapshot"]
