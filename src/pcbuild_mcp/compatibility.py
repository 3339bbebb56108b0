"""Pairwise compatibility rules for a PC build.

Each rule looks at two slots and only runs when both are filled. Findings are
advisory: an empty result means no known conflict, not proven compatibility.
Rules are evaluated in declaration order, which is also the output order.
"""

from typing import Callable

from .models import BuildState, CompatibilityIssue

# Exact value of "Integrated Graphics" for CPUs without an iGPU
NO_INTEGRATED_GRAPHICS = "None"


def _check_cpu_socket(build: BuildState) -> CompatibilityIssue | None:
    """CPU and motherboard sockets must match exactly (case-sensitive)."""
    if not (build.cpu and build.motherboard):
        return None
    cpu_socket = build.cpu.specs.get("Socket")
    mb_socket = build.motherboard.specs.get("Socket")
    if cpu_socket != mb_socket:
        return CompatibilityIssue(
            severity="error",
            message=f"CPU socket ({cpu_socket}) doesn't match motherboard socket ({mb_socket})",
        )
    return None


def _check_ram_type(build: BuildState) -> CompatibilityIssue | None:
    """RAM generation must be the one the motherboard supports."""
    if not (build.ram and build.motherboard):
        return None
    ram_type = build.ram.specs.get("RAM Type")
    mb_ram_type = build.motherboard.specs.get("RAM Type")
    if ram_type != mb_ram_type:
        return CompatibilityIssue(
            severity="error",
            message=f"RAM type ({ram_type}) doesn't match motherboard supported type ({mb_ram_type})",
        )
    return None


def _check_cooler_socket(build: BuildState) -> CompatibilityIssue | None:
    """Cooler's compatibility list should mention the CPU socket.

    Only a warning: the list is free text ("AM4/AM5/LGA1700") and may be
    incomplete. A missing or non-text list is not evidence of a problem.
    """
    if not (build.cooler and build.cpu):
        return None
    compatibility = build.cooler.specs.get("Compatibility")
    cpu_socket = build.cpu.specs.get("Socket")
    if not compatibility or not isinstance(compatibility, str):
        return None
    if str(cpu_socket) not in compatibility:
        return CompatibilityIssue(
            severity="warning",
            message=f"Cooler may not support CPU socket ({cpu_socket})",
        )
    return None


def _check_display_output(build: BuildState) -> CompatibilityIssue | None:
    """Without a GPU the CPU must provide graphics.

    Fires only when "Integrated Graphics" is exactly "None". A CPU with no
    such field at all is assumed to have an iGPU.
    """
    if build.gpu or not build.cpu:
        return None
    if build.cpu.specs.get("Integrated Graphics") == NO_INTEGRATED_GRAPHICS:
        return CompatibilityIssue(
            severity="warning",
            message="No GPU selected and CPU has no integrated graphics",
        )
    return None


COMPATIBILITY_CHECKS: tuple[Callable[[BuildState], CompatibilityIssue | None], ...] = (
    _check_cpu_socket,
    _check_ram_type,
    _check_cooler_socket,
    _check_display_output,
)


def check_compatibility(build: BuildState) -> list[CompatibilityIssue]:
    """Run every compatibility rule against a build snapshot.

    Args:
        build: Build snapshot; any slot may be empty

    Returns:
        Issues in rule order (not sorted by severity). Never raises.
    """
    issues: list[CompatibilityIssue] = []
    for check in COMPATIBILITY_CHECKS:
        issue = check(build)
        if issue is not None:
            issues.append(issue)
    return issues


def has_blocking_issues(issues: list[CompatibilityIssue]) -> bool:
    """True if any issue is an error rather than a warning."""
    return any(issue.severity == "error" for issue in issues)
