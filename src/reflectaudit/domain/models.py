from __future__ import annotations

"""
Audit Domain Data Models.

Defines the data structures exchanged between the metadata client, the
discovery services, the pipeline engine, and the interface layer, together
with the factory functions used to build execution results.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from reflectaudit.domain.syntax_models import SyntaxItem

# -----------------------------------------------------------------------------
# ERRORS
# -----------------------------------------------------------------------------

class MetadataError(RuntimeError):
    """Raised when compilation unit metadata cannot be obtained."""


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompilationUnit:
    """
    A Cargo package as reported by ``cargo metadata``.

    Attributes:
        name: Package name.
        manifest_path: Absolute path to the package ``Cargo.toml``.
    """
    name: str
    manifest_path: str

    @property
    def root(self) -> str:
        """Directory holding the manifest; the unit's source tree root."""
        return os.path.dirname(self.manifest_path)


@dataclass(frozen=True)
class ParsedSource:
    """
    A discovered source file paired with its converted declaration list.

    Attributes:
        path: Path as discovered (project-relative for local files).
        items: Top-level declarations of the file.
    """
    path: str
    items: List[SyntaxItem]


@dataclass(frozen=True)
class AuditResult:
    """
    Unified result object of a complete audit run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        project_dir: Normalized project directory that was audited.
        findings: Fully-qualified type paths, in walk order.
        summary: Execution counters (discovered, parsed, resolved, ...).
    """
    ok: bool
    error: str
    project_dir: str
    findings: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        project_dir: str,
        summary_extra: Optional[Dict[str, Any]] = None
) -> AuditResult:
    """
    Create a failed audit result instance.

    Args:
        error: Detailed error description.
        project_dir: The audited project directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        AuditResult: An immutable error result carrying no findings.
    """
    return AuditResult(
        ok=False,
        error=error,
        project_dir=project_dir,
        findings=[],
        summary=summary_extra or {},
    )


def create_success_result(
        project_dir: str,
        findings: List[str],
        summary: Dict[str, Any]
) -> AuditResult:
    """Create a successful audit result instance."""
    return AuditResult(
        ok=True,
        error="",
        project_dir=project_dir,
        findings=list(findings),
        summary=dict(summary),
    )
