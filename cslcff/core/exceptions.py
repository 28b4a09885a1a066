"""
Exception Hierarchy for cslcff.

All hard errors raised by the converter inherit from CslCffError so callers
can catch everything the package raises with a single except clause.

Each exception carries:
- error_code: Unique identifier for documentation lookup (e.g., "CCF-SCH-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Exception Hierarchy
-------------------
    CslCffError (base)
    ├── SchemaError
    ├── TargetDocumentError
    └── ConfigValidationError

    LossyMappingWarning (UserWarning, advisory only)

Usage
-----
    from cslcff.core.exceptions import CslCffError, SchemaError

    try:
        items = parse_csl_json(text)
    except SchemaError as e:
        logger.error(f"Input rejected: {e}")

Lossy mappings are never raised. The converter collects LossyMappingWarning
instances and returns them next to the converted references.
"""

from __future__ import annotations

import builtins
import json
from typing import Any, List, Optional


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Follows nested __cause__ and __context__ attributes to find
    the original error that started the chain.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        if id(current) in seen:
            break
        seen.add(id(current))

        # Prefer explicit cause over implicit context
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class CslCffError(Exception):
    """
    Base exception for all cslcff errors.

    Example
    -------
        try:
            result = convert(items, MergeMode.INSERT, target=text)
        except CslCffError as e:
            logger.error(f"Conversion failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses override
    error_code: str = "CCF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize CslCffError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "CCF-SCH-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(message)

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Document Exceptions
# ============================================================================


class SchemaError(CslCffError):
    """
    Raised when a CSL-JSON or CFF document is structurally invalid.

    This occurs when:
    - The text is not valid JSON / YAML
    - The top-level value has the wrong shape (CSL needs an array,
      CFF needs a mapping)
    - A required field is missing (CSL item `type`, CFF `cff-version`,
      CFF reference `type`)
    - A name or date object cannot be interpreted

    Attributes
    ----------
    path : str or None
        Location of the offending value, e.g. "[2].author[0]"
    """

    error_code = "CCF-SCH-001"
    why_it_happened = (
        "The input document does not have the structure required by its "
        "schema, so it cannot be converted"
    )
    how_to_fix = [
        "Check the document with a JSON or YAML linter",
        "Make sure every CSL item has a 'type' and the CFF file a 'cff-version'",
        "Re-export the bibliography from your reference manager",
    ]

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        if path:
            message = f"{message} (at {path})"
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.path = path


class TargetDocumentError(CslCffError):
    """
    Raised when the insert/replace target cannot be parsed as CFF.

    The operation is aborted before anything is written, so the target
    document is left untouched.
    """

    error_code = "CCF-TGT-001"
    why_it_happened = (
        "The CITATION.cff file to update could not be read as a valid "
        "Citation File Format document"
    )
    how_to_fix = [
        "Validate the target file, e.g. with 'cffconvert --validate'",
        "Make sure the file has a top-level 'cff-version' key",
        "Run without --insert/--replace to print the references instead",
    ]


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigValidationError(CslCffError):
    """
    Raised when configuration validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "CCF-CFG-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "The csl2cff.yaml file or a CSL2CFF_* variable may be incorrect"
    )
    how_to_fix = [
        "Check csl2cff.yaml for syntax errors",
        "Verify the value type matches what's expected",
        "Unset CSL2CFF_* environment variables to fall back to defaults",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


# ============================================================================
# Advisory Warnings
# ============================================================================


class LossyMappingWarning(UserWarning):
    """
    Advisory raised (never thrown) when information cannot be carried over.

    Produced when a CSL field has no CFF equivalent and is dropped, or when
    a value had to be approximated (e.g. a literal author name written as a
    family name, a date range reduced to its start).

    Attributes
    ----------
    field : str
        CSL field the loss relates to, e.g. "author[1]" or "container-title"
    reason : str
        What happened to the value
    record_index : int or None
        Position of the CSL record in the input array
    record_id : str or None
        CSL `id` of the record, when it has one
    """

    def __init__(
        self,
        field: str,
        reason: str,
        record_index: Optional[int] = None,
        record_id: Optional[str] = None,
    ) -> None:
        self.field = field
        self.reason = reason
        self.record_index = record_index
        self.record_id = record_id
        super().__init__(self._describe())

    def _describe(self) -> str:
        where = []
        if self.record_index is not None:
            where.append(f"record {self.record_index}")
        if self.record_id:
            where.append(f"id={self.record_id}")
        prefix = f"[{', '.join(where)}] " if where else ""
        return f"{prefix}{self.field}: {self.reason}"

    def at(self, record_index: int, record_id: Optional[str]) -> "LossyMappingWarning":
        """Return a copy located at the given record."""
        return LossyMappingWarning(self.field, self.reason, record_index, record_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LossyMappingWarning):
            return NotImplemented
        return (self.field, self.reason, self.record_index, self.record_id) == (
            other.field,
            other.reason,
            other.record_index,
            other.record_id,
        )

    def __hash__(self) -> int:
        return hash((self.field, self.reason, self.record_index, self.record_id))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "field": self.field,
            "reason": self.reason,
            "record_index": self.record_index,
            "record_id": self.record_id,
        }


# ============================================================================
# Error Info Lookup
# ============================================================================


# Helpful error info for standard exceptions surfaced by the CLI
STANDARD_ERROR_INFO: dict[type, dict[str, Any]] = {
    builtins.FileNotFoundError: {
        "error_code": "CCF-FILE-001",
        "why_it_happened": "The specified file could not be found",
        "how_to_fix": [
            "Check that the file path is correct",
            "Use '-' to read the CSL-JSON from standard input",
        ],
    },
    builtins.PermissionError: {
        "error_code": "CCF-FILE-002",
        "why_it_happened": "You don't have permission to access this file",
        "how_to_fix": [
            "Check file permissions: ls -la <file>",
            "Ensure you own the file or have read/write access",
        ],
    },
    json.JSONDecodeError: {
        "error_code": "CCF-SCH-002",
        "why_it_happened": "The input is not valid JSON",
        "how_to_fix": ["Check the file with a JSON linter"],
    },
    UnicodeDecodeError: {
        "error_code": "CCF-FILE-003",
        "why_it_happened": "The file is not UTF-8 encoded text",
        "how_to_fix": ["Re-save the file as UTF-8"],
    },
    OSError: {
        "error_code": "CCF-SYS-001",
        "why_it_happened": "A system-level error occurred",
        "how_to_fix": ["Check disk space and permissions"],
    },
}


def get_error_info(exc: BaseException) -> dict[str, Any]:
    """Get helpful error information for any exception.

    Args:
        exc: Exception to get info for

    Returns:
        Dict with error_code, why_it_happened, how_to_fix
    """
    if isinstance(exc, CslCffError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }

    exc_type = type(exc)
    if exc_type in STANDARD_ERROR_INFO:
        return STANDARD_ERROR_INFO[exc_type]

    for parent_type, info in STANDARD_ERROR_INFO.items():
        if isinstance(exc, parent_type):
            return info

    return {
        "error_code": "CCF-ERR-999",
        "why_it_happened": "An unexpected error occurred",
        "how_to_fix": [
            "Check the error message for details",
            "Run again with --verbose to see the traceback",
        ],
    }
