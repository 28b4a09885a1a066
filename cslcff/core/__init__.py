"""
Core infrastructure for cslcff.

The core layer has no dependencies on the other cslcff packages; the CSL
model, the CFF model, the converter and the CLI all build on it.

Components
----------
**Exceptions (exceptions.py)**
    CslCffError hierarchy (SchemaError, TargetDocumentError,
    ConfigValidationError) plus the advisory LossyMappingWarning.

**Logging (logging.py)**
    Structured logging with context fields, rendered through rich on stderr.

**Configuration (config.py)**
    ConverterConfig dataclass loaded from csl2cff.yaml with environment
    variable overrides.
"""

from cslcff.core.config import ConverterConfig, load_config
from cslcff.core.exceptions import (
    ConfigValidationError,
    CslCffError,
    LossyMappingWarning,
    SchemaError,
    TargetDocumentError,
)
from cslcff.core.logging import configure_logging, get_logger

__all__ = [
    "ConverterConfig",
    "load_config",
    "CslCffError",
    "SchemaError",
    "TargetDocumentError",
    "ConfigValidationError",
    "LossyMappingWarning",
    "configure_logging",
    "get_logger",
]
