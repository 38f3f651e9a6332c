"""Core functionalities: the erasure contract and the Datum handle.

Architecture Note:
    core/ holds the type-erasure mechanism only. It knows nothing about EDN
    syntax; the reader in edn/ is one consumer of Datum.
"""

from edndata.core.capability import Erased, ErasedData
from edndata.core.datum import Datum
from edndata.core.errors import (
    CapabilityError,
    DowncastError,
    EdnDataError,
    ErasedTypeMismatch,
)
from edndata.core.hashing import Hasher, HasherAdapter, default_hasher
from edndata.core.models import Downcast, Err, Ok, Ordering, TypeTag
from edndata.core.registry import (
    DataTypeRegistry,
    datatype,
    get_registry,
    missing_capabilities,
)

__all__ = [
    # Handle
    "Datum",
    # Capability interface
    "ErasedData",
    "Erased",
    # Models
    "Ordering",
    "TypeTag",
    "Ok",
    "Err",
    "Downcast",
    # Registry
    "DataTypeRegistry",
    "datatype",
    "get_registry",
    "missing_capabilities",
    # Hashing
    "Hasher",
    "HasherAdapter",
    "default_hasher",
    # Errors
    "EdnDataError",
    "CapabilityError",
    "DowncastError",
    "ErasedTypeMismatch",
]
