"""Shallow checks and parsing of massif and seal blob paths."""

import re

from massiflog.tenantblobpaths import (
    V1_MMR_EXT_SEP,
    V1_MMR_MASSIF_EXT,
    V1_MMR_PATH_SEP,
    V1_MMR_SEAL_SIGNED_ROOT_EXT,
    V1_MMR_TENANT_PREFIX,
)

_DECIMAL = re.compile(r"[0-9]+")
_UINT32_LIMIT = 1 << 32


class MassifPathError(ValueError):
    """Raised when a path is not a valid massif or seal path."""


def is_massif_path_like(path: str) -> bool:
    """Return True if the path could be a massif log path."""
    return path.startswith(V1_MMR_TENANT_PREFIX) and path.endswith(V1_MMR_MASSIF_EXT)


def is_seal_path_like(path: str) -> bool:
    """Return True if the path could be a massif seal path."""
    return path.startswith(V1_MMR_TENANT_PREFIX) and path.endswith(
        V1_MMR_SEAL_SIGNED_ROOT_EXT
    )


def parse_massif_path_tenant(path: str) -> str:
    """Return the tenant uuid from a massif storage path."""
    if not path.startswith(V1_MMR_TENANT_PREFIX):
        raise MassifPathError(f"invalid massif path: {path}")
    if len(path) <= len(V1_MMR_TENANT_PREFIX):
        raise MassifPathError(f"invalid massif path: {path}")
    # skip the separator that follows the prefix
    rest = path[len(V1_MMR_TENANT_PREFIX) + 1:]
    return rest.split(V1_MMR_PATH_SEP)[0]


def parse_massif_path_number_ext(path: str) -> tuple[int, str]:
    """Return the log file number and extension from a storage path."""
    if not path.startswith(V1_MMR_TENANT_PREFIX):
        raise MassifPathError(f"invalid massif path: {path}")
    base = path.split(V1_MMR_PATH_SEP)[-1]
    parts = base.split(V1_MMR_EXT_SEP)
    if len(parts) != 2:
        raise MassifPathError(f"invalid massif path: base name invalid {path}")
    stem, ext = parts
    if ext not in (V1_MMR_MASSIF_EXT, V1_MMR_SEAL_SIGNED_ROOT_EXT):
        raise MassifPathError(f"invalid massif path: extension invalid {path}")
    if not _DECIMAL.fullmatch(stem):
        raise MassifPathError(f"invalid massif path: log file number invalid {path}")
    number = int(stem)
    if number >= _UINT32_LIMIT:
        raise MassifPathError(
            f"invalid massif path: log file number out of range {path}"
        )
    return number, ext