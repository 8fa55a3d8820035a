"""Blob storage paths for tenant massif logs and their seals."""

V1_MMR_PREFIX = "v1/mmrs"
V1_MMR_TENANT_PREFIX = "v1/mmrs/tenant"

V1_MMR_PATH_SEP = "/"
V1_MMR_EXT_SEP = "."
V1_MMR_MASSIF_EXT = "log"
V1_MMR_SEAL_SIGNED_ROOT_EXT = "sth"  # Signed Tree Head
V1_MMR_SEAL_CPROOF = "cproof"  # Consistency Proof

# Identifies the log instance, allowing blob size or format changes to be
# introduced under a fresh path.
LOG_INSTANCE_N = 0


def _massif_blob_name(number: int) -> str:
    return f"{number:016d}.{V1_MMR_MASSIF_EXT}"


def _signed_tree_head_blob_name(number: int) -> str:
    return f"{number:016d}.{V1_MMR_SEAL_SIGNED_ROOT_EXT}"


def _consistency_proof_blob_name(number: int) -> str:
    return f"{number:016d}.{V1_MMR_SEAL_CPROOF}"


def tenant_massif_prefix(tenant_identity: str) -> str:
    """Return the prefix under which the massif blobs of a tenant are stored.

    The tenant identity is expected to have the form 'tenant/<uuid>'.
    """
    return f"{V1_MMR_PREFIX}/{tenant_identity}/{LOG_INSTANCE_N}/massifs/"


def massif_prefix_for_tenant_uuid(tenant_uuid: str) -> str:
    """Return the massif blob prefix for a bare tenant uuid."""
    return f"{V1_MMR_TENANT_PREFIX}/{tenant_uuid}/{LOG_INSTANCE_N}/massifs/"


def tenant_massif_signed_roots_prefix(tenant_identity: str) -> str:
    """Return the prefix under which the massif seals of a tenant are stored."""
    return f"{V1_MMR_PREFIX}/{tenant_identity}/{LOG_INSTANCE_N}/massifseals/"


def tenant_massif_blob_path(tenant_identity: str, number: int) -> str:
    """Return the blob path of the massif with the given number."""
    return tenant_massif_prefix(tenant_identity) + _massif_blob_name(number)


def tenant_massif_signed_root_path(tenant_identity: str, massif_index: int) -> str:
    """Return the blob path of the seal for the massif with the given index."""
    return tenant_massif_signed_roots_prefix(tenant_identity) + _signed_tree_head_blob_name(
        massif_index
    )


def _strip_hosting_prefix(path: str) -> str:
    prefix = V1_MMR_PREFIX + "/"
    return path[len(prefix):] if path.startswith(prefix) else path


def replica_relative_massif_path(tenant_identity: str, number: int) -> str:
    """Return the massif blob path without the hosting location prefix."""
    return _strip_hosting_prefix(tenant_massif_blob_path(tenant_identity, number))


def replica_relative_seal_path(tenant_identity: str, number: int) -> str:
    """Return the seal blob path without the hosting location prefix."""
    return _strip_hosting_prefix(tenant_massif_signed_root_path(tenant_identity, number))