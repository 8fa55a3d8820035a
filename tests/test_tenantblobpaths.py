from massiflog.tenantblobpaths import (
    massif_prefix_for_tenant_uuid,
    replica_relative_massif_path,
    replica_relative_seal_path,
    tenant_massif_blob_path,
    tenant_massif_prefix,
    tenant_massif_signed_root_path,
    tenant_massif_signed_roots_prefix,
)


def test_tenant_massif_prefix():
    assert tenant_massif_prefix("tenant/1234") == "v1/mmrs/tenant/1234/0/massifs/"


def test_massif_prefix_for_tenant_uuid():
    assert massif_prefix_for_tenant_uuid("1234") == "v1/mmrs/tenant/1234/0/massifs/"


def test_tenant_massif_signed_roots_prefix():
    assert (
        tenant_massif_signed_roots_prefix("tenant/1234")
        == "v1/mmrs/tenant/1234/0/massifseals/"
    )


def test_tenant_massif_blob_path():
    assert (
        tenant_massif_blob_path("tenant/1234", 1)
        == "v1/mmrs/tenant/1234/0/massifs/0000000000000001.log"
    )


def test_tenant_massif_signed_root_path():
    assert (
        tenant_massif_signed_root_path("tenant/1234", 1)
        == "v1/mmrs/tenant/1234/0/massifseals/0000000000000001.sth"
    )


def test_replica_relative_massif_path():
    assert (
        replica_relative_massif_path("tenant/1234", 1)
        == "tenant/1234/0/massifs/0000000000000001.log"
    )


def test_replica_relative_seal_path():
    assert (
        replica_relative_seal_path("tenant/1234", 1)
        == "tenant/1234/0/massifseals/0000000000000001.sth"
    )


def test_blob_path_starts_with_prefix():
    path = tenant_massif_blob_path("tenant/abc", 51)
    assert path.startswith(tenant_massif_prefix("tenant/abc"))
    assert path.endswith("0000000000000051.log")