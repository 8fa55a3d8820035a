# massiflog

Helpers for the blob layout of a Merkle Mountain Range (MMR) log that is
split into fixed size "massifs", plus a generator for time ordered, unique
64 bit snowflake ids.

The package has no runtime dependencies.

## Installation

```
pip install massiflog
```

To run the test suite:

```
pip install "massiflog[test]"
pytest
```

## Modules

- `massiflog.tenantblobpaths`: storage paths for massif blobs and their
  seals: `tenant_massif_prefix`, `massif_prefix_for_tenant_uuid`,
  `tenant_massif_signed_roots_prefix`, `tenant_massif_blob_path`,
  `tenant_massif_signed_root_path`, `replica_relative_massif_path` and
  `replica_relative_seal_path`. For example
  `tenant_massif_blob_path("tenant/1234", 1)` gives
  `"v1/mmrs/tenant/1234/0/massifs/0000000000000001.log"`.
- `massiflog.pathparse`: `is_massif_path_like` and `is_seal_path_like` are
  quick prefix and suffix checks; `parse_massif_path_tenant` returns the
  tenant uuid and `parse_massif_path_number_ext` returns the file number and
  extension (`"log"` or `"sth"`). Bad paths raise `MassifPathError`.
- `massiflog.tags`: blob tag values as 16 digit zero padded hex, through
  `encode_tag_hex64`, `decode_tag_hex64`, `get_first_index`,
  `set_first_index` and `get_last_id_hex`. Decoding more than 8 bytes raises
  `Hex64TagOverflowError`; a missing `firstindex` tag raises
  `MissingFirstIndexTagError`.
- `massiflog.trieentry`: reads and writes the 64 byte trie entries (32 byte
  key, 24 extra bytes, 8 byte idtimestamp) with `trie_entry_offset`,
  `get_trie_entry`, `get_trie_key`, `get_idtimestamp`, `get_extra_bytes`,
  `set_trie_entry`, `new_trie_key` (SHA-256 of domain, log id and app id)
  and `new_empty_trie_entry`.
- `massiflog.massifindex`: MMR index arithmetic (`mmr_index`, `leaf_index`,
  `index_height`, `peaks`, `height_index_leaf_count`,
  `leaf_minus_spur_sum`) and which massif holds a node
  (`massif_index_from_leaf_index`, `massif_index_from_mmr_index`,
  `massif_from_leaf`).
- `massiflog.peakstack`: `peak_stack_map` maps the MMR peaks carried in a
  massif's peak stack to their stack positions.
- `massiflog.massifstart`: the 32 byte massif header: the `MassifStart`
  dataclass with `to_bytes` and `from_bytes`, `encode_massif_start`,
  `decode_massif_start`, `new_massif_start`, `massif_first_leaf` and the
  `KeyType` enum. Short headers raise `MassifHeaderError`.
- `massiflog.snowflakeid.config`: the `Config` dataclass for the generator.
- `massiflog.snowflakeid.privateip`: `worker_id_sequence_bits` derives the
  worker id and sequence bit count from a CIDR and a private IPv4 pod
  address, raising `BadWorkerCIDRError`, `BadPodIPError` or
  `MaskRangeError`.
- `massiflog.snowflakeid.idtime`: `epoch_ms`, `epoch_time_utc`, `id_time`,
  `id_milli_split` and `id_unix_milli` decode ids.
- `massiflog.snowflakeid.nextid`: `IDState` (or `new_id_state`) generates
  ids with `next_id`; it raises `OverloadedError` when the state cannot be
  updated within `allow_spins` retries.

## Example

```python
from massiflog.massifstart import MassifStart, encode_massif_start
from massiflog.snowflakeid.config import Config
from massiflog.snowflakeid.nextid import IDState

header = encode_massif_start(12, 1, 2, 2, 2) + bytes(32)
start = MassifStart.from_bytes(header)
print(start.first_index)  # 7

ids = IDState.from_config(
    Config(commitment_epoch=1, worker_cidr="0.0.0.0/16", pod_ip="10.0.0.1", allow_spins=100)
)
print(hex(ids.next_id()))
```

## What it does not do

The package only computes layouts, paths, tags and ids. It does not read or
write blob storage, does not compute MMR node hashes or roots, and does not
sign, verify or build seals, checkpoints or receipts.