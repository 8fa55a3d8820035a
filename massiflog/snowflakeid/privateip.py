"""Derivation of the worker id from a pod's private IPv4 address."""

import ipaddress

# Bounds on the bits allowed per worker id or sequence counter.
MAX_WORKER_BITS = 24
MIN_WORKER_BITS = 8

_PRIVATE_V4 = (
    ipaddress.IPv4Network("10.0.0.0/8"),
    ipaddress.IPv4Network("172.16.0.0/12"),
    ipaddress.IPv4Network("192.168.0.0/16"),
)


class BadWorkerCIDRError(ValueError):
    """Raised when the worker CIDR cannot be parsed."""


class BadPodIPError(ValueError):
    """Raised when the pod ip is invalid or not private."""


class MaskRangeError(ValueError):
    """Raised when the CIDR mask allows too many or too few addresses."""


def _host_mask(worker_cidr: str) -> int:
    """Return the inverted (host) mask of the CIDR as a 32 bit integer."""
    try:
        network = ipaddress.ip_network(worker_cidr, strict=False)
    except ValueError as exc:
        raise BadWorkerCIDRError(f"{worker_cidr} - issue parsing CIDR: {exc}") from None
    if network.version != 4:
        raise BadWorkerCIDRError(f"{worker_cidr} - only IPv4 CIDRs are supported")
    host_mask = int(network.hostmask)
    if host_mask >> 16:
        raise MaskRangeError(f"{worker_cidr} - allows to many ips")
    if host_mask < 0xFF:
        raise MaskRangeError(f"{worker_cidr} - allows to few ips")
    return host_mask


def _private_ip(pod_ip: str) -> ipaddress.IPv4Address:
    try:
        ip = ipaddress.ip_address(pod_ip)
    except ValueError:
        raise BadPodIPError(f"{pod_ip} - issue parsing IP") from None
    if ip.version != 4:
        raise BadPodIPError(f"{pod_ip} - only IPv4 addresses are supported")
    if not any(ip in net for net in _PRIVATE_V4):
        raise BadPodIPError(f"{pod_ip} - is not a private ip")
    return ip


def worker_id_sequence_bits(cfg) -> tuple[int, int]:
    """Return the worker id and the number of bits left for the sequence counter."""
    host_mask = _host_mask(cfg.worker_cidr)
    ip = _private_ip(cfg.pod_ip)
    low_mask = host_mask & 0xFFFF
    sequence_bits = MAX_WORKER_BITS - low_mask.bit_length()
    worker_id = int(ip) & low_mask
    return worker_id, sequence_bits