import pytest

from app.services.forwards import InvalidAddressError, InvalidPortError
from app.services.forwards.validation import parse_ip, parse_port, validate_endpoints


def test_valid_endpoints_are_canonicalized():
    endpoints = validate_endpoints("127.0.0.1", "9000", "2001:DB8::0001", "0022")

    assert endpoints.base_ip == "127.0.0.1"
    assert endpoints.base_port == 9000
    assert endpoints.remote_ip == "2001:db8::1"
    assert endpoints.remote_port == 22


@pytest.mark.parametrize(
    "raw",
    ["", "localhost", "256.1.1.1", "1.2.3", "127.0.0.1 ", "1.2.3.4,fork", "fe80::1%eth0", "::1::"],
)
def test_rejects_non_ip_strings(raw):
    with pytest.raises(InvalidAddressError) as exc:
        parse_ip(raw, "Base")
    assert str(exc.value) == f"Invalid Base IP address format: {raw}"


@pytest.mark.parametrize("raw", ["abc", "", "1.5", " 22", "2_2", "0x16", "٢٢"])
def test_rejects_non_integer_ports(raw):
    with pytest.raises(InvalidPortError) as exc:
        parse_port(raw, "Remote")
    assert str(exc.value) == f"Remote Port must be a number: {raw}"


@pytest.mark.parametrize("raw, value", [("0", 0), ("65536", 65536), ("-1", -1)])
def test_rejects_out_of_range_ports(raw, value):
    with pytest.raises(InvalidPortError) as exc:
        parse_port(raw, "Base")
    assert str(exc.value) == f"Base Port must be between 1 and 65535, got: {value}"


@pytest.mark.parametrize("raw, value", [("1", 1), ("65535", 65535), ("+80", 80)])
def test_accepts_boundary_ports(raw, value):
    assert parse_port(raw, "Base") == value


def test_first_failure_wins():
    with pytest.raises(InvalidAddressError) as exc:
        validate_endpoints("bad", "0", "also-bad", "0")
    assert exc.value.label == "Base"

    with pytest.raises(InvalidPortError) as exc:
        validate_endpoints("10.0.0.1", "0", "also-bad", "0")
    assert exc.value.label == "Base"

    with pytest.raises(InvalidAddressError) as exc:
        validate_endpoints("10.0.0.1", "80", "also-bad", "0")
    assert exc.value.label == "Remote"

    with pytest.raises(InvalidPortError) as exc:
        validate_endpoints("10.0.0.1", "80", "10.0.0.2", "99999")
    assert exc.value.label == "Remote"


def test_socat_specs_ipv4():
    endpoints = validate_endpoints("127.0.0.1", "9000", "10.0.0.5", "22")

    assert endpoints.listen_spec == "tcp4-listen:9000,reuseaddr,bind=127.0.0.1,fork"
    assert endpoints.target_spec == "tcp4:10.0.0.5:22"


def test_socat_specs_ipv6():
    endpoints = validate_endpoints("::1", "9000", "2001:db8::1", "22")

    assert endpoints.listen_spec == "tcp6-listen:9000,reuseaddr,bind=[::1],fork"
    assert endpoints.target_spec == "tcp6:[2001:db8::1]:22"


def test_rejects_overlong_digit_strings():
    raw = "9" * 5000

    with pytest.raises(InvalidPortError) as exc:
        parse_port(raw, "Base")
    assert str(exc.value) == f"Base Port must be a number: {raw}"
