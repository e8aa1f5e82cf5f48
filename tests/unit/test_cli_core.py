import pytest

from locality_lookup.cli import parse_args


def test_parse_args_defaults():
    args = parse_args(["localities", "560001"])
    assert args.command == "localities"
    assert args.pincode == "560001"
    assert args.config_dir == "./config"
    assert args.overlay_config_dir is None
    assert args.source is None
    assert args.log_level is None


def test_parse_args_details_and_global_options():
    args = parse_args(["--source", "https://cdn.test/l.json", "--log-level", "DEBUG", "details", "560001", "Green Park"])
    assert args.command == "details"
    assert args.locality == "Green Park"
    assert args.source == "https://cdn.test/l.json"
    assert args.log_level == "DEBUG"


def test_parse_args_requires_a_command():
    with pytest.raises(SystemExit):
        parse_args([])
