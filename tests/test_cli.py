import pytest

from asset_onboarding.__main__ import build_parser, build_requests


def test_requests_default_display_name_to_file_name():
    args = build_parser().parse_args(["/data/a.csv", "/data/b.csv"])

    requests = build_requests(args)

    assert [r.full_path for r in requests] == ["/data/a.csv", "/data/b.csv"]
    assert [r.display_name for r in requests] == ["a.csv", "b.csv"]
    assert all(r.column_headers is None for r in requests)
    assert all(r.delimiter_character is None for r in requests)
    assert all(r.quote_character is None for r in requests)


def test_requests_carry_options():
    args = build_parser().parse_args(
        [
            "/data/a.csv",
            "--columns", "id", "name",
            "--delimiter", ";",
            "--quote", "'",
            "--display-name", "Accounts",
            "--description", "All accounts",
        ]
    )

    (request,) = build_requests(args)

    assert request.column_headers == ("id", "name")
    assert request.delimiter_character == ";"
    assert request.quote_character == "'"
    assert request.display_name == "Accounts"
    assert request.description == "All accounts"


def test_multi_character_delimiter_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["/data/a.csv", "--delimiter", ";;"])
