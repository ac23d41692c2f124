from snapdiff.browsers import parse_browsers, unknown_browsers, valid_browsers, warn_unknown_browsers


def test_parse_browsers_strips_whitespace() -> None:
    assert parse_browsers(" chrome ,\tfirefox,, ") == ["chrome", "firefox"]


def test_parse_browsers_absent_is_none() -> None:
    assert parse_browsers(None) is None
    assert parse_browsers("") is None


def test_valid_and_unknown_browsers() -> None:
    configured = ["chrome", "firefox"]

    assert valid_browsers(["chrome", "ie"], configured) == ["chrome"]
    assert unknown_browsers(["chrome", "ie"], configured) == ["ie"]
    assert valid_browsers(["firefox", "opera"], configured) == ["firefox"]
    assert valid_browsers(None, configured) == []


def test_warning_names_unknown_and_valid_ids(capsys) -> None:
    warn_unknown_browsers(["ie"], ["chrome", "firefox"])

    err = capsys.readouterr().err
    assert "WARNING:" in err
    assert "Unknown browsers id: ie." in err
    assert "specified in config file: chrome, firefox" in err
