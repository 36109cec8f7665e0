from feedback_portal.utils.validators import clean_str, clean_text, is_valid_base_url, parse_rating


def test_clean_str_collapses_and_trims():
    assert clean_str("  Max   Mustermann ") == "Max Mustermann"
    assert clean_str("   ") is None
    assert clean_str(None) is None
    assert clean_str("abcdef", max_len=3) == "abc"


def test_clean_text_keeps_line_breaks():
    assert clean_text("  erste\nzweite  ") == "erste\nzweite"
    assert clean_text(None) == ""


def test_parse_rating():
    assert parse_rating(1) == 1
    assert parse_rating("5") == 5
    assert parse_rating(" 3 ") == 3
    assert parse_rating(4.0) == 4
    for bad in (0, 6, "0", "4.5", 4.5, "", None, True, False, "x", [5]):
        assert parse_rating(bad) is None, bad


def test_is_valid_base_url():
    assert is_valid_base_url("https://feedback.example.test")
    assert is_valid_base_url("http://localhost:5000")
    assert not is_valid_base_url("feedback.example.test")
    assert not is_valid_base_url("ftp://example.test")
    assert not is_valid_base_url("")
