from tracks.parse import normalize_row, normalize_token, parse_csv


def test_control_tokens_are_rewritten():
    assert normalize_token("<|endoftext|>") == "[EoT]"
    assert normalize_token("<|eot_id|>") == "[eot]"
    assert normalize_token("<|mdm_mask|>") == "[MASK]"
    assert normalize_token("a<|mdm_mask|><|mdm_mask|>") == "a[MASK][MASK]"


def test_none_stays_absent():
    assert normalize_token(None) is None
    assert normalize_token(3) == "3"


def test_row_with_no_present_token_is_dropped():
    assert normalize_row([None, None]) == ()
    assert normalize_row(["", ""]) == ()


def test_absent_tokens_collapse_to_empty_string():
    assert normalize_row(["a", None, "b"]) == ("a", "", "b")


def test_scalar_field_becomes_single_token_row():
    assert normalize_row("x") == ("x",)


def test_parse_csv_skips_blank_and_empty_rows():
    text = "\n\nThe,cat,<|mdm_mask|>\n\n,,\nThe,cat,sat\n\n"
    assert parse_csv(text) == [("The", "cat", "[MASK]"), ("The", "cat", "sat")]


def test_parse_csv_keeps_quoted_commas_and_escapes():
    text = 'a,"b,c",\\n\n'
    assert parse_csv(text) == [("a", "b,c", "\\n")]


def test_parse_csv_ragged_rows():
    assert parse_csv("a,b,c\nd\n") == [("a", "b", "c"), ("d",)]


def test_parse_empty_text():
    assert parse_csv("") == []
    assert parse_csv("   \n  ") == []
