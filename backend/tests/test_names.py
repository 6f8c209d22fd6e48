import json

from statement_ocr.names import NameLexicon, default_lexicon, find_markers, resolve_names
from statement_ocr.utils import normalize_lines


def test_no_markers_uses_document_order():
    names = resolve_names(["ALICE KHAN", "BOB RAZA"])
    assert names.from_name == "ALICE KHAN"
    assert names.to_name == "BOB RAZA"


def test_inline_markers(receipt_text):
    names = resolve_names(normalize_lines(receipt_text))
    assert names.from_name == "MUHAMMAD HARIS HASSAN"
    assert names.to_name == "ZAINAB HASSAN"
    assert names.from_account == "**********6197"
    assert names.to_account == "*******2344"


def test_to_block_printed_before_from_block(easypaisa_text):
    names = resolve_names(normalize_lines(easypaisa_text))
    assert names.from_name == "ALICE KHAN"
    assert names.to_name == "BOB RAZA"


def test_only_from_marker():
    names = resolve_names(["ZAINAB HASSAN", "From", "ALI RAZA KHAN"])
    assert names.from_name == "ALI RAZA KHAN"
    assert names.to_name == "ZAINAB HASSAN"


def test_only_to_marker():
    names = resolve_names(["ALI RAZA", "Sent to", "ZAINAB HASSAN"])
    assert names.from_name == "ALI RAZA"
    assert names.to_name == "ZAINAB HASSAN"


def test_markers_without_names_fall_back_to_order():
    names = resolve_names(["ALI RAZA", "BOB KHAN", "From", "To"])
    assert names.from_name == "ALI RAZA"
    assert names.to_name == "BOB KHAN"


def test_lexicon_excludes_bank_words():
    names = resolve_names(["CURRENT ACCOUNT", "JAZZCASH", "ALICE KHAN", "BOB RAZA"])
    assert (names.from_name, names.to_name) == ("ALICE KHAN", "BOB RAZA")


def test_lexicon_matches_whole_words():
    lexicon = default_lexicon()
    assert "MUHAMMAD AMIN" not in lexicon
    assert "AMOUNT PAID" in lexicon
    assert lexicon.excludes("MY MOBILE ACCOUNT")


def test_custom_lexicon_and_file(tmp_path, monkeypatch):
    path = tmp_path / "exclusions.json"
    path.write_text(json.dumps(["HASSAN"]), encoding="utf-8")
    monkeypatch.setenv("NAME_EXCLUSIONS_FILE", str(path))
    assert "ZAINAB HASSAN" in default_lexicon()

    lexicon = NameLexicon(["ALICE"])
    names = resolve_names(["ALICE KHAN", "BOB RAZA"], lexicon=lexicon)
    assert names.from_name == "BOB RAZA"
    assert names.to_name == ""


def test_find_markers_last_wins():
    lines = ["From", "ALI RAZA", "To", "Total Amount", "Sent by", "To ZAINAB"]
    assert find_markers(lines) == (4, 5)
    assert find_markers(["Total Amount PKR 10"]) == (-1, -1)


def test_phones_are_distinct_and_positional():
    names = resolve_names(["03001234567", "03001234567", "03117654321"])
    assert names.from_phone == "03001234567"
    assert names.to_phone == "03117654321"


def test_short_digit_accounts_ignored_on_receipts():
    names = resolve_names(["020401037938961", "12345678901234"])
    assert names.from_account == "020401037938961"
    assert names.to_account == ""


def test_empty_input():
    names = resolve_names([])
    assert names.model_dump() == {
        "from_name": "",
        "to_name": "",
        "from_phone": "",
        "to_phone": "",
        "from_account": "",
        "to_account": "",
    }
