import importlib


formatting = importlib.import_module("src.transcripts.formatting")
strip_formatting = formatting.strip_formatting


def test_strip_formatting_removes_allow_listed_tags():
    assert strip_formatting("<strong>hi</strong> there") == "hi there"
    assert strip_formatting("<i>a</i> <b>b</b> <em>c</em> <sub>d</sub>") == "a b c d"


def test_strip_formatting_removes_tags_with_attributes():
    assert strip_formatting('<mark class="x">note</mark>') == "note"


def test_strip_formatting_keeps_other_markup():
    assert strip_formatting('<font color="red">hi</font>') == '<font color="red">hi</font>'
    assert strip_formatting("a <br> b") == "a <br> b"


def test_strip_formatting_does_not_match_tag_prefixes():
    assert strip_formatting("<bold>x</bold> <index>") == "<bold>x</bold> <index>"


def test_strip_formatting_leaves_entities_and_plain_text_alone():
    assert strip_formatting("5 &lt; 6 & 7 > 3") == "5 &lt; 6 & 7 > 3"


def test_strip_formatting_matches_lower_case_tags_only():
    assert strip_formatting("<B>x</B> <b>y</b>") == "<B>x</B> y"
