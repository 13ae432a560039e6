import pytest

from figref.errors import DuplicateLabelError
from figref.prescan import (
    CaptionCall,
    extract_label,
    prescan_labels,
    scan_caption_calls,
)

WAVES_LINES = [
    "# Waves\n",
    "\n",
    'As `py fig_ref("cos_wav", hyperlink=True)` shows, cosine waves repeat.\n',
    "\n",
    "```py\n",
    'figure("five_to_one.png", fig_cap("five_to_one", "Counting down"))\n',
    "```\n",
    "\n",
    "```py\n",
    'figure("one_to_five.png", fig_cap("one_to_five", "Counting up", center=True))\n',
    "```\n",
    "\n",
    "```py\n",
    "figure(\"cos.png\", fig_cap('cos_wav', 'A cosine wave', color='red'))\n",
    "```\n",
]


def test_labels_numbered_in_order_of_appearance():
    assert prescan_labels(WAVES_LINES) == {
        "five_to_one": 1,
        "one_to_five": 2,
        "cos_wav": 3,
    }


def test_prescan_preserves_order_in_mapping():
    assert list(prescan_labels(WAVES_LINES)) == ["five_to_one", "one_to_five", "cos_wav"]


def test_empty_document_has_no_labels():
    assert prescan_labels([]) == {}
    assert prescan_labels(["Just some text\n", "with no figures\n"]) == {}


def test_multiple_calls_on_one_line_are_ordered_by_column():
    line = '`py fig_cap("a", "A", inline=True)` and `py fig_cap("b", "B", inline=True)`\n'
    assert prescan_labels([line]) == {"a": 1, "b": 2}


def test_label_keyword_argument():
    assert prescan_labels(['fig_cap(text="Some text", label="kw")']) == {"kw": 1}
    assert prescan_labels(["fig_cap(label = 'kw2', text='Some text')"]) == {"kw2": 1}


def test_long_name_and_method_calls_are_found():
    lines = [
        'registry.register_caption("via_registry", "text")',
        'register_caption("bare", "text")',
    ]
    assert prescan_labels(lines) == {"via_registry": 1, "bare": 2}


def test_similar_function_names_are_ignored():
    lines = [
        'my_fig_cap("not_a_caption", "text")',
        'fig_caption("also_not", "text")',
    ]
    assert prescan_labels(lines) == {}


def test_computed_labels_are_not_detected():
    lines = [
        'fig_cap("plot_" + name, "text")',
        "fig_cap(label_var, 'text')",
        'fig_cap(f"plot_{i}", "text")',
    ]
    assert prescan_labels(lines) == {}


def test_multiline_calls_are_not_detected():
    lines = [
        "figure('a.png', fig_cap(\n",
        "    'split', 'Split over two lines'))\n",
    ]
    assert prescan_labels(lines) == {}


def test_first_argument_on_same_line_is_enough():
    # The label is on the same line as the call, even though the rest isn't
    lines = [
        "fig_cap('on_first_line',\n",
        "        'The caption text')\n",
    ]
    assert prescan_labels(lines) == {"on_first_line": 1}


def test_empty_label_is_skipped():
    assert prescan_labels(['fig_cap("", "text")']) == {}


def test_duplicate_label_raises():
    lines = [
        'fig_cap("dup", "first")\n',
        "\n",
        'fig_cap("dup", "second")\n',
    ]
    with pytest.raises(DuplicateLabelError) as err_info:
        prescan_labels(lines)
    assert err_info.value.label == "dup"
    assert err_info.value.operation == "pre-scan"
    assert err_info.value.first_line == 1
    assert err_info.value.second_line == 3
    assert "'dup'" in str(err_info.value)
    assert "pre-scan" in str(err_info.value)


def test_scan_reports_every_call():
    lines = [
        'fig_cap("dup", "first")',
        'x = 1; register_caption("dup", "second")',
    ]
    assert scan_caption_calls(lines) == [
        CaptionCall(label="dup", line=1, column=0, function="fig_cap"),
        CaptionCall(label="dup", line=2, column=7, function="register_caption"),
    ]


def test_custom_caption_functions():
    lines = ['caption("mine", "text")', 'fig_cap("default", "text")']
    assert prescan_labels(lines, caption_functions=["caption"]) == {"mine": 1}


def test_no_caption_functions_is_an_error():
    with pytest.raises(ValueError):
        prescan_labels(['fig_cap("a", "b")'], caption_functions=[])


def test_extract_label():
    assert extract_label('"x", "hello"') == "x"
    assert extract_label("'x'") == "x"
    assert extract_label(' r"raw_label" , "text"') == "raw_label"
    assert extract_label('"with \\" quote", "t"') == 'with " quote'
    assert extract_label('"x" + suffix, "t"') is None
    assert extract_label("") is None


def test_escaped_labels_are_decoded():
    lines = [
        'fig_cap("tab\\there", "text")\n',
        "fig_cap('it\\'s', \"text\")\n",
        'fig_cap(r"raw\\t", "text")\n',
        'fig_cap("\\u00e9t\\u00e9", "text")\n',
    ]
    assert prescan_labels(lines) == {
        "tab\there": 1,
        "it's": 2,
        "raw\\t": 3,
        "\u00e9t\u00e9": 4,
    }


def test_invalid_escape_is_not_detected():
    assert extract_label('"\\N{NOT A REAL NAME}", "t"') is None
