import pytest

from pagetable import Align, ContentError, PlainText, StyledText, TableConfig, parse_cell, resolve_cell
from pagetable.collaborators import BLACK, rgb


class TestParseCell:
    def test_string_is_plain_text(self):
        assert parse_cell("abc") == PlainText("abc")

    def test_number_becomes_text(self):
        assert parse_cell(12.5) == PlainText("12.5")

    def test_mapping_camel_case(self):
        spec = parse_cell({
            "text": "t",
            "fontSize": 9,
            "bold": True,
            "align": "center",
            "backgroundColor": [0.1, 0.2, 0.3],
            "borderWidth": 2,
        })
        assert spec == StyledText(
            text="t",
            font_size=9,
            bold=True,
            align=Align.CENTER,
            background_color=(0.1, 0.2, 0.3),
            border_width=2,
        )

    def test_mapping_snake_case(self):
        spec = parse_cell({"text": "t", "foreground_color": (1, 0, 0)})
        assert spec.foreground_color == (1.0, 0.0, 0.0)

    def test_spec_passes_through(self):
        spec = StyledText("x", bold=True)
        assert parse_cell(spec) is spec

    @pytest.mark.parametrize("value", [
        None,
        {"bold": True},
        {"text": None},
        {"text": "x", "align": "right"},
        {"text": "x", "backgroundColor": [2, 0, 0]},
        {"text": "x", "foregroundColor": "red"},
        {"text": "x", "fontSize": 0},
        {"text": "x", "borderWidth": -1},
        {"text": "x", "bold": "false"},
        {"text": "x", "bold": 1},
        {"text": "x", "fontSize": "9"},
        {"text": "x", "italic": True},
        ["not", "a", "cell"],
    ])
    def test_invalid_cells(self, value):
        with pytest.raises(ContentError):
            parse_cell(value)


class TestSpecInstances:
    def test_align_given_as_string(self):
        assert StyledText("x", align="center").align is Align.CENTER

    def test_numeric_text_is_coerced(self):
        assert PlainText(7).text == "7"
        assert StyledText(2.5).text == "2.5"

    def test_reportlab_color_is_accepted(self):
        spec = StyledText("x", background_color=rgb(0.2, 0.4, 0.6))
        assert spec.background_color == (0.2, 0.4, 0.6)

    @pytest.mark.parametrize("kwargs", [
        {"text": None},
        {"text": "x", "align": "justify"},
        {"text": "x", "bold": "yes"},
        {"text": "x", "font_size": -3},
        {"text": "x", "border_width": -0.5},
        {"text": "x", "foreground_color": (0, 0)},
    ])
    def test_invalid_styled_text(self, kwargs):
        with pytest.raises(ContentError):
            StyledText(**kwargs)

    def test_invalid_plain_text(self):
        with pytest.raises(ContentError):
            PlainText(None)


class TestResolveCell:
    def test_plain_text_uses_table_defaults(self):
        cell = resolve_cell("x", TableConfig(font_size=11, border_width=2))
        assert cell.text == "x"
        assert cell.font_size == 11
        assert cell.border_width == 2
        assert cell.bold is False
        assert cell.align is Align.LEFT
        assert cell.background_color is None
        assert cell.foreground_color is BLACK

    def test_styled_overrides(self):
        cell = resolve_cell(
            {"text": "x", "fontSize": 8, "borderWidth": 0, "backgroundColor": [0, 0, 1]},
            TableConfig(),
        )
        assert cell.font_size == 8
        assert cell.border_width == 0
        assert cell.background_color.blue == 1

    def test_styled_without_overrides_falls_back(self):
        cell = resolve_cell({"text": "x"}, TableConfig())
        assert cell.font_size == 14
        assert cell.border_width == 1
        assert cell.foreground_color is BLACK
