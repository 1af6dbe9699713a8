from __future__ import annotations

import math
import unittest

from xychart_drawio.parser import classify_line, parse_xychart
from xychart_drawio.schema import DEFAULT_TITLE, ChartModel, ValueAxis

SALES_CHART = """
xychart-beta
    title "Sales"
    x-axis [Jan, Feb, Mar]
    y-axis "USD" 0 --> 100
    line [10, 50, 90]
"""


class ChartParserTests(unittest.TestCase):
    def test_sales_chart_parses_into_full_model(self) -> None:
        model = parse_xychart(SALES_CHART)
        self.assertEqual(
            model,
            ChartModel(
                title="Sales",
                category_labels=("Jan", "Feb", "Mar"),
                value_axis=ValueAxis(label="USD", min=0.0, max=100.0),
                series=(10.0, 50.0, 90.0),
            ),
        )

    def test_missing_directives_keep_defaults(self) -> None:
        model = parse_xychart("xychart-beta\n")
        self.assertEqual(model.title, DEFAULT_TITLE)
        self.assertEqual(model.title, "Untitled Chart")
        self.assertEqual(model.category_labels, ())
        self.assertEqual(model.value_axis, ValueAxis(label="", min=0.0, max=100.0))
        self.assertEqual(model.series, ())

    def test_empty_text_returns_default_model(self) -> None:
        self.assertEqual(parse_xychart(""), ChartModel())

    def test_y_axis_range_without_label(self) -> None:
        model = parse_xychart("y-axis 0 --> 50")
        self.assertEqual(model.value_axis.label, "")
        self.assertEqual(model.value_axis.min, 0.0)
        self.assertEqual(model.value_axis.max, 50.0)

    def test_y_axis_label_without_range(self) -> None:
        model = parse_xychart('y-axis "Revenue"')
        self.assertEqual(model.value_axis, ValueAxis(label="Revenue", min=0.0, max=100.0))

    def test_y_axis_label_with_punctuation_and_signed_range(self) -> None:
        model = parse_xychart('y-axis "Revenue (in $)" -10 --> 11000')
        self.assertEqual(model.value_axis.label, "Revenue (in $)")
        self.assertEqual(model.value_axis.min, -10.0)
        self.assertEqual(model.value_axis.max, 11000.0)

    def test_y_axis_range_without_spaces(self) -> None:
        model = parse_xychart("y-axis 2.5-->7.5")
        self.assertEqual((model.value_axis.min, model.value_axis.max), (2.5, 7.5))

    def test_title_strips_keyword_and_quotes(self) -> None:
        self.assertEqual(parse_xychart('title "Quarterly "Revenue""').title, "Quarterly Revenue")
        self.assertEqual(parse_xychart("title   Plain words  ").title, "Plain words")

    def test_labels_and_values_are_trimmed(self) -> None:
        model = parse_xychart("x-axis [  a ,b,   c d ]\nline [ 1.5,  -2 , 3e2 ]")
        self.assertEqual(model.category_labels, ("a", "b", "c d"))
        self.assertEqual(model.series, (1.5, -2.0, 300.0))

    def test_non_numeric_values_become_nan(self) -> None:
        model = parse_xychart("line [10, abc, 90]")
        self.assertEqual(model.series[0], 10.0)
        self.assertTrue(math.isnan(model.series[1]))
        self.assertEqual(model.series[2], 90.0)

    def test_values_keep_leading_number_and_drop_trailing_text(self) -> None:
        model = parse_xychart("line [10abc, 1_000, 12.5%, .5, 2e3x, -Infinity]")
        self.assertEqual(model.series, (10.0, 1.0, 12.5, 0.5, 2000.0, -math.inf))

    def test_python_only_float_spellings_become_nan(self) -> None:
        model = parse_xychart("line [inf, nan, infinity, INFINITY]")
        self.assertEqual(len(model.series), 4)
        self.assertTrue(all(math.isnan(value) for value in model.series))

    def test_range_bounds_use_leading_number(self) -> None:
        model = parse_xychart("y-axis nan --> 1_0")
        self.assertTrue(math.isnan(model.value_axis.min))
        self.assertEqual(model.value_axis.max, 1.0)

    def test_range_bounds_accept_exponents(self) -> None:
        model = parse_xychart('y-axis "Small" 1e-3 --> 2.5E2')
        self.assertEqual((model.value_axis.min, model.value_axis.max), (0.001, 250.0))
        self.assertEqual(model.value_axis.label, "Small")

    def test_empty_brackets_yield_single_entries(self) -> None:
        model = parse_xychart("x-axis []\nline []")
        self.assertEqual(model.category_labels, ("",))
        self.assertEqual(len(model.series), 1)
        self.assertTrue(math.isnan(model.series[0]))

    def test_later_directive_overwrites_earlier(self) -> None:
        model = parse_xychart("title First\nline [1, 2]\ntitle Second\nline [3, 4, 5]")
        self.assertEqual(model.title, "Second")
        self.assertEqual(model.series, (3.0, 4.0, 5.0))

    def test_unbalanced_brackets_keep_previous_value(self) -> None:
        model = parse_xychart("x-axis [a, b]\nx-axis [c, d\nline [1, 2]\nline 3, 4]")
        self.assertEqual(model.category_labels, ("a", "b"))
        self.assertEqual(model.series, (1.0, 2.0))

    def test_line_order_does_not_matter(self) -> None:
        forward = parse_xychart('title "T"\nx-axis [a, b]\nline [1, 2]')
        backward = parse_xychart('line [1, 2]\nx-axis [a, b]\ntitle "T"')
        self.assertEqual(forward, backward)

    def test_unknown_directives_are_ignored(self) -> None:
        model = parse_xychart("xychart-beta\nbar [5, 6]\n%% comment\nline [1]")
        self.assertEqual(model.series, (1.0,))

    def test_classify_line_tags_directives(self) -> None:
        self.assertEqual(classify_line('title "Sales"'), ("title", '"Sales"'))
        self.assertEqual(classify_line("x-axis [a]"), ("x-axis", "[a]"))
        self.assertEqual(classify_line("y-axis 0 --> 1"), ("y-axis", "0 --> 1"))
        self.assertEqual(classify_line("line [1]"), ("line", "[1]"))
        self.assertEqual(classify_line("xychart-beta"), ("other", "xychart-beta"))

    def test_model_as_dict(self) -> None:
        payload = parse_xychart(SALES_CHART).as_dict()
        self.assertEqual(payload["title"], "Sales")
        self.assertEqual(payload["category_labels"], ["Jan", "Feb", "Mar"])
        self.assertEqual(payload["value_axis"], {"label": "USD", "min": 0.0, "max": 100.0})
        self.assertEqual(payload["series"], [10.0, 50.0, 90.0])


if __name__ == "__main__":
    unittest.main()
