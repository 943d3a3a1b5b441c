"""Tests for the Plotly.js backend serialization."""

from __future__ import annotations

import re

import pytest

from conspire.backends import get_backend, list_backends, register_backend
from conspire.backends.plotly import PlotlyBackend, format_matrix, format_series
from conspire.config import RenderConfig
from conspire.core.charts import Bar, Box, HorizontalBar, Line, Pie, Scatter, heatmap
from conspire.core.errors import RenderError, UnsupportedVariant
from conspire.core.layer import Layer, MatrixLayer
from conspire.core.models import (
    BackendKind,
    CategoricalSeries,
    ChartKind,
    QuantitativeMatrix,
    QuantitativeSeries,
)


@pytest.fixture
def backend():
    return PlotlyBackend()


@pytest.fixture
def xy_layer():
    return Layer().bind_x([1.0, 2.0, 3.0]).bind_y([4.0, 5.0, 6.0])


# ---------------------------------------------------------------------------
# Literal formatting
# ---------------------------------------------------------------------------

class TestFormatting:
    def test_singleton_collapses_to_scalar(self):
        assert format_series(QuantitativeSeries(values=(1.0,))) == "1.0"
        assert format_series(CategoricalSeries(values=("blue",))) == '"blue"'

    def test_multi_element_array_keeps_order(self):
        assert format_series(QuantitativeSeries(values=(3.0, 1.5))) == "[3.0, 1.5]"
        assert format_series(CategoricalSeries(values=("b", "a"))) == '["b", "a"]'

    def test_strings_are_escaped(self):
        assert format_series(CategoricalSeries(values=('say "hi"',))) == '"say \\"hi\\""'

    def test_markup_characters_are_unicode_escaped(self):
        s = CategoricalSeries(values=("</script><b>x</b>", "a & b"))
        assert format_series(s) == (
            '["\\u003c/script\\u003e\\u003cb\\u003ex\\u003c/b\\u003e", "a \\u0026 b"]'
        )

    def test_label_cannot_close_script_block(self):
        layer = Layer().bind_x(["a", "</script><b>x</b>", "c"]).with_name("</script>")
        artifact = PlotlyBackend().render([Pie.from_layer(layer)])
        body = artifact.content.split("<script>", 1)[1]
        assert body.count("</script>") == 1
        assert "<b>" not in artifact.content

    def test_title_is_html_escaped(self, xy_layer):
        config = RenderConfig(title="</title><script>alert(1)</script>")
        artifact = PlotlyBackend(config).render([Bar.from_layer(xy_layer)])
        assert "<title>&lt;/title&gt;&lt;script&gt;alert(1)&lt;/script&gt;</title>" in artifact.content

    def test_non_finite_numbers(self):
        s = QuantitativeSeries(values=(float("nan"), float("inf"), float("-inf")))
        assert format_series(s) == "[NaN, Infinity, -Infinity]"

    def test_matrix_never_collapses(self):
        assert format_matrix(QuantitativeMatrix(rows=((1.0,),))) == "[[1.0]]"
        assert format_matrix(QuantitativeMatrix(rows=((1.0, 2.0), (3.0, 4.0)))) == (
            "[[1.0, 2.0], [3.0, 4.0]]"
        )


# ---------------------------------------------------------------------------
# Per-variant serialization
# ---------------------------------------------------------------------------

class TestSerialize:
    def test_scatter_without_decoration(self, backend, xy_layer):
        text = backend.serialize(Scatter.from_layer(xy_layer))
        assert text == (
            "x: [1.0, 2.0, 3.0], y: [4.0, 5.0, 6.0], "
            "mode: 'markers', type: 'scatter', marker: { }, "
        )

    def test_scatter_with_color_and_size(self, backend, xy_layer):
        layer = xy_layer.bind_color([1, 2, 3]).bind_size([30])
        text = backend.serialize(Scatter.from_layer(layer))
        assert "marker: { color: [1.0, 2.0, 3.0], size: 30.0, }, " in text

    def test_only_present_decorations_emitted(self, backend, xy_layer):
        text = backend.serialize(Scatter.from_layer(xy_layer.bind_size([5, 6, 7])))
        assert "marker: { size: [5.0, 6.0, 7.0], }, " in text
        assert "color" not in text

    def test_line_uses_line_block(self, backend, xy_layer):
        text = backend.serialize(Line.from_layer(xy_layer.bind_color("blue").bind_size([2])))
        assert "mode: 'lines', type: 'scatter', " in text
        assert 'line: { color: "blue", width: 2.0, }, ' in text

    def test_bar(self, backend, xy_layer):
        text = backend.serialize(Bar.from_layer(xy_layer))
        assert text.endswith("type: 'bar', marker: { }, ")
        assert "orientation" not in text

    def test_horizontal_bar(self, backend, xy_layer):
        text = backend.serialize(HorizontalBar.from_layer(xy_layer))
        assert "orientation: 'h', type: 'bar', " in text

    def test_pie_categorical_with_name(self, backend):
        layer = Layer().bind_x(["a", "b", "c"]).with_name("cats")
        text = backend.serialize(Pie.from_layer(layer))
        assert text == (
            'labels: ["a", "b", "c"], type: \'pie\', marker: { }, name: "cats", '
        )

    def test_pie_quantitative_colors(self, backend):
        layer = Layer().bind_x([1, 2]).bind_color(["red", "green"])
        text = backend.serialize(Pie.from_layer(layer))
        assert text.startswith("values: [1.0, 2.0], ")
        assert 'marker: { colors: ["red", "green"], }, ' in text

    def test_box_singleton_x_is_scalar(self, backend):
        text = backend.serialize(Box.from_layer(Layer().bind_x([1.0])))
        assert text.startswith("x: 1.0, ")
        assert "x: [1.0]" not in text
        assert "boxpoints: 'outliers', type: 'box', " in text

    def test_attribute_order(self, backend, xy_layer):
        text = backend.serialize(Scatter.from_layer(xy_layer.bind_color([1]).with_name("n")))
        positions = [text.index(key) for key in ("x:", "y:", "mode:", "marker:", "name:")]
        assert positions == sorted(positions)

    def test_no_name_when_unbound(self, backend, xy_layer):
        assert "name" not in backend.serialize(Bar.from_layer(xy_layer))

    def test_heatmap(self, backend):
        text = backend.serialize(heatmap(MatrixLayer().bind_z([[1, 2], [3, 4]])))
        assert text == "z: [[1.0, 2.0], [3.0, 4.0]], type: 'heatmap', "

    def test_heatmap_color_matrix_unsupported(self, backend):
        variant = heatmap(MatrixLayer().bind_z([[1]]).bind_color([[2]]))
        with pytest.raises(UnsupportedVariant) as exc_info:
            backend.serialize(variant)
        assert exc_info.value.kind == ChartKind.HEATMAP
        assert exc_info.value.backend == BackendKind.PLOTLY
        assert isinstance(exc_info.value, RenderError)

    def test_non_variant_rejected(self, backend):
        with pytest.raises(RenderError):
            backend.serialize(object())


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------

class TestRender:
    def test_scenario_scatter_alone(self, backend, xy_layer):
        artifact = backend.render([Scatter.from_layer(xy_layer)])
        assert "x: [1.0, 2.0, 3.0]" in artifact.content
        assert "y: [4.0, 5.0, 6.0]" in artifact.content
        assert "mode: 'markers'" in artifact.content
        assert "marker: { }, " in artifact.content
        assert artifact.trace_names == ("trace0",)

    def test_trace_names_match_collection(self, backend, xy_layer):
        variants = [
            Scatter.from_layer(xy_layer),
            Line.from_layer(xy_layer),
            Bar.from_layer(xy_layer),
        ]
        artifact = backend.render(variants)
        declared = re.findall(r"let (trace\d+) = \{", artifact.content)
        collected = re.search(r"let data = \[(.*?)\];", artifact.content).group(1)
        assert declared == ["trace0", "trace1", "trace2"]
        assert collected.split(", ") == declared
        assert list(artifact.trace_names) == declared

    def test_scatter_then_line_order(self, backend, xy_layer):
        artifact = backend.render([Scatter.from_layer(xy_layer), Line.from_layer(xy_layer)])
        content = artifact.content
        assert content.index("let trace0") < content.index("let trace1")
        trace0 = content[content.index("let trace0"):content.index("let trace1")]
        assert "mode: 'markers'" in trace0
        assert "let data = [trace0, trace1]; Plotly.newPlot('myDiv', data);" in content

    def test_document_shell(self, xy_layer):
        config = RenderConfig(plotly_url="https://example.test/plotly.js", div_id="chart", title="T")
        artifact = PlotlyBackend(config).render([Bar.from_layer(xy_layer)], display=True)
        assert '<script src="https://example.test/plotly.js"></script>' in artifact.content
        assert '<div id="chart"></div>' in artifact.content
        assert "Plotly.newPlot('chart', data);" in artifact.content
        assert "<title>T</title>" in artifact.content
        assert artifact.display is True
        assert artifact.backend == BackendKind.PLOTLY

    def test_failing_variant_produces_no_artifact(self, backend, xy_layer):
        bad = heatmap(MatrixLayer().bind_z([[1]]).bind_color([[2]]))
        with pytest.raises(UnsupportedVariant):
            backend.render([Scatter.from_layer(xy_layer), bad])

    def test_empty_sequence_rejected(self, backend):
        with pytest.raises(RenderError):
            backend.render([])


class TestBackendRegistry:
    def test_get_plotly(self):
        assert isinstance(get_backend(BackendKind.PLOTLY), PlotlyBackend)
        assert isinstance(get_backend("plotly"), PlotlyBackend)

    def test_unknown_backend(self):
        with pytest.raises(RenderError):
            get_backend("matplotlib")

    def test_config_passed_through(self):
        config = RenderConfig(div_id="other")
        assert get_backend(BackendKind.PLOTLY, config).config is config

    def test_register_backend_replaces(self):
        class CustomPlotly(PlotlyBackend):
            pass

        register_backend(BackendKind.PLOTLY, CustomPlotly)
        try:
            assert isinstance(get_backend(BackendKind.PLOTLY), CustomPlotly)
        finally:
            register_backend(BackendKind.PLOTLY, PlotlyBackend)
        assert BackendKind.PLOTLY in list_backends()
