"""Tests for the conspire CLI."""

from __future__ import annotations

from unittest.mock import patch

from click.testing import CliRunner

from conspire.cli import main

CHART_YAML = """\
charts:
  - kind: scatter
    x: [1.0, 2.0, 3.0]
    y: [4.0, 5.0, 6.0]
  - kind: line
    x: [1.0, 2.0, 3.0]
    y: [6.0, 5.0, 4.0]
"""


class TestRenderCommand:
    def test_render_writes_html(self, tmp_path):
        chart = tmp_path / "charts.yaml"
        chart.write_text(CHART_YAML, encoding="utf-8")
        out = tmp_path / "out.html"

        result = CliRunner().invoke(main, ["render", str(chart), "-o", str(out)])

        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert "let data = [trace0, trace1];" in content

    def test_render_empty_chart_file_fails(self, tmp_path):
        chart = tmp_path / "charts.yaml"
        chart.write_text("charts: []\n", encoding="utf-8")

        result = CliRunner().invoke(main, ["render", str(chart), "-o", str(tmp_path / "o.html")])

        assert result.exit_code == 1
        assert "EmptyAssembly" in result.output
        assert not (tmp_path / "o.html").exists()

    def test_render_missing_dimension_fails(self, tmp_path):
        chart = tmp_path / "charts.yaml"
        chart.write_text("charts:\n  - kind: scatter\n    x: [1, 2]\n", encoding="utf-8")

        result = CliRunner().invoke(main, ["render", str(chart), "-o", str(tmp_path / "o.html")])

        assert result.exit_code == 1
        assert "Missing Y dimension" in result.output

    def test_render_with_config_file(self, tmp_path):
        chart = tmp_path / "charts.yaml"
        chart.write_text(CHART_YAML, encoding="utf-8")
        config = tmp_path / "conspire.yaml"
        out = tmp_path / "from_config.html"
        config.write_text(f'output_path: "{out.as_posix()}"\ndiv_id: "chart"\n', encoding="utf-8")

        result = CliRunner().invoke(main, ["render", str(chart), "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert "Plotly.newPlot('chart', data);" in out.read_text(encoding="utf-8")

    def test_display_flag_opens_viewer(self, tmp_path):
        chart = tmp_path / "charts.yaml"
        chart.write_text(CHART_YAML, encoding="utf-8")

        with patch("conspire.plot.open_in_viewer") as mock_open:
            result = CliRunner().invoke(
                main, ["render", str(chart), "-o", str(tmp_path / "o.html"), "--display"]
            )

        assert result.exit_code == 0, result.output
        mock_open.assert_called_once()

    def test_invalid_config_reports_error(self, tmp_path):
        chart = tmp_path / "charts.yaml"
        chart.write_text(CHART_YAML, encoding="utf-8")
        config = tmp_path / "conspire.yaml"
        config.write_text("viewer_timeout: -1\n", encoding="utf-8")

        result = CliRunner().invoke(
            main, ["render", str(chart), "-o", str(tmp_path / "o.html"), "--config", str(config)]
        )

        assert result.exit_code == 1
        assert "ConfigError" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert not (tmp_path / "o.html").exists()


class TestOtherCommands:
    def test_kinds_lists_every_chart(self):
        result = CliRunner().invoke(main, ["kinds"])
        assert result.exit_code == 0
        for kind in ("scatter", "line", "bar", "horizontal_bar", "pie", "box", "heatmap"):
            assert kind in result.output

    def test_demo(self, tmp_path):
        out = tmp_path / "demo.html"
        result = CliRunner().invoke(main, ["demo", "-o", str(out)])
        assert result.exit_code == 0, result.output
        content = out.read_text(encoding="utf-8")
        assert "size: 30.0" in content
        assert 'line: { color: "blue", }' in content

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
