"""End-to-end tests for the command line and settings."""

import pytest
from pydantic import ValidationError

from cg2d.cli import main
from cg2d.config import Settings
from cg2d.geom import Domain, Pt
from cg2d.periodic import PeriodicTriangulation2
from cg2d.vtu import read_vtu


class TestCli:
    """Test the points file -> VTU command."""

    def test_single_sheet(self, tmp_path, points_file, capsys):
        out = tmp_path / "periodic.vtu"
        assert main([str(points_file), "-o", str(out), "--stats", "--check"]) == 0
        mesh = read_vtu(out)
        assert mesh.n_cells == 80
        printed = capsys.readouterr().out
        assert "Vertices: 40" in printed
        assert "Faces:    80" in printed
        assert f"to {out}" in printed

    def test_nine_sheets(self, tmp_path, points_file):
        out = tmp_path / "periodic9.vtu"
        assert main([str(points_file), "-o", str(out), "--sheets", "9"]) == 0
        assert read_vtu(out).n_cells == 9 * 80

    def test_custom_domain(self, tmp_path):
        src = tmp_path / "pts.cin"
        src.write_text("1.5 0.5\n3.2 2.7\n2.4 1.1\n1.1 2.9\n", encoding="utf-8")
        out = tmp_path / "out.vtu"
        assert main([str(src), "-o", str(out), "--domain", "1", "4", "0", "3"]) == 0
        assert read_vtu(out).n_cells == 8

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.cin"), "-o", str(tmp_path / "x.vtu")]) == 1

    def test_invalid_domain(self, tmp_path, points_file):
        assert main([str(points_file), "-o", str(tmp_path / "x.vtu"), "--domain", "0", "0", "0", "1"]) == 1

    def test_point_outside_domain(self, tmp_path, points_file):
        args = [str(points_file), "-o", str(tmp_path / "x.vtu"), "--domain", "0", "0.5", "0", "1"]
        assert main(args) == 1

    def test_unwritable_output(self, tmp_path, points_file):
        assert main([str(points_file), "-o", str(tmp_path / "no" / "x.vtu")]) == 1

    def test_bad_sheets_is_usage_error(self, points_file):
        with pytest.raises(SystemExit) as exc:
            main([str(points_file), "--sheets", "4"])
        assert exc.value.code == 2

    def test_bad_log_level_is_usage_error(self, points_file):
        with pytest.raises(SystemExit) as exc:
            main([str(points_file), "--log-level", "verbose"])
        assert exc.value.code == 2

    def test_log_level_is_case_insensitive(self, tmp_path, points_file):
        assert main([str(points_file), "-o", str(tmp_path / "x.vtu"), "--log-level", "debug"]) == 0

    def test_stats_prints_adjacency(self, tmp_path, points_file, capsys):
        assert main([str(points_file), "-o", str(tmp_path / "x.vtu"), "--stats"]) == 0
        printed = capsys.readouterr().out
        assert "Adjacency list (vertex neighbors):" in printed
        assert "  [0] " in printed and "connects to: " in printed

    def test_broken_torus_not_written(self, tmp_path, points_file, monkeypatch):
        """A triangulation with unpaired edges fails instead of exporting."""
        tri = PeriodicTriangulation2(Domain(), [Pt(0.0, 0.0), Pt(0.5, 0.0), Pt(0.0, 0.5)])
        tri.add_face(0, 1, 2)
        tri.link_neighbors()
        monkeypatch.setattr("cg2d.cli.periodic_delaunay", lambda points, domain: tri)
        out = tmp_path / "x.vtu"
        assert main([str(points_file), "-o", str(out)]) == 1
        assert not out.exists()


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self):
        s = Settings()
        assert s.domain == Domain()
        assert s.sheets == 1
        assert s.output_path == "periodic_triangulation.vtu"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CG2D_XMAX", "2.5")
        monkeypatch.setenv("CG2D_SHEETS", "9")
        s = Settings()
        assert s.domain.width == 2.5
        assert s.sheets == 9

    def test_bad_sheets(self, monkeypatch):
        monkeypatch.setenv("CG2D_SHEETS", "3")
        with pytest.raises(ValidationError):
            Settings()

    def test_env_sets_cli_default(self, tmp_path, points_file, monkeypatch):
        out = tmp_path / "env.vtu"
        monkeypatch.setenv("CG2D_OUTPUT_PATH", str(out))
        assert main([str(points_file)]) == 0
        assert out.exists()
