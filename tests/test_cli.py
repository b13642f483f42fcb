"""Tests for the square-rings CLI."""

import json

import pytest

from square_rings.cli import load_config, main


class TestPlaceCommand:
    """Tests for the place subcommand."""

    def test_writes_outputs(self, tmp_path, poi_json_file, capsys):
        out_dir = tmp_path / "results"
        status = main(["place", "--input", str(poi_json_file), "--output", str(out_dir)])

        assert status == 0
        assert (out_dir / "placement.json").exists()
        assert (out_dir / "placement.csv").exists()
        assert (out_dir / "summary.txt").exists()
        out = capsys.readouterr().out
        assert "Loaded 4 POIs" in out
        assert "Wrote placement.json" in out

    def test_nearest_poi_first(self, tmp_path, poi_json_file):
        """The CLI sorts by distance, so the nearest POI takes ring 0."""
        out_dir = tmp_path / "results"
        main(["place", "--input", str(poi_json_file), "--output", str(out_dir)])

        data = json.loads((out_dir / "placement.json").read_text())
        ring0_ids = [m["id"] for m in data["rings"][0]["members"]]
        # Harbor (id 4, distance 5) at 0.0 rad beats Bridge (id 2, 30 deg)
        assert 4 in ring0_ids
        assert 2 not in ring0_ids

    def test_verbose(self, tmp_path, poi_json_file, capsys):
        main(["place", "--input", str(poi_json_file), "--output", str(tmp_path), "-v"])
        assert "no overlap, insert" in capsys.readouterr().out

    def test_missing_input(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["place"])
        assert excinfo.value.code == 2
        assert "--input is required" in capsys.readouterr().err

    def test_bad_poi_width(self, tmp_path, poi_json_file, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["place", "--input", str(poi_json_file), "--poi-width", "-1",
                  "--output", str(tmp_path)])
        assert excinfo.value.code == 2
        assert "poi_width" in capsys.readouterr().err

    def test_bad_input_file(self, tmp_path, capsys):
        path = tmp_path / "pois.txt"
        path.write_text("")
        with pytest.raises(SystemExit):
            main(["place", "--input", str(path), "--output", str(tmp_path)])
        assert "Unsupported" in capsys.readouterr().err

    def test_config_file(self, tmp_path, poi_json_file):
        """Values from the YAML config are used when flags are absent."""
        out_dir = tmp_path / "from_config"
        config = tmp_path / "config.yaml"
        config.write_text(
            f"input: {poi_json_file}\n"
            f"output: {out_dir}\n"
            "poi-width: 10\n"
            "scatter-coefficient: 1.5\n"
            "max-rings: 4\n"
        )
        main(["place", "--config", str(config)])

        data = json.loads((out_dir / "placement.json").read_text())
        assert data["poi_width"] == 10
        assert data["scatter_coefficient"] == 1.5
        assert data["max_rings"] == 4

    @pytest.mark.parametrize(
        "line, key",
        [
            ("poi-width: wide", "poi-width"),
            ("scatter-coefficient: [1, 2]", "scatter-coefficient"),
            ("max-rings: 2.5", "max-rings"),
        ],
    )
    def test_invalid_config_value(self, tmp_path, poi_json_file, capsys, line, key):
        """A config value that does not convert is a usage error, not a traceback."""
        config = tmp_path / "config.yaml"
        config.write_text(f"input: {poi_json_file}\n{line}\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["place", "--config", str(config), "--output", str(tmp_path)])
        assert excinfo.value.code == 2
        assert f"Invalid value in {config} for '{key}'" in capsys.readouterr().err

    def test_unknown_config_key(self, tmp_path, poi_json_file, capsys):
        config = tmp_path / "config.yaml"
        config.write_text(f"input: {poi_json_file}\npoi_width: 10\n")
        with pytest.raises(SystemExit) as excinfo:
            main(["place", "--config", str(config)])
        assert excinfo.value.code == 2
        assert "Unknown config key(s)" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["place", "--config", str(tmp_path / "nope.yaml")])
        assert excinfo.value.code == 2
        assert "No such file" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["place", "--input", str(tmp_path / "nope.json"), "--output", str(tmp_path)])
        assert excinfo.value.code == 2
        assert "No such file" in capsys.readouterr().err

    def test_input_not_a_record_list(self, tmp_path, capsys):
        """{"pois": null} is reported through the parser, exit status 2."""
        path = tmp_path / "pois.json"
        path.write_text(json.dumps({"pois": None}))
        with pytest.raises(SystemExit) as excinfo:
            main(["place", "--input", str(path), "--output", str(tmp_path)])
        assert excinfo.value.code == 2
        assert "Expected a list of POI records" in capsys.readouterr().err

    def test_flags_override_config(self, tmp_path, poi_json_file):
        config = tmp_path / "config.yaml"
        config.write_text(f"input: {poi_json_file}\npoi-width: 10\n")
        main(["place", "--config", str(config), "--poi-width", "20",
              "--output", str(tmp_path)])

        data = json.loads((tmp_path / "placement.json").read_text())
        assert data["poi_width"] == 20


class TestCheckCommand:
    """Tests for the check subcommand."""

    def test_valid_placement(self, tmp_path, poi_json_file, capsys):
        main(["place", "--input", str(poi_json_file), "--output", str(tmp_path)])
        capsys.readouterr()

        status = main(["check", "--placement", str(tmp_path / "placement.json"),
                       "--input", str(poi_json_file)])
        assert status == 0
        assert capsys.readouterr().out.startswith("OK:")

    def test_tampered_placement(self, tmp_path, poi_json_file, capsys):
        """Moving a POI next to another on the same ring is reported."""
        main(["place", "--input", str(poi_json_file), "--output", str(tmp_path)])
        path = tmp_path / "placement.json"
        data = json.loads(path.read_text())
        members = data["rings"][0]["members"]
        assert len(members) >= 2
        members[1]["azimuth"] = members[0]["azimuth"] + 0.01
        path.write_text(json.dumps(data))
        capsys.readouterr()

        status = main(["check", "--placement", str(path)])
        assert status == 1
        assert "problem" in capsys.readouterr().out

    def test_missing_placement_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["check", "--placement", str(tmp_path / "nope.json")])
        assert excinfo.value.code == 2
        assert "No such file" in capsys.readouterr().err

    def test_missing_input_poi(self, tmp_path, poi_json_file, capsys):
        main(["place", "--input", str(poi_json_file), "--output", str(tmp_path)])
        extra = tmp_path / "more.json"
        records = json.loads(poi_json_file.read_text())
        records.append({"id": 99, "azimuth": 1.0, "distance": 1.0})
        extra.write_text(json.dumps(records))
        capsys.readouterr()

        status = main(["check", "--placement", str(tmp_path / "placement.json"),
                       "--input", str(extra)])
        assert status == 1
        assert "POI 99 is missing" in capsys.readouterr().out


class TestMain:
    """Tests for main entry point."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestLoadConfig:
    """Tests for load_config function."""

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("poi-width: [30\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)
