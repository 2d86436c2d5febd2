import pytest

from hexconv.cli import main

HEADER = "border_size=1\nusage=map\n\n"


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    # Keep any hexconv.toml in the developer's cwd out of the picture
    monkeypatch.chdir(tmp_path)


def test_end_to_end(tmp_path, write_png, scenario_raster):
    image = write_png("scenario.png", scenario_raster)
    (tmp_path / "tiles.dat").write_text("ff0000 Gg\n")

    code = main([str(image), "-t", "32", "34", "-i", "16", "17", "-o", "result.map", "-d", "tiles.dat"])

    assert code == 0
    text = (tmp_path / "result.map").read_text()
    assert text == HEADER + "Gg, Gg\nGg\n"


def test_major_flag(tmp_path, write_png, scenario_raster):
    image = write_png("scenario.png", scenario_raster)
    (tmp_path / "tiles.dat").write_text("0000ff Wog\n")

    assert main([str(image), "-t", "32", "34", "-i", "16", "17", "-m"]) == 0
    assert (tmp_path / "map").read_text() == HEADER + "Gg, Wog\nGg\n"


def test_template_mode_and_dump(tmp_path, write_png, scenario_raster):
    image = write_png("scenario.png", scenario_raster)
    (tmp_path / "templates.dat").write_text("")

    code = main([str(image), "--mode", "template", "-d", "templates.dat", "-t", "32", "34",
                 "-i", "16", "17", "-s", "8", "8", "--threshold", "4", "--dump-dir", "debug"])

    assert code == 0
    assert (tmp_path / "map").read_text() == HEADER + "Gg, Gg\nGg\n"
    assert (tmp_path / "debug" / "000_prepared.png").is_file()


def test_toml_settings_are_used(tmp_path, write_png, scenario_raster):
    write_png("scenario.png", scenario_raster)
    (tmp_path / "tiles.dat").write_text("ff0000 Mm\n")
    (tmp_path / "hexconv.toml").write_text(
        '[io]\ninput = "scenario.png"\noutput = "from_toml.map"\n'
        '[grid]\npitch = [32, 34]\noffset = [16, 17]\n'
    )

    assert main([]) == 0
    assert (tmp_path / "from_toml.map").read_text() == HEADER + "Mm, Gg\nGg\n"


def test_no_input_prints_help(capsys):
    assert main([]) == 1
    assert "usage: hexconv" in capsys.readouterr().err


def test_non_numeric_pitch_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["map.png", "-t", "wide", "34"])
    assert exc.value.code == 2
    assert "expected an integer" in capsys.readouterr().err


def test_invalid_values_exit_non_zero(tmp_path, capsys):
    assert main(["map.png", "-t", "0", "34"]) == 1
    assert "pitch_x must be positive" in capsys.readouterr().err
    assert not (tmp_path / "map").exists()


def test_missing_image_reports_error(tmp_path, capsys):
    (tmp_path / "tiles.dat").write_text("ff0000 Gg\n")
    assert main(["missing.png"]) == 1
    assert "Could not load image" in capsys.readouterr().err
    assert not (tmp_path / "map").exists()


def test_bad_delimiter_in_table_is_fatal(tmp_path, write_png, scenario_raster):
    image = write_png("scenario.png", scenario_raster)
    (tmp_path / "tiles.tsv").write_text("hex\tcode\nff0000\tG,g\n")
    assert main([str(image), "-d", "tiles.tsv"]) == 1
    assert not (tmp_path / "map").exists()
