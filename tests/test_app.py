import pytest

from cubcaster.app import USAGE, check_arguments, main
from cubcaster.core import CubError


@pytest.mark.parametrize("path", ["map.cub", ".cub", "maps/level.one.cub"])
def test_check_arguments_accepts_cub_files(path):
    assert check_arguments([path]) == path


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["a.cub", "b.cub"],
        ["map.txt"],
        ["map"],
        ["map.cub.bak"],
        ["map.cubx"],
        ["dir.cub/map"],
    ],
)
def test_check_arguments_rejects_bad_input(argv):
    with pytest.raises(CubError) as info:
        check_arguments(argv)
    assert str(info.value) == USAGE


def test_main_prints_usage_on_bad_arguments(capsys):
    assert main([]) == 1
    assert USAGE in capsys.readouterr().err


def test_main_rejects_wrong_extension(capsys):
    assert main(["scene.txt"]) == 1
    assert USAGE in capsys.readouterr().err


def test_main_reports_missing_file(tmp_path, capsys):
    status = main([str(tmp_path / "missing.cub")])
    assert status == 1
    assert capsys.readouterr().err.startswith("Error\n")


def test_main_reports_incomplete_scene(tmp_path, capsys):
    scene = tmp_path / "empty.cub"
    scene.write_text("")
    assert main([str(scene)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error\n")
    assert "missing" in err


def test_main_reports_bad_scene_line(tmp_path, capsys):
    scene = tmp_path / "bad.cub"
    scene.write_text("XX something\n")
    assert main([str(scene)]) == 1
    assert capsys.readouterr().err.startswith("Error\n")