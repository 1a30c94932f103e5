import pytest

import fastdd.model.main as driver
from fastdd.model.main import main, dump_lines, DEFAULT_CASES
from fastdd.model.voseAlias import voseAlias


def test_Test_counts_every_sample(capsys):
    counts = driver.Test([20, 10, 30], 600, seed=1)
    assert sum(counts) == 600
    assert len(counts) == 3

    out = capsys.readouterr().out
    assert "buckets.size() = 3" in out
    assert "counts:" in out
    assert "1 (10) : " in out
    assert "taken for {Test}" in out


def test_Test_never_counts_zero_weights(capsys):
    counts = driver.Test([1, 0, 2], 3000, seed=0, quiet=True)
    assert counts[1] == 0
    assert "counts:" not in capsys.readouterr().out


def test_TestEmpty_refuses_every_sample(capsys):
    assert driver.TestEmpty(25) == 25
    assert "buckets.size() = 0" in capsys.readouterr().out


def test_dump_lines():
    lines = dump_lines(voseAlias([1]))
    assert lines == ["buckets.size() = 1", "0  0  0  "]


def test_main_with_weights(capsys):
    assert main(["--weights", "1,1,2", "--num_samples", "90", "--quiet"]) == 0
    out = capsys.readouterr().out
    assert "-> weights: [1.0, 1.0, 2.0]" in out


def test_main_default_battery(capsys):
    assert main(["--num_samples", "30", "--quiet"]) == 0
    out = capsys.readouterr().out
    assert "-> empty distribution" in out
    assert "rejected: total weight of 1 outcomes is zero" in out
    assert out.count("-> weights:") == len(DEFAULT_CASES)


def test_main_empty_weights(capsys):
    assert main(["--weights", "", "--num_samples", "10"]) == 0
    assert "empty distribution refused 10 samples" in capsys.readouterr().out


def test_main_writes_dump(tmp_path, capsys):
    dump_path = tmp_path / "out" / "dump.txt"
    assert main(["--weights", "3,1", "--num_samples", "50", "--dump_path", str(dump_path)]) == 0
    lines = dump_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "buckets.size() = 2"
    assert "counts:" in lines


def test_main_reads_weights_file(tmp_path, capsys):
    path = tmp_path / "weights.txt"
    path.write_text("# weights\n1\n\n2\n", encoding="utf-8")
    assert main(["--weights_path", str(path), "--num_samples", "30", "--quiet"]) == 0
    assert "-> weights: [1.0, 2.0]" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [
    ["--weights", "1,-1"],
    ["--weights", "0,0"],
    ["--weights", "1,abc"],
    ["--weights", "1", "--weights_path", "w.txt"],
    ["--weights_path", "does/not/exist.txt"],
    ["--num_samples", "-5"],
])
def test_main_rejects_bad_input(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2
