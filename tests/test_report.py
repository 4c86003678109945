import pytest

from flowcomp.report import main, summarize


def write_csv(path, rows):
    path.write_text("line,old_e,new_e,length_mm,multiplier\n" + "".join(r + "\n" for r in rows),
                    encoding="utf-8")
    return path


def test_summarize(tmp_path):
    path = write_csv(tmp_path / "adj.csv", [
        "3,1.0,0.61680,3.00000,0.616800",
        "7,0.5,0.40000,4.00000,0.800000",
    ])
    stats = summarize(path)
    assert stats["adjusted_lines"] == 2
    assert stats["total_old_e"] == 1.5
    assert stats["total_new_e"] == pytest.approx(1.0168)
    assert stats["e_removed"] == pytest.approx(0.4832)
    assert stats["min_multiplier"] == pytest.approx(0.6168)
    assert stats["max_multiplier"] == pytest.approx(0.8)
    assert stats["mean_length_mm"] == pytest.approx(3.5)


def test_summarize_empty(tmp_path):
    stats = summarize(write_csv(tmp_path / "adj.csv", []))
    assert stats["adjusted_lines"] == 0
    assert stats["e_removed"] == 0.0


def test_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        summarize(path)


def test_main(tmp_path, capsys):
    path = write_csv(tmp_path / "adj.csv", ["3,1.0,0.61680,3.00000,0.616800"])
    assert main([str(path)]) == 0
    assert "adjusted_lines: 1" in capsys.readouterr().out
    assert main([str(tmp_path / "missing.csv")]) == 1
