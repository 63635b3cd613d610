import json

from deadtime.cli import main


def test_malformed_max_limit_is_fatal(capsys):
    assert main(["abc"]) == 2
    out = capsys.readouterr().out
    assert out.startswith("Error:")
    assert "Buffer size" not in out


def test_malformed_min_limit_is_fatal(capsys):
    assert main(["3", "x1"]) == 2
    assert "min_limit" in capsys.readouterr().out


def test_inverted_range_is_fatal(capsys):
    assert main(["1", "3", "--max-event", "100"]) == 2
    assert "Error:" in capsys.readouterr().out


def test_table_output(capsys):
    code = main(["3", "1", "--max-event", "5000", "--seed", "4", "--workers", "1"])
    assert code == 0
    out = capsys.readouterr().out
    lines = [line for line in out.replace("\r", "\n").splitlines() if line]
    assert "Finished 100.00%." in lines
    assert "Finished all computations. Will now output results below:" in lines
    rows = [line for line in lines if line.startswith("Buffer size")]
    assert [row.split()[2] for row in rows] == ["1", "2", "3"]
    assert rows[0].endswith("%")
    assert " +- " in rows[0]
    assert lines[-1].startswith("Time for calculations: ")


def test_json_output(capsys):
    code = main(["2", "--max-event", "2000", "--seed", "1", "--workers", "2", "--json"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [row["limit"] for row in payload["results"]] == [0, 1, 2]
    assert all(row["ticks"] == 2000 for row in payload["results"])


def test_underscored_limit_is_fatal(capsys):
    assert main(["1_0"]) == 2
    assert capsys.readouterr().out.startswith("Error:")


def test_process_and_thread_pools_agree(capsys):
    code = main(["2", "--max-event", "3000", "--seed", "6", "--workers", "2", "--json"])
    assert code == 0
    from_processes = json.loads(capsys.readouterr().out)
    code = main(["2", "--max-event", "3000", "--seed", "6", "--workers", "2", "--json", "--threads"])
    assert code == 0
    from_threads = json.loads(capsys.readouterr().out)
    assert [r["triggers_lost"] for r in from_processes["results"]] == [
        r["triggers_lost"] for r in from_threads["results"]
    ]
