"""
Tests for the command line frontend.
"""

import json

import pytest

from job_match_ai import __version__
from job_match_ai.app import main


def read_json(output: str) -> dict:
    """The payload is the last thing printed; log lines may precede it."""
    return json.loads(output[output.index("{\n"):])


class TestCli:
    """Test subcommands against a JSON store file."""

    def test_version(self, capsys):
        main(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_score(self, store_file, capsys):
        main(["--data", str(store_file), "score", "--job-id", "j-manchester", "--candidate-id", "c-commuter"])
        payload = read_json(capsys.readouterr().out)
        assert payload["matchPercentage"] == 100
        assert payload["distanceKm"] == 0
        assert payload["matchDetails"]["skillsMatch"] == 1.0

    def test_candidates(self, store_file, capsys):
        main(["--data", str(store_file), "candidates", "--job-id", "job-1", "-k", "2"])
        payload = read_json(capsys.readouterr().out)
        assert payload["total"] == 2
        assert payload["matchingCandidates"][0]["candidate"]["id"] == "c-full"

    def test_jobs_with_distance(self, store_file, capsys):
        main(["--data", str(store_file), "jobs", "--candidate-id", "c-local", "--max-distance", "50"])
        payload = read_json(capsys.readouterr().out)
        found = [m["job"]["id"] for m in payload["matchingJobs"]]
        assert "j-manchester" not in found
        assert "j-london" in found

    def test_nearby(self, store_file, capsys):
        main(["--data", str(store_file), "nearby", "--lat", "53.4808", "--lon", "-2.2426", "--max-distance", "10"])
        payload = read_json(capsys.readouterr().out)
        assert [j["id"] for j in payload["nearbyJobs"]] == ["j-manchester"]
        assert payload["filters"]["maxDistanceKm"] == 10

    def test_unknown_id_exits_with_error(self, store_file, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--data", str(store_file), "candidates", "--job-id", "missing"])
        assert exc.value.code == 2
        assert "missing" in capsys.readouterr().err

    def test_invalid_k_exits_with_error(self, store_file):
        with pytest.raises(SystemExit) as exc:
            main(["--data", str(store_file), "candidates", "--job-id", "job-1", "-k", "0"])
        assert exc.value.code == 2

    def test_missing_data_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--data", str(tmp_path / "none.json"), "score", "--job-id", "a", "--candidate-id", "b"])
        assert "not found" in str(exc.value.code)

    def test_corrupt_data_file_exits_with_error(self, tmp_path, capsys):
        path = tmp_path / "store.json"
        path.write_text('{"jobs": [{"id": "j1",')
        with pytest.raises(SystemExit) as exc:
            main(["--data", str(path), "score", "--job-id", "j1", "--candidate-id", "c1"])
        assert exc.value.code == 2
        assert "Could not read store file" in capsys.readouterr().err
