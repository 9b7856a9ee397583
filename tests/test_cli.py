import json
from pathlib import Path

from typer.testing import CliRunner

from recovery.cli import USAGE, app, split_app

runner = CliRunner()


def test_reconstruct(document_path: Path, tmp_path: Path):
    output = tmp_path / "out.txt"
    result = runner.invoke(app, [str(document_path), str(output)])
    assert result.exit_code == 0
    assert f"Done. Output written to {output}" in result.output
    assert output.read_text().splitlines() == [
        "Reconstructed Secret: 3",
        "Corrupted Shares: [5]",
    ]


def test_reconstruct_with_workers(document_path: Path, tmp_path: Path):
    output = tmp_path / "out.txt"
    result = runner.invoke(
        app,
        [str(document_path), str(output), "--workers", "2", "--truncate"],
    )
    assert result.exit_code == 0
    assert "Reconstructed Secret: 3" in output.read_text()


def test_reconstruct_missing_arguments_prints_usage(document_path: Path):
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert USAGE in result.output

    result = runner.invoke(app, [str(document_path)])
    assert result.exit_code == 0
    assert USAGE in result.output


def test_reconstruct_malformed_document(tmp_path: Path):
    document = tmp_path / "bad.json"
    document.write_text('{"1": {"base": "10", "value": "6"}}')
    output = tmp_path / "out.txt"
    result = runner.invoke(app, [str(document), str(output)])
    assert result.exit_code == 1
    assert not output.exists()


def test_reconstruct_no_consistent_secret(tmp_path: Path):
    document = tmp_path / "dup.json"
    document.write_text(
        '{"keys": {"n": 2, "k": 2}, "1": {"base": "10", "value": "6"}, '
        '"01": {"base": "10", "value": "8"}}'
    )
    output = tmp_path / "out.txt"
    result = runner.invoke(app, [str(document), str(output)])
    assert result.exit_code == 1
    assert not output.exists()


def test_tie_break_from_environment(tmp_path: Path):
    document = tmp_path / "tie.json"
    document.write_text(
        '{"keys": {"n": 2, "k": 1}, "1": {"base": "10", "value": "9"}, '
        '"2": {"base": "10", "value": "4"}}'
    )
    output = tmp_path / "out.txt"
    result = runner.invoke(
        app,
        [str(document), str(output)],
        env={"RECOVERY_TIE_BREAK": "smallest"},
    )
    assert result.exit_code == 0
    assert output.read_text().splitlines() == [
        "Reconstructed Secret: 4",
        "Corrupted Shares: [1]",
    ]


def test_split_then_reconstruct(tmp_path: Path):
    document = tmp_path / "shares.json"
    output = tmp_path / "out.txt"
    result = runner.invoke(
        split_app,
        [
            "--secret", "1234567",
            "--total-shares", "6",
            "--threshold", "3",
            "--base", "16",
            "--corrupt", "2",
            "--output", str(document),
        ],
    )
    assert result.exit_code == 0
    result = runner.invoke(app, [str(document), str(output)])
    assert result.exit_code == 0
    assert output.read_text().splitlines() == [
        "Reconstructed Secret: 1234567",
        "Corrupted Shares: [2]",
    ]


def test_split_invalid_threshold(tmp_path: Path):
    result = runner.invoke(
        split_app,
        [
            "--secret", "1",
            "--total-shares", "2",
            "--threshold", "3",
            "--output", str(tmp_path / "shares.json"),
        ],
    )
    assert result.exit_code == 1


def test_reconstruct_unwritable_output(document_path: Path, tmp_path: Path):
    output = tmp_path / "missing" / "out.txt"
    result = runner.invoke(app, [str(document_path), str(output)])
    assert result.exit_code == 1
    assert not output.exists()


def test_reconstruct_huge_secret(tmp_path: Path):
    # f(x) = 10^5000 + 3x, share 4 corrupted
    secret = 10**5000
    values = [secret + 3, secret + 6, secret + 9, secret + 13]
    document = {"keys": {"n": 4, "k": 2}}
    for x, value in enumerate(values, start=1):
        document[str(x)] = {"base": "10", "value": str(value)}
    path = tmp_path / "huge.json"
    path.write_text(json.dumps(document))
    output = tmp_path / "out.txt"
    result = runner.invoke(app, [str(path), str(output)])
    assert result.exit_code == 0
    assert output.read_text().splitlines() == [
        f"Reconstructed Secret: {secret}",
        "Corrupted Shares: [4]",
    ]
