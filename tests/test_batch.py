import pytest
from PIL import Image

from qrgen.batch import iter_batch_lines, process_batch
from qrgen.errors import InvalidInput
from qrgen.tables import ErrorCorrectionLevel


def test_iter_batch_lines_skips_comments_and_blanks():
    lines = ["# header\n", "\n", "  first  \n", "   \n", "#second\n", "second\n"]
    assert list(iter_batch_lines(lines)) == ["first", "second"]


def test_process_batch(tmp_path):
    batch_file = tmp_path / "urls.txt"
    batch_file.write_text(
        "# links\n"
        "https://example.com\n"
        "\n"
        + "x" * 3000 + "\n"
        "HELLO\n",
        encoding="utf-8",
    )
    out_dir = tmp_path / "out"

    results = process_batch(batch_file, out_dir, 128, ErrorCorrectionLevel.LOW)

    assert [result.line_number for result in results] == [1, 2, 3]
    assert [result.ok for result in results] == [True, False, True]
    assert results[1].error
    assert (out_dir / "batch_1.png").exists()
    assert not (out_dir / "batch_2.png").exists()
    assert results[2].output == out_dir / "batch_3.png"
    with Image.open(results[2].output) as img:
        assert img.size == (128, 128)


def test_process_batch_keeps_going_when_every_line_fails(tmp_path):
    batch_file = tmp_path / "lines.txt"
    batch_file.write_text("one\ntwo\n", encoding="utf-8")
    results = process_batch(batch_file, tmp_path, 1)
    assert len(results) == 2
    assert not any(result.ok for result in results)


def test_missing_batch_file(tmp_path):
    with pytest.raises(InvalidInput):
        process_batch(tmp_path / "nope.txt", tmp_path)


def test_existing_batch_file_is_kept_when_overwrite_declined(tmp_path, monkeypatch):
    batch_file = tmp_path / "lines.txt"
    batch_file.write_text("first\nsecond\n", encoding="utf-8")
    existing = tmp_path / "batch_1.png"
    existing.write_bytes(b"precious")
    prompts = []

    def decline(prompt):
        prompts.append(prompt)
        return "n"

    monkeypatch.setattr("builtins.input", decline)
    results = process_batch(batch_file, tmp_path, 128)

    assert len(prompts) == 1
    assert "batch_1.png" in prompts[0]
    assert existing.read_bytes() == b"precious"
    assert [result.ok for result in results] == [False, True]
    assert "cancelled" in results[0].error
    assert (tmp_path / "batch_2.png").exists()


def test_force_overwrites_batch_files_without_asking(tmp_path, monkeypatch):
    batch_file = tmp_path / "lines.txt"
    batch_file.write_text("first\n", encoding="utf-8")
    existing = tmp_path / "batch_1.png"
    existing.write_bytes(b"old")

    def fail(prompt):
        raise AssertionError("unexpected prompt")

    monkeypatch.setattr("builtins.input", fail)
    results = process_batch(batch_file, tmp_path, 128, force=True)

    assert results[0].ok
    assert existing.read_bytes()[:4] == b"\x89PNG"
